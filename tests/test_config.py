"""Tests for YAML settings and router config validation."""

import pytest

from tierroute.config import (
    RouterConfig,
    RouterSettings,
    build_router_config,
    load_settings,
    save_settings,
)
from tierroute.controller import create_router_from_settings
from tierroute.errors import RouterConfigError
from tierroute.models import BEDROCK_ROUTING_PAIRS, BedrockPreset
from tierroute.routing import HybridRouter
from tierroute.types import ModelTier, RouterType


# ── Fixtures ──────────────────────────────────────────────────

@pytest.fixture
def config_file(tmp_path):
    """Write YAML text to a temp config.yaml and return its path."""
    path = tmp_path / "config.yaml"

    def write(text: str):
        path.write_text(text)
        return path

    return write


class TestLoadSettings:

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.yaml")
        assert settings.endpoint == "bedrock"
        assert settings.preset is None
        assert settings.threshold == 0.5
        assert settings.router_type == RouterType.RULE_BASED
        assert settings.resolve_models() == BEDROCK_ROUTING_PAIRS[BedrockPreset.COST_OPTIMIZED]

    def test_empty_file_uses_defaults(self, config_file):
        assert load_settings(config_file("")) == RouterSettings()

    def test_preset(self, config_file):
        path = config_file("endpoint: bedrock\npreset: premium\nthreshold: 0.3\n")
        controller = create_router_from_settings(load_settings(path))
        assert controller.get_model_pair() == BEDROCK_ROUTING_PAIRS[BedrockPreset.PREMIUM]
        assert controller.threshold == 0.3

    def test_explicit_models(self, config_file):
        path = config_file(
            "endpoint: my-gateway\n"
            "models:\n"
            "  expert: big\n"
            "  complex: big\n"
            "  moderate: mid\n"
            "  simple: small\n"
            "  trivial: tiny\n"
        )
        controller = create_router_from_settings(load_settings(path))
        assert controller.get_config().endpoint == "my-gateway"
        result = controller.route("Hello")
        assert result.tier == ModelTier.TRIVIAL
        assert result.model == "tiny"
        assert result.estimated_cost is None

    def test_hybrid_router_type(self, config_file):
        path = config_file("router_type: hybrid\n")
        controller = create_router_from_settings(load_settings(path))
        assert isinstance(controller.router, HybridRouter)

    def test_endpoint_without_presets(self, config_file):
        settings = load_settings(config_file("endpoint: my-gateway\n"))
        with pytest.raises(RouterConfigError) as exc_info:
            settings.resolve_models()
        assert exc_info.value.field == "models"

    def test_unknown_preset(self, config_file):
        settings = load_settings(config_file("endpoint: openai\npreset: premium-plus\n"))
        with pytest.raises(RouterConfigError):
            create_router_from_settings(settings)

    def test_invalid_yaml(self, config_file):
        with pytest.raises(RouterConfigError, match="Could not parse"):
            load_settings(config_file("endpoint: [unclosed\n"))

    def test_not_a_mapping(self, config_file):
        with pytest.raises(RouterConfigError, match="must contain a mapping"):
            load_settings(config_file("- bedrock\n- openai\n"))

    def test_threshold_out_of_range(self, config_file):
        with pytest.raises(RouterConfigError) as exc_info:
            load_settings(config_file("threshold: 2\n"))
        assert exc_info.value.field == "threshold"

    def test_unknown_router_type(self, config_file):
        with pytest.raises(RouterConfigError):
            load_settings(config_file("router_type: embedding\n"))

    def test_incomplete_models(self, config_file):
        with pytest.raises(RouterConfigError):
            load_settings(config_file("endpoint: x\nmodels:\n  expert: big\n"))


class TestSaveSettings:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        settings = RouterSettings(endpoint="openai", preset="economy", threshold=0.4, debug=True)

        written = save_settings(settings, path)

        assert written == path
        assert load_settings(path) == settings

    def test_round_trip_with_models(self, tmp_path):
        path = tmp_path / "config.yaml"
        settings = RouterSettings(
            endpoint="gateway",
            models={"expert": "a", "complex": "b", "moderate": "c", "simple": "d", "trivial": "e"},
            router_type="random",
        )
        save_settings(settings, path)
        loaded = load_settings(path)
        assert loaded.models == settings.models
        assert loaded.router_type == RouterType.RANDOM
        assert "preset" not in path.read_text()


class TestBuildRouterConfig:

    def test_passthrough(self):
        config = RouterSettings().to_router_config()
        assert build_router_config(config) is config

    def test_from_mapping(self):
        config = build_router_config({
            "endpoint": "x",
            "models": {"expert": "a", "complex": "b", "moderate": "c", "simple": "d", "trivial": "e"},
            "routerType": "hybrid",
            "debug": True,
        })
        assert isinstance(config, RouterConfig)
        assert config.router_type == RouterType.HYBRID
        assert config.models.moderate == "c"
        assert config.threshold == 0.5

    def test_missing_models(self):
        with pytest.raises(RouterConfigError) as exc_info:
            build_router_config({"endpoint": "x"})
        assert exc_info.value.field == "models"

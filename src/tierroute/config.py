"""Router configuration.

Two layers:
- RouterConfig: what a controller needs (endpoint, five-tier models,
  threshold, router type, debug flag). Validated with pydantic.
- RouterSettings: what a user writes in ~/.tierroute/config.yaml,
  either a provider preset or an explicit model mapping.

Example config.yaml:

    endpoint: bedrock
    preset: premium
    threshold: 0.5
    router_type: rule-based
    debug: false

or with explicit models:

    endpoint: my-gateway
    models:
      expert: big-model
      complex: big-model
      moderate: mid-model
      simple: small-model
      trivial: tiny-model
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from tierroute.errors import RouterConfigError
from tierroute.types import ModelPair, RouterType

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".tierroute" / "config.yaml"

DEFAULT_THRESHOLD = 0.5
DEFAULT_ROUTER_TYPE = RouterType.RULE_BASED


class RouterConfig(BaseModel):
    """Resolved configuration of one routing controller."""
    endpoint: str
    models: ModelPair
    threshold: float = Field(DEFAULT_THRESHOLD, ge=0.0, le=1.0)
    router_type: RouterType = DEFAULT_ROUTER_TYPE
    debug: bool = False


class RouterSettings(BaseModel):
    """User-facing settings, usually loaded from YAML."""
    endpoint: str = "bedrock"
    preset: str | None = None
    models: ModelPair | None = None
    threshold: float = Field(DEFAULT_THRESHOLD, ge=0.0, le=1.0)
    router_type: RouterType = DEFAULT_ROUTER_TYPE
    debug: bool = False
    random_bias: float = Field(0.5, ge=0.0, le=1.0)

    def resolve_models(self) -> ModelPair:
        """Explicit models win; otherwise the endpoint's preset."""
        if self.models is not None:
            return self.models

        from tierroute.models import get_bedrock_routing_pair, get_openai_routing_pair

        if self.endpoint == "bedrock":
            return get_bedrock_routing_pair(self.preset or "costOptimized")
        if self.endpoint == "openai":
            return get_openai_routing_pair(self.preset or "standard")
        raise RouterConfigError(
            f"Endpoint {self.endpoint!r} has no presets; configure models explicitly",
            field="models",
        )

    def to_router_config(self) -> RouterConfig:
        return RouterConfig(
            endpoint=self.endpoint,
            models=self.resolve_models(),
            threshold=self.threshold,
            router_type=self.router_type,
            debug=self.debug,
        )


def _first_error_field(exc: ValidationError) -> str | None:
    errors = exc.errors()
    if errors and errors[0].get("loc"):
        return ".".join(str(part) for part in errors[0]["loc"])
    return None


def build_router_config(data: RouterConfig | dict[str, Any]) -> RouterConfig:
    """Validate a config mapping, raising RouterConfigError on bad input.

    Accepts the camelCase ``routerType`` key as well.
    """
    if isinstance(data, RouterConfig):
        return data
    data = dict(data)
    if "routerType" in data:
        data["router_type"] = data.pop("routerType")
    try:
        return RouterConfig.model_validate(data)
    except ValidationError as e:
        raise RouterConfigError(
            f"Invalid router config: {e.errors()[0]['msg']}",
            field=_first_error_field(e),
        ) from e


def load_settings(path: Path | None = None) -> RouterSettings:
    """Load settings from YAML; a missing file yields the defaults."""
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.debug(f"No config at {config_path}, using defaults")
        return RouterSettings()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise RouterConfigError(f"Could not parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise RouterConfigError(f"{config_path} must contain a mapping")

    try:
        settings = RouterSettings.model_validate(data)
    except ValidationError as e:
        raise RouterConfigError(
            f"Invalid settings in {config_path}: {e.errors()[0]['msg']}",
            field=_first_error_field(e),
        ) from e

    logger.debug(f"Loaded routing settings from {config_path}")
    return settings


def save_settings(settings: RouterSettings, path: Path | None = None) -> Path:
    """Write settings back to YAML."""
    config_path = path or DEFAULT_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.safe_dump(settings.model_dump(mode="json", exclude_none=True), f, sort_keys=False)
    return config_path

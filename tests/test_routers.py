"""Tests for the random and hybrid routers and the router factory."""

import pytest

from tierroute.errors import RouterConfigError
from tierroute.routing import (
    HybridRouter,
    RandomRouter,
    Router,
    RouterWeight,
    RuleBasedRouter,
    create_equal_weight_hybrid,
    create_router,
)
from tierroute.types import ModelPair, ReasonCategory, RouterType, RoutingContext, UserPreference


class FixedRouter(Router):
    """Always returns the same score."""

    name = "fixed"

    def __init__(self, score: float):
        self.score = score

    def calculate_strong_win_rate(self, prompt, context=None):
        return self.score


PROMPTS = [
    "Hello",
    "Write a Python function to sort a list of dictionaries by a specific key",
    "Explain the trade-offs between microservices and monolithic architecture",
    "Write a short story about a robot learning to feel emotions",
    "",
]


# ── Fixtures ──────────────────────────────────────────────────

@pytest.fixture
def model_pair():
    return ModelPair(
        expert="e", complex="c", moderate="m", simple="s", trivial="t",
    )


# ═══════════════════════════════════════════════════════════════
# RandomRouter
# ═══════════════════════════════════════════════════════════════

class TestRandomRouter:

    def test_scores_in_bands(self):
        """Scores land in [0, 0.4) or [0.6, 1.0), never between."""
        router = RandomRouter(seed=42)
        for _ in range(500):
            score = router.calculate_strong_win_rate("anything")
            assert 0.0 <= score < 0.4 or 0.6 <= score < 1.0

    def test_full_bias(self):
        router = RandomRouter(bias=1.0, seed=1)
        assert all(router.calculate_strong_win_rate("x") >= 0.6 for _ in range(100))

    def test_zero_bias(self):
        router = RandomRouter(bias=0.0, seed=1)
        assert all(router.calculate_strong_win_rate("x") < 0.4 for _ in range(100))

    def test_bias_is_clamped(self):
        assert RandomRouter(bias=5).bias == 1.0
        assert RandomRouter(bias=-1).bias == 0.0

    def test_seed_is_reproducible(self):
        a = RandomRouter(seed=7)
        b = RandomRouter(seed=7)
        assert [a.calculate_strong_win_rate("x") for _ in range(10)] == \
            [b.calculate_strong_win_rate("x") for _ in range(10)]

    def test_not_parallel_safe(self):
        assert RandomRouter.parallel_safe is False

    def test_reason_is_random(self, model_pair):
        """Even an explicit preference does not change the reason."""
        result = RandomRouter(seed=3).route(
            "Hello", 0.5, model_pair,
            RoutingContext(user_preference=UserPreference.QUALITY),
        )
        assert result.reason_category == ReasonCategory.RANDOM
        assert result.reason == "Random selection for A/B testing"


# ═══════════════════════════════════════════════════════════════
# HybridRouter
# ═══════════════════════════════════════════════════════════════

class TestHybridRouter:

    @pytest.mark.parametrize("prompt", PROMPTS)
    def test_equal_weight_of_identical_routers(self, prompt):
        """Averaging identical scores is a no-op."""
        single = RuleBasedRouter()
        hybrid = create_equal_weight_hybrid([RuleBasedRouter(), RuleBasedRouter()])
        assert hybrid.calculate_strong_win_rate(prompt) == pytest.approx(
            single.calculate_strong_win_rate(prompt))

    def test_weighted_mean(self):
        """Weights are normalized by their sum."""
        hybrid = HybridRouter([
            RouterWeight(FixedRouter(0.8), 3),
            RouterWeight(FixedRouter(0.4), 1),
        ])
        assert hybrid.calculate_strong_win_rate("x") == pytest.approx(0.7)

    def test_parallel_safe_is_conjunction(self):
        safe = HybridRouter([RouterWeight(RuleBasedRouter(), 1)])
        unsafe = create_equal_weight_hybrid([RuleBasedRouter(), RandomRouter(seed=1)])
        assert safe.parallel_safe is True
        assert unsafe.parallel_safe is False

    def test_context_passed_to_children(self):
        hybrid = create_equal_weight_hybrid([RuleBasedRouter()])
        context = RoutingContext(user_preference=UserPreference.QUALITY)
        assert hybrid.calculate_strong_win_rate("Hello", context) == pytest.approx(0.7)

    def test_empty_rejected(self):
        with pytest.raises(RouterConfigError):
            HybridRouter([])
        with pytest.raises(RouterConfigError):
            create_equal_weight_hybrid([])

    def test_non_positive_weights_rejected(self):
        with pytest.raises(RouterConfigError):
            HybridRouter([RouterWeight(FixedRouter(0.5), 0)])

    def test_negative_weight_rejected(self):
        """A negative weight could push the mean outside [0, 1]."""
        with pytest.raises(RouterConfigError, match="negative"):
            HybridRouter([
                RouterWeight(RuleBasedRouter(), 2),
                RouterWeight(RandomRouter(bias=1.0, seed=1), -1.5),
            ])


# ═══════════════════════════════════════════════════════════════
# Factory
# ═══════════════════════════════════════════════════════════════

class TestCreateRouter:

    def test_default_is_rule_based(self):
        assert isinstance(create_router(), RuleBasedRouter)

    def test_by_name(self):
        assert isinstance(create_router("rule-based"), RuleBasedRouter)
        assert isinstance(create_router(RouterType.RANDOM), RandomRouter)

    def test_options_passed_through(self):
        router = create_router("random", bias=1.0, seed=9)
        assert router.bias == 1.0

    def test_bare_hybrid(self):
        router = create_router("hybrid")
        assert isinstance(router, HybridRouter)
        assert router.calculate_strong_win_rate("Hello") == 0.0

    @pytest.mark.parametrize("name", ["embedding", "classifier", "nonsense"])
    def test_unknown_type(self, name):
        with pytest.raises(RouterConfigError) as exc_info:
            create_router(name)
        assert exc_info.value.field == "router_type"

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            create_router("nonsense")


class TestRouterRange:

    @pytest.mark.parametrize("router", [
        RuleBasedRouter(),
        RandomRouter(seed=11),
        create_equal_weight_hybrid([RuleBasedRouter(), RandomRouter(seed=12)]),
    ], ids=["rule-based", "random", "hybrid"])
    def test_every_router_stays_in_range(self, router):
        for prompt in PROMPTS:
            assert 0.0 <= router.calculate_strong_win_rate(prompt) <= 1.0

    def test_repr(self):
        assert "RuleBasedRouter" in repr(RuleBasedRouter())

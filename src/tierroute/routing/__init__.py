"""Complexity routers.

Every router scores a prompt in [0, 1]; the shared base class maps
that score onto the five model tiers.

- RuleBasedRouter: local regex heuristics, deterministic
- RandomRouter: biased coin, for A/B baselines
- HybridRouter: weighted average of other routers
"""

from tierroute.errors import RouterConfigError
from tierroute.types import RouterType
from tierroute.routing.base import Router, calculate_confidence, select_tier
from tierroute.routing.features import extract_features
from tierroute.routing.hybrid import HybridRouter, RouterWeight, create_equal_weight_hybrid
from tierroute.routing.random_router import RandomRouter
from tierroute.routing.rule_based import RuleBasedRouter

ROUTER_REGISTRY: dict[RouterType, type[Router]] = {
    RouterType.RULE_BASED: RuleBasedRouter,
    RouterType.RANDOM: RandomRouter,
    RouterType.HYBRID: HybridRouter,
}


def create_router(router_type: RouterType | str = RouterType.RULE_BASED, **options) -> Router:
    """Build a router by type name.

    A bare "hybrid" wraps a single rule-based router. Options are
    passed to the router class (e.g. ``bias`` for "random").
    """
    try:
        kind = RouterType(router_type)
    except ValueError:
        known = ", ".join(t.value for t in RouterType)
        raise RouterConfigError(
            f"Unknown router type: {router_type!r} (expected one of: {known})",
            field="router_type",
        ) from None

    if kind == RouterType.HYBRID and "routers" not in options:
        return create_equal_weight_hybrid([RuleBasedRouter()])
    return ROUTER_REGISTRY[kind](**options)


__all__ = [
    "Router",
    "RuleBasedRouter",
    "RandomRouter",
    "HybridRouter",
    "RouterWeight",
    "ROUTER_REGISTRY",
    "create_equal_weight_hybrid",
    "create_router",
    "extract_features",
    "select_tier",
    "calculate_confidence",
]

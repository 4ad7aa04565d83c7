"""Hybrid router: weighted average over other routers."""

from dataclasses import dataclass

from tierroute.errors import RouterConfigError
from tierroute.types import RoutingContext
from tierroute.routing.base import Router


@dataclass(frozen=True)
class RouterWeight:
    router: Router
    weight: float


class HybridRouter(Router):
    """Combines several routers into one score.

    The score is the weighted mean of the children's scores. Weights
    must be non-negative but need not sum to 1. Parallel safe only if
    every child is.
    """

    name = "hybrid"

    def __init__(self, routers: list[RouterWeight]):
        if not routers:
            raise RouterConfigError("Hybrid router needs at least one child router")
        if any(r.weight < 0 for r in routers):
            raise RouterConfigError("Hybrid router weights must not be negative")
        total_weight = sum(r.weight for r in routers)
        if total_weight <= 0:
            raise RouterConfigError("Hybrid router weights must sum to a positive value")

        self.routers = list(routers)
        self.total_weight = total_weight
        self.parallel_safe = all(r.router.parallel_safe for r in routers)

    def calculate_strong_win_rate(
        self,
        prompt: str,
        context: RoutingContext | None = None,
    ) -> float:
        weighted_sum = sum(
            r.router.calculate_strong_win_rate(prompt, context) * r.weight
            for r in self.routers
        )
        return weighted_sum / self.total_weight


def create_equal_weight_hybrid(routers: list[Router]) -> HybridRouter:
    """Hybrid router giving every child the same weight."""
    if not routers:
        raise RouterConfigError("Hybrid router needs at least one child router")
    weight = 1 / len(routers)
    return HybridRouter([RouterWeight(router, weight) for router in routers])

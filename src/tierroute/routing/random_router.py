"""Random router for A/B testing baselines."""

import random

from tierroute.types import ReasonCategory, RoutingContext
from tierroute.routing.base import Router


class RandomRouter(Router):
    """Ignores the prompt and draws a biased random score.

    With probability ``bias`` the score lands in [0.6, 1.0), otherwise
    in [0.0, 0.4). Not parallel safe: draws share one generator.
    """

    name = "random"
    parallel_safe = False

    def __init__(self, bias: float = 0.5, seed: int | None = None):
        self.bias = max(0.0, min(1.0, bias))
        self._rng = random.Random(seed)

    def calculate_strong_win_rate(
        self,
        prompt: str,
        context: RoutingContext | None = None,
    ) -> float:
        if self._rng.random() < self.bias:
            return 0.6 + self._rng.random() * 0.4
        return self._rng.random() * 0.4

    def routing_reason(
        self,
        score: float,
        threshold: float,
        prompt: str,
        context: RoutingContext | None = None,
    ) -> tuple[str, ReasonCategory]:
        return "Random selection for A/B testing", ReasonCategory.RANDOM

"""Router base class.

A router only has to answer one question: how likely is it that a
strong model is needed for this prompt? Tier selection, confidence
and the default routing reason are shared and built on top of that.

Tier breakpoints (score → tier, first match wins):

    0.80+       expert    advanced reasoning, system design
    0.60-0.80   complex   debugging, code review, analysis
    0.35-0.60   moderate  explanations, summaries, standard code
    0.15-0.35   simple    basic Q&A, definitions
    0.00-0.15   trivial   greetings, acknowledgments
"""

import time
from abc import ABC, abstractmethod

from tierroute.types import (
    ModelPair,
    ModelTier,
    ReasonCategory,
    RoutingContext,
    RoutingResult,
    UserPreference,
)

TIER_BREAKPOINTS: tuple[tuple[float, ModelTier], ...] = (
    (0.80, ModelTier.EXPERT),
    (0.60, ModelTier.COMPLEX),
    (0.35, ModelTier.MODERATE),
    (0.15, ModelTier.SIMPLE),
)

TIER_DESCRIPTIONS: dict[ModelTier, tuple[str, ReasonCategory]] = {
    ModelTier.EXPERT: (
        "Expert-level complexity: advanced reasoning or complex code generation",
        ReasonCategory.COMPLEXITY,
    ),
    ModelTier.COMPLEX: (
        "Complex task: detailed analysis, debugging, or code review",
        ReasonCategory.COMPLEXITY,
    ),
    ModelTier.MODERATE: (
        "Moderate complexity: explanations, summaries, or standard coding",
        ReasonCategory.COMPLEXITY,
    ),
    ModelTier.SIMPLE: (
        "Simple task: basic Q&A, definitions, or straightforward questions",
        ReasonCategory.SIMPLE,
    ),
    ModelTier.TRIVIAL: (
        "Trivial query: greeting, acknowledgment, or very simple request",
        ReasonCategory.SIMPLE,
    ),
}


def select_tier(score: float) -> ModelTier:
    """Map a complexity score onto one of the five tiers."""
    for breakpoint, tier in TIER_BREAKPOINTS:
        if score >= breakpoint:
            return tier
    return ModelTier.TRIVIAL


def calculate_confidence(score: float, tier: ModelTier) -> float:
    """How firmly a score sits in its tier.

    Not a probability of the routing being correct.
    """
    if tier == ModelTier.EXPERT:
        return score
    if tier == ModelTier.COMPLEX:
        return 0.7 + (score - 0.6) * 0.5
    if tier == ModelTier.MODERATE:
        return 0.5 + (score - 0.35) * 0.4
    if tier == ModelTier.SIMPLE:
        return 0.6 + (0.35 - score) * 1.5
    return 1 - score


def preference_reason(context: RoutingContext | None) -> tuple[str, ReasonCategory] | None:
    """Reason for an explicit user preference, if one was given."""
    if context is None:
        return None
    if context.user_preference == UserPreference.QUALITY:
        return "User preference set to quality", ReasonCategory.USER_PREFERENCE
    if context.user_preference == UserPreference.COST:
        return "User preference set to cost optimization", ReasonCategory.USER_PREFERENCE
    return None


class Router(ABC):
    """Base class for all routers.

    Subclasses implement `calculate_strong_win_rate`; everything else
    has a working default.
    """

    name: str = "base"

    # True when concurrent calls share no mutable state
    parallel_safe: bool = True

    @abstractmethod
    def calculate_strong_win_rate(
        self,
        prompt: str,
        context: RoutingContext | None = None,
    ) -> float:
        """Score in [0, 1]; higher means a stronger model is needed."""

    def route(
        self,
        prompt: str,
        threshold: float,
        model_pair: ModelPair,
        context: RoutingContext | None = None,
    ) -> RoutingResult:
        """Route a prompt to one of the five tiers.

        Args:
            prompt: The user's query.
            threshold: Echoed in the result. Five-tier selection
                uses fixed breakpoints instead.
            model_pair: Model name for each tier.
            context: Optional routing context.

        Returns:
            RoutingResult without a cost estimate.
        """
        start = time.perf_counter()
        score = self.calculate_strong_win_rate(prompt, context)
        tier = select_tier(score)
        reason, category = self.routing_reason(score, threshold, prompt, context)

        return RoutingResult(
            model=model_pair.for_tier(tier),
            tier=tier,
            confidence=calculate_confidence(score, tier),
            reason=reason,
            reason_category=category,
            strong_win_rate=score,
            threshold=threshold,
            routing_duration_ms=int((time.perf_counter() - start) * 1000),
        )

    def routing_reason(
        self,
        score: float,
        threshold: float,
        prompt: str,
        context: RoutingContext | None = None,
    ) -> tuple[str, ReasonCategory]:
        """Human-readable reason for a routing decision."""
        from_preference = preference_reason(context)
        if from_preference:
            return from_preference
        return TIER_DESCRIPTIONS[select_tier(score)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, parallel_safe={self.parallel_safe})"

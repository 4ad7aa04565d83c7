"""Rule-based router.

Scores prompts locally with regex heuristics. No model calls, no
state: the same prompt and context always yield the same score.

Scoring pipeline:
1. Greetings and acknowledgments short-circuit into the trivial tier
2. Weighted pattern groups seed a raw score (expert first)
3. Length adjustment, unless an expert/complex seed suppressed it
4. Boosters for technical terms, multi-step asks, dense language
5. Context adjustments (attachments, tools, preference, continuation)
6. Tool-use floor scanned from the prompt itself
"""

from tierroute.types import (
    QueryFeatures,
    ReasonCategory,
    RoutingContext,
    UserPreference,
)
from tierroute.routing.base import Router, preference_reason
from tierroute.routing.features import extract_features, length_adjustment
from tierroute.routing.patterns import (
    CODE,
    CREATIVE,
    EXPERT,
    EXPERT_COMPLEXITY_PATTERNS,
    MATH,
    REASONING,
    TOOL_USE_PATTERNS,
    UI_GENERATION,
    count_matches,
    matches_any,
    score_pattern_group,
)

# Minimum score for anything that has to emit structured tool calls
TOOL_USE_FLOOR = 0.35

QUALITY_FLOOR = 0.7
COST_CEILING = 0.3


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class RuleBasedRouter(Router):
    """Heuristic complexity scorer for five-tier routing.

    Usage:
        router = RuleBasedRouter()
        router.calculate_strong_win_rate("hello")            # ~0.0
        router.calculate_strong_win_rate("Debug this race condition in my async Python code")
    """

    name = "rule-based"
    parallel_safe = True

    def calculate_strong_win_rate(
        self,
        prompt: str,
        context: RoutingContext | None = None,
    ) -> float:
        features = extract_features(prompt)

        if features.is_simple:
            # Context can still lift a greeting, e.g. a "quality" preference
            score = _clamp(0.05 + length_adjustment(features.token_count), 0.0, 0.12)
            if context is not None:
                score = self._apply_context_adjustments(score, context)
            return _clamp(score)

        code_score = score_pattern_group(prompt, CODE)
        reasoning_score = score_pattern_group(prompt, REASONING)
        expert_score = score_pattern_group(prompt, EXPERT)
        math_score = score_pattern_group(prompt, MATH)
        creative_score = score_pattern_group(prompt, CREATIVE)
        ui_score = score_pattern_group(prompt, UI_GENERATION)

        # Short prompts can still need a strong model
        skip_length_penalty = False

        if expert_score > 0:
            score = 0.80 + expert_score * 0.15
            skip_length_penalty = True
        elif self._has_expert_complexity(prompt, features):
            score = 0.85
            skip_length_penalty = True
        elif code_score > 0 and (reasoning_score > 0 or features.has_technical_terms):
            score = 0.65 + code_score * 0.10
            skip_length_penalty = True
        elif ui_score > 0 or code_score > 0 or reasoning_score > 0 or math_score > 0:
            score = (
                0.40
                + ui_score * 0.1
                + code_score * 0.1
                + reasoning_score * 0.05
                + math_score * 0.05
            )
        elif creative_score > 0:
            score = 0.35 + creative_score * 0.1
        else:
            score = 0.20

        if not skip_length_penalty:
            score += length_adjustment(features.token_count)

        if features.has_technical_terms and score < 0.60:
            score += 0.15
        if features.has_multi_step:
            score += 0.20
        if features.language_complexity > 0.7:
            score += 0.10

        if context is not None:
            score = self._apply_context_adjustments(score, context)

        # Runs with or without context
        score = self._apply_tool_use_adjustment(score, prompt)

        return _clamp(score)

    def routing_reason(
        self,
        score: float,
        threshold: float,
        prompt: str,
        context: RoutingContext | None = None,
    ) -> tuple[str, ReasonCategory]:
        from_preference = preference_reason(context)
        if from_preference:
            return from_preference

        if CODE.matches(prompt):
            return "Code-related query detected", ReasonCategory.CODE
        if MATH.matches(prompt):
            return "Mathematical content detected", ReasonCategory.MATH
        if REASONING.matches(prompt):
            return "Reasoning or analysis required", ReasonCategory.REASONING
        if CREATIVE.matches(prompt):
            return "Creative writing task", ReasonCategory.CREATIVE
        if context is not None and context.tools:
            return "Tool use may be required", ReasonCategory.TOOLS
        if context is not None and context.attachments:
            return "Processing attachments", ReasonCategory.ATTACHMENTS

        return super().routing_reason(score, threshold, prompt, context)

    @staticmethod
    def _has_expert_complexity(prompt: str, features: QueryFeatures) -> bool:
        """Two or more expert markers, or one in a long technical prompt."""
        match_count = count_matches(prompt, EXPERT_COMPLEXITY_PATTERNS)
        return match_count >= 2 or (
            match_count >= 1
            and features.token_count > 100
            and features.has_technical_terms
        )

    @staticmethod
    def _apply_context_adjustments(score: float, context: RoutingContext) -> float:
        """Additive context nudges, then preference clamps.

        Preferences clamp after the additive steps so that "cost" can
        suppress an attachment-driven score and "quality" can lift a
        greeting. Continuation is added last.
        """
        adjusted = score

        if context.attachments:
            adjusted += 0.10
            if any(a.looks_like_image() for a in context.attachments):
                adjusted += 0.05
            if any(a.looks_like_document() for a in context.attachments):
                adjusted += 0.10

        if context.tools:
            adjusted = max(adjusted, TOOL_USE_FLOOR)

        if context.message_count > 10:
            adjusted += 0.05

        if context.user_preference == UserPreference.QUALITY:
            adjusted = max(adjusted, QUALITY_FLOOR)
        elif context.user_preference == UserPreference.COST:
            adjusted = min(adjusted, COST_CEILING)

        if context.is_continuation:
            adjusted += 0.10

        return adjusted

    @staticmethod
    def _apply_tool_use_adjustment(score: float, prompt: str) -> float:
        """Floor the score when the prompt implies tool calls."""
        if matches_any(prompt, TOOL_USE_PATTERNS):
            return max(score, TOOL_USE_FLOOR)
        return score

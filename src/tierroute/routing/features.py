"""Query feature extraction.

Derives structural signals from a raw prompt. Every function here is
total: any string, including the empty string, yields a result.
"""

import math
import re

from tierroute.types import QueryFeatures
from tierroute.routing.patterns import (
    CODE,
    CREATIVE,
    MATH,
    MULTI_STEP_PATTERNS,
    REASONING,
    SIMPLE_PATTERNS,
    TECHNICAL_DOMAIN_PATTERNS,
    count_matches,
    matches_any,
)

# Rough estimate for English text
CHARS_PER_TOKEN = 4

_SENTENCE_END = re.compile(r"[.!?]+")


def estimate_tokens(text: str) -> int:
    """Estimate token count as ceil(len / 4)."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def is_simple_query(prompt: str) -> bool:
    """True for greetings, acknowledgments and one-word definitions."""
    stripped = prompt.strip()
    return any(p.search(stripped) for p in SIMPLE_PATTERNS)


def length_adjustment(token_count: int) -> float:
    """Score nudge based on prompt length."""
    if token_count > 1000:
        return 0.15  # Long context needs a better model
    if token_count > 500:
        return 0.10
    if token_count > 200:
        return 0.05
    if token_count < 20:
        return -0.10
    if token_count < 50:
        return -0.05
    return 0.0


def assess_language_complexity(prompt: str) -> float:
    """Language complexity in [0, 1].

    Average of three normalized components: word length (/10),
    words per sentence (/40) and vocabulary richness.
    """
    words = prompt.split()
    if not words:
        return 0.0

    avg_word_length = sum(len(w) for w in words) / len(words)
    sentence_count = len(_SENTENCE_END.findall(prompt)) or 1
    avg_sentence_length = len(words) / sentence_count
    vocabulary_richness = len({w.lower() for w in words}) / len(words)

    word_length_score = min(avg_word_length / 10, 1.0)
    sentence_length_score = min(avg_sentence_length / 40, 1.0)

    return (word_length_score + sentence_length_score + vocabulary_richness) / 3


def assess_domain_specificity(prompt: str) -> float:
    """Share of technical domains mentioned, saturating at four."""
    matches = count_matches(prompt, TECHNICAL_DOMAIN_PATTERNS)
    return min(matches / 4, 1.0)


def extract_features(prompt: str) -> QueryFeatures:
    """Extract all structural features of a prompt."""
    return QueryFeatures(
        token_count=estimate_tokens(prompt),
        has_code=CODE.matches(prompt),
        has_question="?" in prompt,
        has_math=MATH.matches(prompt),
        has_reasoning=REASONING.matches(prompt),
        has_creative_writing=CREATIVE.matches(prompt),
        is_simple=is_simple_query(prompt),
        language_complexity=assess_language_complexity(prompt),
        domain_specificity=assess_domain_specificity(prompt),
        has_technical_terms=matches_any(prompt, TECHNICAL_DOMAIN_PATTERNS),
        has_multi_step=matches_any(prompt, MULTI_STEP_PATTERNS),
    )

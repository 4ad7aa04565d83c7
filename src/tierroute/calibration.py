"""Threshold calibration.

Finds the score cutoff that sends a target share of a sample corpus
to the strong side. This tunes one scalar threshold only; the tier
breakpoints and pattern weights are fixed.
"""

import logging
import math
from typing import Any

from tierroute.errors import CalibrationError
from tierroute.types import CalibrationResult, RoutingContext, WinRateDistribution
from tierroute.routing.base import Router

logger = logging.getLogger(__name__)

# Sample corpora for calibrating without real traffic
SAMPLE_QUERIES_BY_INTENT: dict[str, list[str]] = {
    "simple_question": [
        "What time is it?",
        "Hi there!",
        "Thanks!",
        "What is the capital of France?",
        "Hello",
        "Yes",
        "Ok",
        "Got it",
        "How are you?",
        "What's 2+2?",
    ],
    "code_generation": [
        "Write a Python function to sort a list of dictionaries by a specific key",
        "Create a React component that displays a paginated table with sorting",
        "Implement a binary search tree in TypeScript with insert, delete, and search operations",
        "Write a SQL query to find the top 10 customers by total purchase amount",
        "Create a REST API endpoint in Node.js that handles file uploads",
        "Write a bash script to backup a PostgreSQL database to S3",
        "Implement a rate limiter using the token bucket algorithm in Go",
        "Create a WebSocket server in Python that broadcasts messages to all connected clients",
    ],
    "reasoning": [
        "Explain the trade-offs between microservices and monolithic architecture",
        "Compare and contrast SQL and NoSQL databases for a real-time analytics system",
        "What are the implications of using eventual consistency in a distributed system?",
        "Analyze the pros and cons of different authentication strategies for a mobile app",
        "How would you design a system to handle 1 million concurrent users?",
        "What factors should I consider when choosing between AWS, Azure, and GCP?",
    ],
    "creative_writing": [
        "Write a short story about a robot learning to feel emotions",
        "Create a product description for an innovative smart home device",
        "Write a compelling blog post introduction about the future of AI",
        "Compose a professional email requesting a meeting with a potential client",
        "Create a catchy slogan for an eco-friendly water bottle company",
    ],
    "data_analysis": [
        "Analyze this sales data and identify trends",
        "What insights can we derive from this customer feedback?",
        "Help me understand the statistical significance of these A/B test results",
        "Create a data visualization strategy for this quarterly report",
        "What machine learning model would be best for predicting customer churn?",
    ],
    "general": [
        "What is machine learning?",
        "Explain how blockchain works",
        "What are the benefits of cloud computing?",
        "How does encryption protect my data?",
        "What is the difference between HTTP and HTTPS?",
        "Summarize this article for me",
        "Translate this to Spanish",
        "What are some good practices for code reviews?",
    ],
}


def calibrate_threshold(
    router: Router,
    sample_queries: list[str],
    target_strong_percentage: float,
    context: RoutingContext | None = None,
) -> CalibrationResult:
    """Pick the threshold that routes roughly the target share strong.

    Scores every sample, sorts descending and takes the score at the
    target percentile. Ties at the cutoff push the achieved share
    above the target.

    Raises:
        CalibrationError: if ``sample_queries`` is empty.
    """
    if not sample_queries:
        raise CalibrationError("Sample queries required for calibration")

    win_rates = [router.calculate_strong_win_rate(q, context) for q in sample_queries]
    count = len(win_rates)

    descending = sorted(win_rates, reverse=True)
    target_index = math.floor(count * (target_strong_percentage / 100))
    threshold = descending[min(target_index, count - 1)]

    actual_strong = sum(1 for rate in win_rates if rate >= threshold)
    actual_percentage = (actual_strong / count) * 100

    ascending = sorted(win_rates)
    distribution = WinRateDistribution(
        min=ascending[0],
        max=ascending[-1],
        mean=sum(win_rates) / count,
        median=ascending[count // 2],
        p25=ascending[math.floor(count * 0.25)],
        p75=ascending[math.floor(count * 0.75)],
    )

    logger.debug(
        f"Calibrated threshold {threshold:.3f} for target {target_strong_percentage}% "
        f"(actual {actual_percentage:.1f}%, n={count})")

    return CalibrationResult(
        threshold=threshold,
        target_percentage=target_strong_percentage,
        actual_percentage=actual_percentage,
        sample_size=count,
        win_rate_distribution=distribution,
    )


def calibrate_intent_thresholds(
    router: Router,
    target_percentages: dict[str, float] | None = None,
    default_target: float = 50,
) -> dict[str, float]:
    """Calibrate one threshold per intent using the sample corpora.

    Intents without their own corpus borrow a related one: code review
    and debugging use code generation, document analysis uses data
    analysis, greeting uses simple questions.
    """
    target_percentages = target_percentages or {}
    thresholds: dict[str, float] = {}

    for intent, queries in SAMPLE_QUERIES_BY_INTENT.items():
        target = target_percentages.get(intent, default_target)
        thresholds[intent] = calibrate_threshold(router, queries, target).threshold

    return {
        "code_generation": thresholds.get("code_generation", 0.3),
        "code_review": thresholds.get("code_generation", 0.3),
        "debugging": thresholds.get("code_generation", 0.3),
        "data_analysis": thresholds.get("data_analysis", 0.4),
        "document_analysis": thresholds.get("data_analysis", 0.4),
        "simple_question": thresholds.get("simple_question", 0.8),
        "greeting": thresholds.get("simple_question", 0.9),
        "creative_writing": thresholds.get("creative_writing", 0.4),
        "reasoning": thresholds.get("reasoning", 0.5),
        "general": thresholds.get("general", 0.5),
        "default": default_target / 100,
    }


def generate_calibration_report(
    router: Router,
    custom_queries: list[str] | None = None,
) -> dict[str, Any]:
    """Calibrate at 50% overall and per intent, with recommendations."""
    all_queries = custom_queries if custom_queries is not None else [
        q for queries in SAMPLE_QUERIES_BY_INTENT.values() for q in queries
    ]
    overall = calibrate_threshold(router, all_queries, 50)
    by_intent = {
        intent: calibrate_threshold(router, queries, 50)
        for intent, queries in SAMPLE_QUERIES_BY_INTENT.items()
    }

    recommendations: list[str] = []
    dist = overall.win_rate_distribution

    if dist.mean > 0.6:
        recommendations.append(
            "High average win rate suggests queries are complex. "
            "Consider lowering threshold for cost savings.")
    elif dist.mean < 0.4:
        recommendations.append(
            "Low average win rate suggests queries are simple. "
            "Current routing should provide good cost savings.")

    if dist.p75 - dist.p25 > 0.4:
        recommendations.append(
            "High variance in query complexity. "
            "Consider using intent-based thresholds for better routing.")

    if by_intent["code_generation"].win_rate_distribution.mean > 0.7:
        recommendations.append(
            "Code queries have high complexity. "
            "Recommend threshold of 0.3 or lower for code_generation intent.")

    if by_intent["simple_question"].win_rate_distribution.mean < 0.3:
        recommendations.append(
            "Simple questions routing well to weak model. "
            "Current configuration is effective.")

    return {
        "overall": overall,
        "by_intent": by_intent,
        "recommendations": recommendations,
    }

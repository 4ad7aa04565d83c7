"""Tests for threshold calibration."""

import pytest

from tierroute.calibration import (
    SAMPLE_QUERIES_BY_INTENT,
    calibrate_intent_thresholds,
    calibrate_threshold,
    generate_calibration_report,
)
from tierroute.errors import CalibrationError, RouterConfigError
from tierroute.routing import Router, RuleBasedRouter


class TableRouter(Router):
    """Scores prompts from a lookup table."""

    name = "table"

    def __init__(self, scores: dict[str, float]):
        self.scores = scores

    def calculate_strong_win_rate(self, prompt, context=None):
        return self.scores[prompt]


# ── Fixtures ──────────────────────────────────────────────────

@pytest.fixture
def ten_step_router():
    """q0..q9 scoring 0.0, 0.1, ... 0.9."""
    return TableRouter({f"q{i}": i / 10 for i in range(10)})


@pytest.fixture
def ten_queries():
    return [f"q{i}" for i in range(10)]


class TestCalibrateThreshold:

    def test_half_strong(self, ten_step_router, ten_queries):
        """Index 5 of the descending scores is the cutoff."""
        result = calibrate_threshold(ten_step_router, ten_queries, 50)
        assert result.threshold == pytest.approx(0.4)
        assert result.actual_percentage == pytest.approx(60.0)
        assert abs(result.actual_percentage - 50) <= 100 / len(ten_queries)
        assert result.sample_size == 10
        assert result.target_percentage == 50

    def test_distribution(self, ten_step_router, ten_queries):
        dist = calibrate_threshold(ten_step_router, ten_queries, 50).win_rate_distribution
        assert dist.min == 0.0
        assert dist.max == pytest.approx(0.9)
        assert dist.mean == pytest.approx(0.45)
        assert dist.median == pytest.approx(0.5)
        assert dist.p25 == pytest.approx(0.2)
        assert dist.p75 == pytest.approx(0.7)
        assert dist.min <= dist.median <= dist.max

    def test_target_everything(self, ten_step_router, ten_queries):
        """Index is capped at the last sample."""
        result = calibrate_threshold(ten_step_router, ten_queries, 100)
        assert result.threshold == 0.0
        assert result.actual_percentage == 100.0

    def test_target_nothing(self, ten_step_router, ten_queries):
        result = calibrate_threshold(ten_step_router, ten_queries, 0)
        assert result.threshold == pytest.approx(0.9)
        assert result.actual_percentage == pytest.approx(10.0)

    def test_input_order_irrelevant(self, ten_step_router, ten_queries):
        forward = calibrate_threshold(ten_step_router, ten_queries, 30)
        backward = calibrate_threshold(ten_step_router, list(reversed(ten_queries)), 30)
        assert forward.threshold == backward.threshold
        assert forward.actual_percentage == backward.actual_percentage
        assert forward.win_rate_distribution.median == backward.win_rate_distribution.median

    def test_empty_samples(self, ten_step_router):
        with pytest.raises(CalibrationError, match="Sample queries required"):
            calibrate_threshold(ten_step_router, [], 50)

    def test_calibration_error_is_config_error(self, ten_step_router):
        with pytest.raises(RouterConfigError):
            calibrate_threshold(ten_step_router, [], 50)

    def test_rule_based_on_sample_corpus(self):
        queries = [q for qs in SAMPLE_QUERIES_BY_INTENT.values() for q in qs]
        result = calibrate_threshold(RuleBasedRouter(), queries, 50)
        dist = result.win_rate_distribution
        assert dist.min <= dist.p25 <= dist.median <= dist.p75 <= dist.max
        assert result.actual_percentage >= 50

    def test_to_dict(self, ten_step_router, ten_queries):
        data = calibrate_threshold(ten_step_router, ten_queries, 50).to_dict()
        assert data["sampleSize"] == 10
        assert data["winRateDistribution"]["median"] == pytest.approx(0.5)


class TestIntentThresholds:

    def test_all_intents_present(self):
        thresholds = calibrate_intent_thresholds(RuleBasedRouter())
        assert set(thresholds) == {
            "code_generation", "code_review", "debugging", "data_analysis",
            "document_analysis", "simple_question", "greeting", "creative_writing",
            "reasoning", "general", "default",
        }
        assert thresholds["default"] == 0.5

    def test_borrowed_corpora(self):
        thresholds = calibrate_intent_thresholds(RuleBasedRouter())
        assert thresholds["code_review"] == thresholds["code_generation"]
        assert thresholds["debugging"] == thresholds["code_generation"]
        assert thresholds["document_analysis"] == thresholds["data_analysis"]
        assert thresholds["greeting"] == thresholds["simple_question"]

    def test_per_intent_target(self):
        router = RuleBasedRouter()
        strict = calibrate_intent_thresholds(router, {"code_generation": 10})
        lenient = calibrate_intent_thresholds(router, {"code_generation": 90})
        assert strict["code_generation"] >= lenient["code_generation"]

    def test_default_target(self):
        assert calibrate_intent_thresholds(RuleBasedRouter(), default_target=30)["default"] == 0.3


class TestCalibrationReport:

    def test_report_shape(self):
        report = generate_calibration_report(RuleBasedRouter())
        total = sum(len(qs) for qs in SAMPLE_QUERIES_BY_INTENT.values())
        assert report["overall"].sample_size == total
        assert set(report["by_intent"]) == set(SAMPLE_QUERIES_BY_INTENT)
        assert isinstance(report["recommendations"], list)

    def test_simple_questions_route_cheaply(self):
        """Greetings and one-liners average well below 0.3."""
        report = generate_calibration_report(RuleBasedRouter())
        assert report["by_intent"]["simple_question"].win_rate_distribution.mean < 0.3
        assert any("Simple questions" in r for r in report["recommendations"])

    def test_custom_queries(self):
        report = generate_calibration_report(RuleBasedRouter(), ["Hello", "Hi", "Thanks!"])
        assert report["overall"].sample_size == 3
        assert report["overall"].win_rate_distribution.mean == 0.0

    def test_empty_custom_queries(self):
        """An explicit empty corpus is an error, not a request for the default one."""
        with pytest.raises(CalibrationError, match="Sample queries required"):
            generate_calibration_report(RuleBasedRouter(), [])

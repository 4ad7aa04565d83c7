"""Routing controller.

Wraps one router and a five-tier model mapping. Routes prompts,
attaches cost estimates and keeps running statistics plus a bounded
event log for diagnostics.

Usage:
    controller = create_bedrock_router("premium")
    result = controller.route("Fix the race condition in worker.py")
    # result.tier == ModelTier.COMPLEX
    # result.model == "us.anthropic.claude-sonnet-4-5-20250929-v1:0"

Scoring is pure and may run on any number of threads. The only
shared state is the statistics block, guarded by a single lock so
each call's update is applied as a unit.
"""

import dataclasses
import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any

from tierroute.calibration import calibrate_threshold
from tierroute.config import RouterConfig, RouterSettings, build_router_config
from tierroute.errors import RouterConfigError
from tierroute.models import (
    estimate_request_cost,
    get_bedrock_routing_pair,
    get_openai_routing_pair,
)
from tierroute.routing import RandomRouter, Router, create_router
from tierroute.routing.features import CHARS_PER_TOKEN
from tierroute.types import (
    ModelPair,
    ModelTier,
    ReasonCategory,
    RouterType,
    RoutingContext,
    RoutingEvent,
    RoutingResult,
    RoutingStats,
)

logger = logging.getLogger(__name__)

MAX_EVENT_LOG_SIZE = 1000
MAX_LOGGED_PROMPT_CHARS = 500

# Synthetic request used to price the savings estimate
SAVINGS_SAMPLE_TOKENS = 500

DEFAULT_BATCH_WORKERS = 8


def hash_prompt(text: str) -> str:
    """Fast 32-bit polynomial rolling hash, as signed hex.

    Runs over UTF-16 code units, so characters outside the BMP (emoji)
    contribute two surrogate units rather than one code point. For
    grouping log entries only; collisions are possible.
    """
    units = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(units), 2):
        h = (h * 31 + int.from_bytes(units[i:i + 2], "little")) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(h, "x")


def estimate_cost(model_id: str, prompt: str) -> float | None:
    """Estimated USD cost of sending ``prompt`` to ``model_id``.

    Output length is assumed equal to the input. None if no registry
    knows the model.
    """
    tokens = math.ceil(len(prompt) / CHARS_PER_TOKEN)
    return estimate_request_cost(model_id, tokens, tokens)


class RouterController:
    """Five-tier routing with cost estimates and statistics.

    Args:
        config: RouterConfig or a mapping with ``endpoint``, ``models``
            and optionally ``threshold``, ``router_type``, ``debug``.
        router: Use this router instead of building one from
            ``config.router_type``.
        max_batch_workers: Thread pool size for batch routing.
    """

    def __init__(
        self,
        config: RouterConfig | dict[str, Any],
        router: Router | None = None,
        max_batch_workers: int = DEFAULT_BATCH_WORKERS,
    ):
        self._config = build_router_config(config)
        self._model_pair = self._config.models
        self.router = router or create_router(self._config.router_type)
        self.max_batch_workers = max(1, max_batch_workers)

        self._lock = threading.Lock()
        self._model_counts: dict[str, int] = {}
        self._tier_counts: dict[ModelTier, int] = {tier: 0 for tier in ModelTier}
        self._reason_counts: dict[ReasonCategory, int] = {}
        self._total_confidence = 0.0
        self._event_log: list[RoutingEvent] = []

        self._log(
            f"Router initialized: endpoint={self._config.endpoint} "
            f"router={self.router.name} models={self._model_pair.to_dict()}")

    def _log(self, message: str) -> None:
        if self._config.debug:
            logger.info(message)
        else:
            logger.debug(message)

    # ── Routing ──────────────────────────────────────────────

    def route(self, prompt: str, context: RoutingContext | None = None) -> RoutingResult:
        """Route one prompt and record it in the statistics."""
        result = self.router.route(
            prompt,
            self._config.threshold,
            self._model_pair,
            context,
        )
        result = dataclasses.replace(
            result, estimated_cost=estimate_cost(result.model, prompt))

        self._record(prompt, result, context)

        self._log(
            f"Routed to {result.model} tier={result.tier.value} "
            f"score={result.strong_win_rate:.3f} confidence={result.confidence:.3f} "
            f"reason={result.reason!r}")
        return result

    def route_batch(
        self,
        prompts: list[str],
        context: RoutingContext | None = None,
    ) -> list[RoutingResult]:
        """Route several prompts independently; results keep input order."""
        return self._map(lambda p: self.route(p, context), prompts)

    def calculate_win_rate(self, prompt: str, context: RoutingContext | None = None) -> float:
        """Raw score without tiering, cost or statistics."""
        return self.router.calculate_strong_win_rate(prompt, context)

    def calculate_win_rate_batch(
        self,
        prompts: list[str],
        context: RoutingContext | None = None,
    ) -> list[float]:
        return self._map(lambda p: self.router.calculate_strong_win_rate(p, context), prompts)

    def _map(self, fn, prompts: list[str]) -> list:
        if not prompts:
            return []
        if not self.router.parallel_safe or len(prompts) == 1:
            return [fn(p) for p in prompts]
        workers = min(self.max_batch_workers, len(prompts))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(fn, prompts))

    # ── Statistics ───────────────────────────────────────────

    def _record(self, prompt: str, result: RoutingResult, context: RoutingContext | None) -> None:
        event = RoutingEvent(
            timestamp=datetime.now(timezone.utc),
            prompt=prompt[:MAX_LOGGED_PROMPT_CHARS],
            prompt_hash=hash_prompt(prompt),
            result=result,
            context=context,
        )
        with self._lock:
            self._model_counts[result.model] = self._model_counts.get(result.model, 0) + 1
            self._tier_counts[result.tier] += 1
            self._reason_counts[result.reason_category] = (
                self._reason_counts.get(result.reason_category, 0) + 1)
            self._total_confidence += result.confidence

            self._event_log.append(event)
            if len(self._event_log) > MAX_EVENT_LOG_SIZE:
                # Drop the oldest half in one go
                self._event_log = self._event_log[-(MAX_EVENT_LOG_SIZE // 2):]

    def get_stats(self) -> RoutingStats:
        """Snapshot of the statistics; later routing does not change it."""
        with self._lock:
            model_counts = dict(self._model_counts)
            tier_counts = dict(self._tier_counts)
            reason_counts = dict(self._reason_counts)
            total_confidence = self._total_confidence

        total = sum(model_counts.values())
        cheap_count = tier_counts[ModelTier.TRIVIAL] + tier_counts[ModelTier.SIMPLE]

        estimated_savings = 0.0
        if cheap_count > 0:
            sample = "x" * (SAVINGS_SAMPLE_TOKENS * CHARS_PER_TOKEN)
            expert_cost = estimate_cost(self._model_pair.expert, sample) or 0.0
            trivial_cost = estimate_cost(self._model_pair.trivial, sample) or 0.0
            estimated_savings = cheap_count * (expert_cost - trivial_cost)

        return RoutingStats(
            model_counts=model_counts,
            tier_counts=tier_counts,
            expert_percentage=(tier_counts[ModelTier.EXPERT] / total) * 100 if total else 0.0,
            trivial_percentage=(tier_counts[ModelTier.TRIVIAL] / total) * 100 if total else 0.0,
            total_requests=total,
            average_confidence=total_confidence / total if total else 0.0,
            reason_breakdown=reason_counts,
            estimated_savings=estimated_savings,
        )

    def reset_stats(self) -> None:
        """Clear all counters and the event log."""
        with self._lock:
            self._model_counts = {}
            self._tier_counts = {tier: 0 for tier in ModelTier}
            self._reason_counts = {}
            self._total_confidence = 0.0
            self._event_log = []
        self._log("Routing statistics reset")

    def get_recent_events(self, count: int = 100) -> list[RoutingEvent]:
        """The last ``count`` events, most recent last."""
        if count <= 0:
            return []
        with self._lock:
            return list(self._event_log[-count:])

    # ── Configuration ────────────────────────────────────────

    def get_config(self) -> RouterConfig:
        return self._config.model_copy()

    def get_model_pair(self) -> ModelPair:
        return self._model_pair

    @property
    def threshold(self) -> float:
        return self._config.threshold

    def set_threshold(self, threshold: float) -> None:
        """Update the threshold echoed in future results.

        Raises:
            RouterConfigError: if the threshold is outside [0, 1].
        """
        if not 0 <= threshold <= 1:
            raise RouterConfigError("Threshold must be between 0 and 1", field="threshold")
        self._config = self._config.model_copy(update={"threshold": threshold})
        self._log(f"Threshold set to {threshold}")

    calibrate_threshold = staticmethod(calibrate_threshold)


# ── Factories ────────────────────────────────────────────────

def create_bedrock_router(
    preset: str = "costOptimized",
    threshold: float = 0.5,
) -> RouterController:
    """Controller for a Bedrock preset: premium, costOptimized or ultraCheap."""
    return RouterController({
        "endpoint": "bedrock",
        "models": get_bedrock_routing_pair(preset),
        "threshold": threshold,
        "router_type": RouterType.RULE_BASED,
    })


def create_openai_router(
    preset: str = "standard",
    threshold: float = 0.5,
) -> RouterController:
    """Controller for an OpenAI preset: premium, standard or economy."""
    return RouterController({
        "endpoint": "openai",
        "models": get_openai_routing_pair(preset),
        "threshold": threshold,
        "router_type": RouterType.RULE_BASED,
    })


def create_custom_router(
    endpoint: str,
    models: ModelPair | dict[str, str],
    threshold: float = 0.5,
    router_type: RouterType | str = RouterType.RULE_BASED,
) -> RouterController:
    """Controller for a caller-supplied five-tier mapping."""
    if isinstance(models, dict):
        models = ModelPair.from_dict(models)
    return RouterController({
        "endpoint": endpoint,
        "models": models,
        "threshold": threshold,
        "router_type": router_type,
    })


def create_router_from_settings(settings: RouterSettings) -> RouterController:
    """Controller built from loaded settings."""
    config = settings.to_router_config()
    router = None
    if config.router_type == RouterType.RANDOM:
        router = RandomRouter(bias=settings.random_bias)
    return RouterController(config, router=router)

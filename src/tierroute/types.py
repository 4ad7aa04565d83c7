"""Core data types for tier routing.

Everything in here is a plain record: routers produce them, the
controller aggregates them, callers read them. Nothing here holds
behavior beyond small conversion helpers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from tierroute.errors import RouterConfigError


class ModelTier(str, Enum):
    """Five complexity tiers, most capable first."""
    EXPERT = "expert"       # Deep reasoning, system design
    COMPLEX = "complex"     # Debugging, code review, analysis
    MODERATE = "moderate"   # Explanations, summaries, standard code
    SIMPLE = "simple"       # Basic Q&A, definitions
    TRIVIAL = "trivial"     # Greetings, acknowledgments


class ReasonCategory(str, Enum):
    """Why a routing decision landed where it did."""
    COMPLEXITY = "complexity"
    CODE = "code"
    REASONING = "reasoning"
    MATH = "math"
    CREATIVE = "creative"
    UI_GENERATION = "ui_generation"
    SIMPLE = "simple"
    CONTEXT = "context"
    TOOLS = "tools"
    ATTACHMENTS = "attachments"
    USER_PREFERENCE = "user_preference"
    GENERAL = "general"
    RANDOM = "random"


class UserPreference(str, Enum):
    """Caller-supplied cost vs quality bias."""
    QUALITY = "quality"
    COST = "cost"
    BALANCED = "balanced"


class RouterType(str, Enum):
    """Router implementations known to `create_router`."""
    RULE_BASED = "rule-based"
    RANDOM = "random"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class Attachment:
    """A file attached to the conversation turn."""
    type: str | None = None
    mime_type: str | None = None
    name: str | None = None
    size: int | None = None

    def looks_like_image(self) -> bool:
        return bool(
            (self.type and self.type.startswith("image"))
            or (self.mime_type and self.mime_type.startswith("image"))
        )

    def looks_like_document(self) -> bool:
        return bool(
            (self.type and ("pdf" in self.type or "document" in self.type))
            or (self.mime_type and "pdf" in self.mime_type)
        )


@dataclass(frozen=True)
class Tool:
    """A tool the destination model may be asked to call."""
    name: str
    type: str | None = None


@dataclass(frozen=True)
class RoutingContext:
    """Advisory signals that bias the complexity score.

    All fields are optional. A bare ``RoutingContext()`` behaves the
    same as passing no context at all.
    """
    tools: tuple[Tool, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    user_preference: UserPreference | None = None
    message_count: int = 0
    is_continuation: bool = False
    previous_model: str | None = None
    conversation_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoutingContext":
        """Build a context from a request payload.

        Accepts both camelCase (``userPreference``, ``mimeType``) and
        snake_case keys.
        """
        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        tools = tuple(
            Tool(name=t["name"], type=t.get("type")) if isinstance(t, dict) else Tool(name=str(t))
            for t in pick("tools", default=[])
        )
        attachments = tuple(
            Attachment(
                type=a.get("type"),
                mime_type=a.get("mimeType", a.get("mime_type")),
                name=a.get("name"),
                size=a.get("size"),
            )
            for a in pick("attachments", default=[])
        )
        preference = pick("userPreference", "user_preference")

        return cls(
            tools=tools,
            attachments=attachments,
            user_preference=UserPreference(preference) if preference else None,
            message_count=int(pick("messageCount", "message_count", default=0)),
            is_continuation=bool(pick("isContinuation", "is_continuation", default=False)),
            previous_model=pick("previousModel", "previous_model"),
            conversation_id=pick("conversationId", "conversation_id"),
            metadata=dict(pick("metadata", default={})),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tools": [{"name": t.name, "type": t.type} for t in self.tools],
            "attachments": [
                {"type": a.type, "mimeType": a.mime_type, "name": a.name, "size": a.size}
                for a in self.attachments
            ],
            "userPreference": self.user_preference.value if self.user_preference else None,
            "messageCount": self.message_count,
            "isContinuation": self.is_continuation,
            "previousModel": self.previous_model,
            "conversationId": self.conversation_id,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class ModelPair:
    """Concrete model name for each of the five tiers.

    Kept under its historical name: routing used to choose between a
    strong and a weak model only.
    """
    expert: str
    complex: str
    moderate: str
    simple: str
    trivial: str

    def for_tier(self, tier: ModelTier) -> str:
        return getattr(self, ModelTier(tier).value)

    def to_dict(self) -> dict[str, str]:
        return {tier.value: self.for_tier(tier) for tier in ModelTier}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "ModelPair":
        missing = [t.value for t in ModelTier if not data.get(t.value)]
        if missing:
            raise RouterConfigError(
                f"Model pair is missing tiers: {', '.join(missing)}")
        return cls(**{t.value: data[t.value] for t in ModelTier})


@dataclass(frozen=True)
class QueryFeatures:
    """Structural signals extracted from a prompt.

    Recomputed for every call and never cached.
    """
    token_count: int
    has_code: bool
    has_question: bool
    has_math: bool
    has_reasoning: bool
    has_creative_writing: bool
    is_simple: bool
    language_complexity: float  # 0.0 to 1.0
    domain_specificity: float   # 0.0 to 1.0
    has_technical_terms: bool
    has_multi_step: bool


@dataclass(frozen=True)
class RoutingResult:
    """A single routing decision."""
    model: str
    tier: ModelTier
    confidence: float  # How well the score fits the tier, 0.0 to 1.0
    reason: str
    reason_category: ReasonCategory
    strong_win_rate: float  # Raw score before tier mapping
    threshold: float  # Echoed back, not used by 5-tier selection
    estimated_cost: float | None = None
    routing_duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "tier": self.tier.value,
            "confidence": self.confidence,
            "reason": self.reason,
            "reasonCategory": self.reason_category.value,
            "strongWinRate": self.strong_win_rate,
            "threshold": self.threshold,
            "estimatedCost": self.estimated_cost,
            "routingDurationMs": self.routing_duration_ms,
        }


@dataclass
class RoutingStats:
    """Snapshot of a controller's accumulated routing statistics."""
    model_counts: dict[str, int] = field(default_factory=dict)
    tier_counts: dict[ModelTier, int] = field(
        default_factory=lambda: {tier: 0 for tier in ModelTier})
    expert_percentage: float = 0.0
    trivial_percentage: float = 0.0
    total_requests: int = 0
    average_confidence: float = 0.0
    reason_breakdown: dict[ReasonCategory, int] = field(default_factory=dict)
    estimated_savings: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "modelCounts": dict(self.model_counts),
            "tierCounts": {tier.value: n for tier, n in self.tier_counts.items()},
            "expertPercentage": round(self.expert_percentage, 2),
            "trivialPercentage": round(self.trivial_percentage, 2),
            "totalRequests": self.total_requests,
            "averageConfidence": round(self.average_confidence, 4),
            "reasonBreakdown": {cat.value: n for cat, n in self.reason_breakdown.items()},
            "estimatedSavings": round(self.estimated_savings, 6),
        }


@dataclass(frozen=True)
class RoutingEvent:
    """One entry of the controller's diagnostic event log."""
    timestamp: datetime
    prompt: str  # Truncated
    prompt_hash: str
    result: RoutingResult
    context: RoutingContext | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "prompt": self.prompt,
            "promptHash": self.prompt_hash,
            "result": self.result.to_dict(),
            "context": self.context.to_dict() if self.context else None,
        }


@dataclass(frozen=True)
class WinRateDistribution:
    min: float
    max: float
    mean: float
    median: float
    p25: float
    p75: float

    def to_dict(self) -> dict[str, float]:
        return {
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "median": self.median,
            "p25": self.p25,
            "p75": self.p75,
        }


@dataclass(frozen=True)
class CalibrationResult:
    """Outcome of calibrating a single threshold on a sample corpus."""
    threshold: float
    target_percentage: float
    actual_percentage: float
    sample_size: int
    win_rate_distribution: WinRateDistribution

    def to_dict(self) -> dict[str, Any]:
        return {
            "threshold": self.threshold,
            "targetPercentage": self.target_percentage,
            "actualPercentage": self.actual_percentage,
            "sampleSize": self.sample_size,
            "winRateDistribution": self.win_rate_distribution.to_dict(),
        }


@dataclass(frozen=True)
class TokenCost:
    """USD cost per 1K tokens."""
    input: float
    output: float


@dataclass(frozen=True)
class ModelConfig:
    """A known model with its tier and pricing."""
    id: str
    name: str
    tier: ModelTier
    cost_per_1k: TokenCost
    max_tokens: int = 128_000
    capabilities: tuple[str, ...] = ()
    provider: str | None = None

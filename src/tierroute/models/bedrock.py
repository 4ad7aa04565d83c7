"""AWS Bedrock model registry and routing presets.

Six models, cheapest first (USD per 1M input/output tokens):

    Nova Micro      0.035 / 0.14
    Nova Lite       0.06  / 0.24
    Nova Pro        0.80  / 3.20
    Haiku 4.5       1     / 5
    Sonnet 4.5      3     / 15
    Opus 4.5        5     / 25

Model IDs use the cross-region inference profile prefix (``us.``;
Opus is only offered as ``global.``).
"""

from enum import Enum

from tierroute.errors import RouterConfigError
from tierroute.types import ModelConfig, ModelPair, ModelTier, TokenCost


class BedrockPreset(str, Enum):
    PREMIUM = "premium"                 # Opus at the top
    COST_OPTIMIZED = "costOptimized"    # Sonnet at the top
    ULTRA_CHEAP = "ultraCheap"          # Haiku at the top


NOVA_MICRO = "us.amazon.nova-micro-v1:0"
NOVA_LITE = "us.amazon.nova-lite-v1:0"
NOVA_PRO = "us.amazon.nova-pro-v1:0"
CLAUDE_HAIKU = "us.anthropic.claude-haiku-4-5-20251001-v1:0"
CLAUDE_SONNET = "us.anthropic.claude-sonnet-4-5-20250929-v1:0"
CLAUDE_OPUS = "global.anthropic.claude-opus-4-5-20251101-v1:0"

BEDROCK_MODELS: dict[str, ModelConfig] = {
    NOVA_MICRO: ModelConfig(
        id=NOVA_MICRO,
        name="Amazon Nova Micro",
        tier=ModelTier.TRIVIAL,
        cost_per_1k=TokenCost(input=0.000035, output=0.00014),
        max_tokens=128_000,
        capabilities=("general", "fast"),
        provider="amazon",
    ),
    NOVA_LITE: ModelConfig(
        id=NOVA_LITE,
        name="Amazon Nova Lite",
        tier=ModelTier.SIMPLE,
        cost_per_1k=TokenCost(input=0.00006, output=0.00024),
        max_tokens=300_000,
        capabilities=("general", "vision", "video", "fast"),
        provider="amazon",
    ),
    NOVA_PRO: ModelConfig(
        id=NOVA_PRO,
        name="Amazon Nova Pro",
        tier=ModelTier.MODERATE,
        cost_per_1k=TokenCost(input=0.0008, output=0.0032),
        max_tokens=300_000,
        capabilities=("general", "vision", "video", "tools", "analysis"),
        provider="amazon",
    ),
    CLAUDE_HAIKU: ModelConfig(
        id=CLAUDE_HAIKU,
        name="Claude Haiku 4.5",
        tier=ModelTier.MODERATE,
        cost_per_1k=TokenCost(input=0.001, output=0.005),
        max_tokens=200_000,
        capabilities=("general", "coding", "tools", "fast", "extended-thinking"),
        provider="anthropic",
    ),
    CLAUDE_SONNET: ModelConfig(
        id=CLAUDE_SONNET,
        name="Claude Sonnet 4.5",
        tier=ModelTier.COMPLEX,
        cost_per_1k=TokenCost(input=0.003, output=0.015),
        max_tokens=200_000,
        capabilities=("reasoning", "coding", "analysis", "vision", "tools", "extended-thinking"),
        provider="anthropic",
    ),
    CLAUDE_OPUS: ModelConfig(
        id=CLAUDE_OPUS,
        name="Claude Opus 4.5",
        tier=ModelTier.EXPERT,
        cost_per_1k=TokenCost(input=0.005, output=0.025),
        max_tokens=200_000,
        capabilities=("reasoning", "coding", "analysis", "vision", "tools", "extended-thinking"),
        provider="anthropic",
    ),
}

# Nova Micro is registered for cost lookups but kept out of the presets:
# it does not follow tool or system-prompt instructions reliably.
BEDROCK_ROUTING_PAIRS: dict[BedrockPreset, ModelPair] = {
    BedrockPreset.PREMIUM: ModelPair(
        expert=CLAUDE_OPUS,
        complex=CLAUDE_SONNET,
        moderate=CLAUDE_HAIKU,
        simple=NOVA_PRO,
        trivial=NOVA_LITE,
    ),
    BedrockPreset.COST_OPTIMIZED: ModelPair(
        expert=CLAUDE_SONNET,
        complex=CLAUDE_SONNET,
        moderate=CLAUDE_HAIKU,
        simple=NOVA_PRO,
        trivial=NOVA_LITE,
    ),
    BedrockPreset.ULTRA_CHEAP: ModelPair(
        expert=CLAUDE_HAIKU,
        complex=CLAUDE_HAIKU,
        moderate=NOVA_PRO,
        simple=NOVA_PRO,
        trivial=NOVA_LITE,
    ),
}


def get_bedrock_model(model_id: str) -> ModelConfig | None:
    return BEDROCK_MODELS.get(model_id)


def get_bedrock_models_by_tier(tier: ModelTier) -> list[ModelConfig]:
    return [m for m in BEDROCK_MODELS.values() if m.tier == tier]


def get_bedrock_routing_pair(preset: BedrockPreset | str) -> ModelPair:
    try:
        return BEDROCK_ROUTING_PAIRS[BedrockPreset(preset)]
    except ValueError:
        known = ", ".join(p.value for p in BedrockPreset)
        raise RouterConfigError(
            f"Unknown Bedrock preset: {preset!r} (expected one of: {known})",
            field="preset",
        ) from None


def calculate_bedrock_cost(model_id: str, input_tokens: int, output_tokens: int) -> float:
    """USD cost of a request; 0.0 for unknown models."""
    model = BEDROCK_MODELS.get(model_id)
    if model is None:
        return 0.0
    return (
        (input_tokens / 1000) * model.cost_per_1k.input
        + (output_tokens / 1000) * model.cost_per_1k.output
    )

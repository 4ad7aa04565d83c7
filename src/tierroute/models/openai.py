"""OpenAI model registry and routing presets."""

from enum import Enum

from tierroute.errors import RouterConfigError
from tierroute.types import ModelConfig, ModelPair, ModelTier, TokenCost


class OpenAIPreset(str, Enum):
    PREMIUM = "premium"     # o3 at the top
    STANDARD = "standard"   # gpt-4.1 at the top
    ECONOMY = "economy"     # gpt-4.1-mini at the top


GPT_41_NANO = "gpt-4.1-nano"
GPT_4O_MINI = "gpt-4o-mini"
GPT_41_MINI = "gpt-4.1-mini"
GPT_4O = "gpt-4o"
GPT_41 = "gpt-4.1"
O3 = "o3"

OPENAI_MODELS: dict[str, ModelConfig] = {
    GPT_41_NANO: ModelConfig(
        id=GPT_41_NANO,
        name="GPT-4.1 nano",
        tier=ModelTier.TRIVIAL,
        cost_per_1k=TokenCost(input=0.0001, output=0.0004),
        max_tokens=1_047_576,
        capabilities=("general", "fast", "tools"),
        provider="openai",
    ),
    GPT_4O_MINI: ModelConfig(
        id=GPT_4O_MINI,
        name="GPT-4o mini",
        tier=ModelTier.SIMPLE,
        cost_per_1k=TokenCost(input=0.00015, output=0.0006),
        max_tokens=128_000,
        capabilities=("general", "fast", "vision", "tools"),
        provider="openai",
    ),
    GPT_41_MINI: ModelConfig(
        id=GPT_41_MINI,
        name="GPT-4.1 mini",
        tier=ModelTier.MODERATE,
        cost_per_1k=TokenCost(input=0.0004, output=0.0016),
        max_tokens=1_047_576,
        capabilities=("general", "coding", "vision", "tools"),
        provider="openai",
    ),
    GPT_4O: ModelConfig(
        id=GPT_4O,
        name="GPT-4o",
        tier=ModelTier.COMPLEX,
        cost_per_1k=TokenCost(input=0.0025, output=0.01),
        max_tokens=128_000,
        capabilities=("general", "coding", "analysis", "vision", "tools"),
        provider="openai",
    ),
    GPT_41: ModelConfig(
        id=GPT_41,
        name="GPT-4.1",
        tier=ModelTier.COMPLEX,
        cost_per_1k=TokenCost(input=0.002, output=0.008),
        max_tokens=1_047_576,
        capabilities=("reasoning", "coding", "analysis", "vision", "tools"),
        provider="openai",
    ),
    O3: ModelConfig(
        id=O3,
        name="o3",
        tier=ModelTier.EXPERT,
        cost_per_1k=TokenCost(input=0.002, output=0.008),
        max_tokens=200_000,
        capabilities=("reasoning", "coding", "analysis", "math", "vision", "tools"),
        provider="openai",
    ),
}

OPENAI_ROUTING_PAIRS: dict[OpenAIPreset, ModelPair] = {
    OpenAIPreset.PREMIUM: ModelPair(
        expert=O3,
        complex=GPT_41,
        moderate=GPT_4O,
        simple=GPT_41_MINI,
        trivial=GPT_4O_MINI,
    ),
    OpenAIPreset.STANDARD: ModelPair(
        expert=GPT_41,
        complex=GPT_4O,
        moderate=GPT_41_MINI,
        simple=GPT_4O_MINI,
        trivial=GPT_41_NANO,
    ),
    OpenAIPreset.ECONOMY: ModelPair(
        expert=GPT_41_MINI,
        complex=GPT_41_MINI,
        moderate=GPT_4O_MINI,
        simple=GPT_41_NANO,
        trivial=GPT_41_NANO,
    ),
}


def get_openai_model(model_id: str) -> ModelConfig | None:
    return OPENAI_MODELS.get(model_id)


def get_openai_models_by_tier(tier: ModelTier) -> list[ModelConfig]:
    return [m for m in OPENAI_MODELS.values() if m.tier == tier]


def get_openai_routing_pair(preset: OpenAIPreset | str) -> ModelPair:
    try:
        return OPENAI_ROUTING_PAIRS[OpenAIPreset(preset)]
    except ValueError:
        known = ", ".join(p.value for p in OpenAIPreset)
        raise RouterConfigError(
            f"Unknown OpenAI preset: {preset!r} (expected one of: {known})",
            field="preset",
        ) from None


def calculate_openai_cost(model_id: str, input_tokens: int, output_tokens: int) -> float:
    """USD cost of a request; 0.0 for unknown models."""
    model = OPENAI_MODELS.get(model_id)
    if model is None:
        return 0.0
    return (
        (input_tokens / 1000) * model.cost_per_1k.input
        + (output_tokens / 1000) * model.cost_per_1k.output
    )

"""Model registries.

Static tables of known models, their tier and per-token pricing.
Used for tier → model resolution presets and cost estimation only.
"""

from tierroute.types import ModelConfig, ModelPair, ModelTier
from tierroute.models.bedrock import (
    BEDROCK_MODELS,
    BEDROCK_ROUTING_PAIRS,
    BedrockPreset,
    calculate_bedrock_cost,
    get_bedrock_model,
    get_bedrock_models_by_tier,
    get_bedrock_routing_pair,
)
from tierroute.models.openai import (
    OPENAI_MODELS,
    OPENAI_ROUTING_PAIRS,
    OpenAIPreset,
    calculate_openai_cost,
    get_openai_model,
    get_openai_models_by_tier,
    get_openai_routing_pair,
)

ALL_MODELS: dict[str, ModelConfig] = {**BEDROCK_MODELS, **OPENAI_MODELS}

ALL_ROUTING_PAIRS: dict[str, dict[str, ModelPair]] = {
    "bedrock": {preset.value: pair for preset, pair in BEDROCK_ROUTING_PAIRS.items()},
    "openai": {preset.value: pair for preset, pair in OPENAI_ROUTING_PAIRS.items()},
}


def get_model(model_id: str) -> ModelConfig | None:
    """Look up a model in any registry."""
    return ALL_MODELS.get(model_id)


def get_model_tier(model_id: str) -> ModelTier | None:
    model = get_model(model_id)
    return model.tier if model else None


def calculate_cost(model_id: str, input_tokens: int, output_tokens: int) -> float:
    """USD cost of a request for any known model; 0.0 if unknown."""
    model = ALL_MODELS.get(model_id)
    if model is None:
        return 0.0
    return (
        (input_tokens / 1000) * model.cost_per_1k.input
        + (output_tokens / 1000) * model.cost_per_1k.output
    )


def estimate_request_cost(model_id: str, input_tokens: int, output_tokens: int) -> float | None:
    """Cost from whichever registry knows the model, else None.

    Bedrock is consulted first, then OpenAI.
    """
    if get_bedrock_model(model_id):
        return calculate_bedrock_cost(model_id, input_tokens, output_tokens)
    if get_openai_model(model_id):
        return calculate_openai_cost(model_id, input_tokens, output_tokens)
    return None


def estimate_cost_savings(
    expensive_model_id: str,
    cheap_model_id: str,
    input_tokens: int,
    output_tokens: int,
) -> dict[str, float]:
    """Compare the cost of one request on two models."""
    expensive_cost = calculate_cost(expensive_model_id, input_tokens, output_tokens)
    cheap_cost = calculate_cost(cheap_model_id, input_tokens, output_tokens)
    savings = expensive_cost - cheap_cost
    return {
        "expensive_cost": expensive_cost,
        "cheap_cost": cheap_cost,
        "savings": savings,
        "savings_percent": (savings / expensive_cost) * 100 if expensive_cost > 0 else 0.0,
    }


__all__ = [
    "ALL_MODELS",
    "ALL_ROUTING_PAIRS",
    "BEDROCK_MODELS",
    "BEDROCK_ROUTING_PAIRS",
    "BedrockPreset",
    "OPENAI_MODELS",
    "OPENAI_ROUTING_PAIRS",
    "OpenAIPreset",
    "calculate_bedrock_cost",
    "calculate_cost",
    "calculate_openai_cost",
    "estimate_cost_savings",
    "estimate_request_cost",
    "get_bedrock_model",
    "get_bedrock_models_by_tier",
    "get_bedrock_routing_pair",
    "get_model",
    "get_model_tier",
    "get_openai_model",
    "get_openai_models_by_tier",
    "get_openai_routing_pair",
]

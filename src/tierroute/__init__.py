"""tierroute - complexity-based LLM routing across five model tiers.

Scores each prompt locally and picks a model from a five-tier mapping
(expert, complex, moderate, simple, trivial). No network calls.
"""

__version__ = "0.1.0"

from tierroute.controller import (
    RouterController,
    create_bedrock_router,
    create_custom_router,
    create_openai_router,
    create_router_from_settings,
)
from tierroute.errors import CalibrationError, RouterConfigError
from tierroute.routing import (
    HybridRouter,
    RandomRouter,
    Router,
    RuleBasedRouter,
    create_router,
)
from tierroute.types import (
    Attachment,
    ModelPair,
    ModelTier,
    ReasonCategory,
    RouterType,
    RoutingContext,
    RoutingResult,
    RoutingStats,
    Tool,
    UserPreference,
)

__all__ = [
    "__version__",
    "RouterController",
    "create_bedrock_router",
    "create_custom_router",
    "create_openai_router",
    "create_router_from_settings",
    "CalibrationError",
    "RouterConfigError",
    "HybridRouter",
    "RandomRouter",
    "Router",
    "RuleBasedRouter",
    "create_router",
    "Attachment",
    "ModelPair",
    "ModelTier",
    "ReasonCategory",
    "RouterType",
    "RoutingContext",
    "RoutingResult",
    "RoutingStats",
    "Tool",
    "UserPreference",
]

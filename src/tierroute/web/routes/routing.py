"""Routing admin API routes.

Exposes one controller's routing, statistics and event log. Mount the
returned router on any FastAPI app:

    app.include_router(create_routing_router(controller), prefix="/api")
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from tierroute.controller import RouterController
from tierroute.errors import RouterConfigError
from tierroute.types import RoutingContext


class RouteRequest(BaseModel):
    """Prompt to route, with an optional context payload."""
    prompt: str
    context: dict[str, Any] | None = None


class ThresholdRequest(BaseModel):
    threshold: float


def _parse_context(data: dict[str, Any] | None) -> RoutingContext | None:
    if data is None:
        return None
    try:
        return RoutingContext.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid context: {e}")


def create_routing_router(controller: RouterController) -> APIRouter:
    """Build routes bound to ``controller``."""
    router = APIRouter()

    @router.post("/routing/route")
    async def route_prompt(req: RouteRequest):
        """Route a prompt and record it."""
        result = controller.route(req.prompt, _parse_context(req.context))
        return result.to_dict()

    @router.get("/routing/stats")
    async def routing_stats():
        """Current routing statistics."""
        return controller.get_stats().to_dict()

    @router.post("/routing/stats/reset")
    async def reset_routing_stats():
        """Clear statistics and the event log."""
        controller.reset_stats()
        return {"success": True}

    @router.get("/routing/events")
    async def routing_events(count: int = Query(100, ge=1, le=1000)):
        """Most recent routing events, oldest first."""
        events = controller.get_recent_events(count)
        return {"events": [e.to_dict() for e in events]}

    @router.put("/routing/threshold")
    async def set_threshold(req: ThresholdRequest):
        """Update the threshold echoed in routing results."""
        try:
            controller.set_threshold(req.threshold)
        except RouterConfigError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"success": True, "threshold": controller.threshold}

    return router

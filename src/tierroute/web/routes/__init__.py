"""Routes package for the tierroute admin API."""

from tierroute.web.routes.routing import create_routing_router

__all__ = ["create_routing_router"]

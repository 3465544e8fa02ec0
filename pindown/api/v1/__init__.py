"""API v1: routers and request-scoped dependencies."""

from pindown.api.v1.router import api_router

__all__ = ["api_router"]

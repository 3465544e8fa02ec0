"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from pindown.api.v1.dependencies (no manual repo construction).
"""

from fastapi import APIRouter

from pindown.api.v1.endpoints import (
    auth,
    blocks,
    datasets,
    health,
    pinboards,
    pins,
    public,
    users,
    workflow_data,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(pins.router, prefix="/pins", tags=["pins"])
api_router.include_router(blocks.router, prefix="/pins", tags=["blocks"])
api_router.include_router(datasets.router, prefix="/pins", tags=["datasets"])
api_router.include_router(public.router, prefix="/public", tags=["public"])
api_router.include_router(pinboards.router, prefix="/pinboards", tags=["pinboards"])
api_router.include_router(
    workflow_data.router, prefix="/workflow-data", tags=["workflow-data"]
)
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])

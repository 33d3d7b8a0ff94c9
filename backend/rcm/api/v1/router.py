"""
API v1 router that aggregates all endpoint routers.
Capacity routes are team-scoped through the X-Team-ID header; health is public.
"""

from fastapi import APIRouter

from rcm.api.v1.endpoints import (
    health,
    heatmap,
    resources,
)

api_router = APIRouter()

# Public routes
api_router.include_router(health.router, tags=["health"])

# Team-scoped capacity routes
api_router.include_router(heatmap.router, prefix="/rcm/heatmap", tags=["heatmap"])
api_router.include_router(resources.router, prefix="/rcm/resources", tags=["resources"])

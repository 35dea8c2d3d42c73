"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from haven.api.v1.endpoints.breathing import router as breathing_router
from haven.api.v1.endpoints.health import router as health_router

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    breathing_router,
    prefix="/breathing",
    tags=["Breathing"],
)

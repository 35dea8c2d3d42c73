"""
Health Check Endpoints

Provides system health and readiness endpoints for:
- Load balancer health checks
- Kubernetes probes
"""

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from haven.api.dependencies import engine_ready, get_app_settings, get_engine
from haven.config import Settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    components: dict


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Basic health check endpoint for load balancers",
)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Returns 200 if application is running."""
    return HealthResponse(
        status="healthy",
        version="0.1.0",
        environment=settings.env,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check including the breathing engine",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Detailed readiness check.

    Ready once the breathing engine has been created during startup.
    """
    components: dict = {"engine": engine_ready()}

    if components["engine"]:
        engine = get_engine()
        components["patterns"] = len(engine.catalog)
        components["session_active"] = engine.is_active
    else:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        ready=components["engine"],
        components=components,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Returns 200 if application process is alive."""
    return HealthResponse(
        status="alive",
        version="0.1.0",
        environment=settings.env,
    )

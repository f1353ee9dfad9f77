"""Health check endpoints.

Provides liveness and readiness probes for load balancers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from recipe_importer.api.dependencies import get_app_settings
from recipe_importer.core.config import Settings
from recipe_importer.core.events.lifespan import get_llm_client
from recipe_importer.schemas.health import HealthResponse, ReadinessResponse


router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive. Does not check collaborators."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying the import pipeline is available.",
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    """Report whether imports can be served and whether AI fallback is on."""
    pipeline_ready = getattr(request.app.state, "import_pipeline", None) is not None

    if not settings.importing.ai_fallback.enabled:
        ai_status = "disabled"
    elif get_llm_client() is None:
        ai_status = "not_configured"
    else:
        ai_status = "enabled"

    return ReadinessResponse(
        status="ready" if pipeline_ready else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        components={
            "import_pipeline": "healthy" if pipeline_ready else "unavailable",
            "ai_fallback": ai_status,
        },
    )

"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
Returns application status and version.
"""

from fastapi import APIRouter, Request

from server.core.config import settings
from server.interfaces.schemas import ErrorResponse, HealthResponse
from server.shared.security.rate_limiting import limiter

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={429: {"model": ErrorResponse}},
    summary="Health check",
    description="Returns application health status and version.",
)
@limiter.limit(settings.rate_limit_default)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=settings.version)

"""Meta API endpoints (e.g. health)."""

from fastapi import APIRouter, Request

from app.api.openapi_responses import RATE_LIMITED, error_responses
from app.api.schemas import HealthResponse
from app.core.rate_limit import HEALTH_RATE_LIMIT, limit, rate_limit_ip_key

router = APIRouter()


@router.get(
    "/health",
    summary="Health check",
    response_model=HealthResponse,
    responses=error_responses(RATE_LIMITED),
)
@limit(HEALTH_RATE_LIMIT, key_func=rate_limit_ip_key)
def health(request: Request) -> HealthResponse:
    """Check the health of the application."""
    return HealthResponse(status="ok")

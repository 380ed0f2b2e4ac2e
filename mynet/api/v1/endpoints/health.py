"""Health check endpoints for liveness and readiness checks."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from mynet.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Cache store unavailable", "model": ReadinessResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if ready; 503 when the configured cache store is unavailable."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        return ReadinessResponse(cache="disabled")
    if cache.is_available():
        return ReadinessResponse(cache="available")
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="not_ready", cache="unavailable").model_dump(),
    )

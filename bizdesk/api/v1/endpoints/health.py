"""Health endpoints: liveness and readiness (Firebase backend initialized)."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from bizdesk.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Firebase backend not initialized", "model": ReadinessErrorResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 with the backend target once Firebase is initialized, else 503."""
    backend = getattr(request.app.state, "firebase", None)
    if backend is None:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                message="Firebase backend not initialized"
            ).model_dump(),
        )
    return ReadinessResponse(backend_target=backend.target)

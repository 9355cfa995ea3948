"""Health check endpoints. Used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.infrastructure.firebase import get_firestore_client
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Document store not configured", "model": ReadinessErrorResponse}},
)
def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when the document store client is initialized, otherwise 503."""
    backend = get_settings().database_backend
    if get_firestore_client() is not None:
        return ReadinessResponse(database_backend=backend)
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            message=f"Document store ({backend}) is not initialized",
        ).model_dump(),
    )

"""Pydantic request/response schemas for the API."""

from app.schemas.audit_log import (
    AuditLogCreateRequest,
    AuditLogListResponse,
    AuditLogResponse,
)
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.reference import (
    ReferenceCreateRequest,
    ReferenceListResponse,
    ReferenceResponse,
    ReferenceUpdateRequest,
)

__all__ = [
    "AuditLogCreateRequest",
    "AuditLogListResponse",
    "AuditLogResponse",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "ReferenceCreateRequest",
    "ReferenceListResponse",
    "ReferenceResponse",
    "ReferenceUpdateRequest",
]

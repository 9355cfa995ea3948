"""Application DTOs (no store dependency)."""

from app.application.dtos.audit_log import (
    AuditLogCreate,
    AuditLogPage,
    AuditLogResult,
    ReferenceResult,
    audit_log_to_result,
    reference_to_result,
)
from app.application.dtos.pagination import PageResult, PaginationQuery

__all__ = [
    "AuditLogCreate",
    "AuditLogPage",
    "AuditLogResult",
    "PageResult",
    "PaginationQuery",
    "ReferenceResult",
    "audit_log_to_result",
    "reference_to_result",
]

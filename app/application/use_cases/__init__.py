"""Application use cases."""

from app.application.use_cases.audit_logs import AuditLogService

__all__ = ["AuditLogService"]

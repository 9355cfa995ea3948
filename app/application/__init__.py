"""Application layer: DTOs, interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories).
"""

from app.application.interfaces import IAuditLogRepository, IReferenceRepository
from app.application.services import ReferenceResolver
from app.application.use_cases import AuditLogService

__all__ = [
    "AuditLogService",
    "IAuditLogRepository",
    "IReferenceRepository",
    "ReferenceResolver",
]

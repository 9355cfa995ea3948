"""Firestore-backed audit log repository."""

from app.domain.entities import AuditLogEntity
from app.infrastructure.firebase.client import FirestoreClient
from app.infrastructure.firebase.collections import COLLECTION_AUDIT_LOGS
from app.infrastructure.firebase.repositories.base import OrganizationScopedRepository


class AuditLogRepository(OrganizationScopedRepository[AuditLogEntity]):
    """Audit logs of an organization, newest last."""

    def __init__(self, client: FirestoreClient) -> None:
        super().__init__(client, COLLECTION_AUDIT_LOGS, AuditLogEntity)

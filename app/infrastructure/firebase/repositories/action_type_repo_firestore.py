"""Firestore-backed action type repository."""

from app.domain.entities import ActionTypeEntity
from app.infrastructure.firebase.client import FirestoreClient
from app.infrastructure.firebase.collections import COLLECTION_ACTION_TYPES
from app.infrastructure.firebase.repositories.base import OrganizationScopedRepository


class ActionTypeRepository(OrganizationScopedRepository[ActionTypeEntity]):
    """Audit log action types."""

    def __init__(self, client: FirestoreClient) -> None:
        super().__init__(client, COLLECTION_ACTION_TYPES, ActionTypeEntity)

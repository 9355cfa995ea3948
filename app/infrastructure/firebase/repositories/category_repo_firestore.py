"""Firestore-backed category repository."""

from app.domain.entities import CategoryEntity
from app.infrastructure.firebase.client import FirestoreClient
from app.infrastructure.firebase.collections import COLLECTION_CATEGORIES
from app.infrastructure.firebase.repositories.base import OrganizationScopedRepository


class CategoryRepository(OrganizationScopedRepository[CategoryEntity]):
    """Audit log categories."""

    def __init__(self, client: FirestoreClient) -> None:
        super().__init__(client, COLLECTION_CATEGORIES, CategoryEntity)

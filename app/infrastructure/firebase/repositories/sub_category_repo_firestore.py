"""Firestore-backed sub-category repository."""

from app.domain.entities import SubCategoryEntity
from app.infrastructure.firebase.client import FirestoreClient
from app.infrastructure.firebase.collections import COLLECTION_SUB_CATEGORIES
from app.infrastructure.firebase.repositories.base import OrganizationScopedRepository


class SubCategoryRepository(OrganizationScopedRepository[SubCategoryEntity]):
    """Audit log sub-categories."""

    def __init__(self, client: FirestoreClient) -> None:
        super().__init__(client, COLLECTION_SUB_CATEGORIES, SubCategoryEntity)

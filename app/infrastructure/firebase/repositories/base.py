"""Base repository: organization-scoped, paginated, soft-deleting access to one collection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from app.application.dtos.pagination import PageResult, PaginationQuery
from app.domain.entities import OrganizationScopedEntity
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase._rest_client import (
    DOCUMENT_ID_FIELD,
    DocumentMissingError,
    DocumentSnapshot,
)
from app.infrastructure.firebase.client import FirestoreClient
from app.shared.i18n import get_message
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=OrganizationScopedEntity)


class OrganizationScopedRepository(Generic[EntityT]):
    """Base repository with paginated_find, find, find_by_id, create, update, delete.

    Every read is filtered by organization_id; soft-deleted documents
    (deleted_at set) are excluded unless a caller asks for them. Nothing is
    physically removed. Subclasses bind the entity type and collection.
    """

    def __init__(
        self,
        client: FirestoreClient,
        collection_name: str,
        entity_type: type[EntityT],
    ) -> None:
        self._client = client
        self._coll = client.collection(collection_name)
        self.collection_name = collection_name
        self.entity_type = entity_type

    def _not_found(self, entity_id: str) -> ResourceNotFoundException:
        resource_type = self.entity_type.RESOURCE_TYPE
        return ResourceNotFoundException(
            resource_type,
            entity_id,
            get_message("entity_not_found", resource_type=resource_type, id=entity_id),
        )

    def _live_query(self, organization_id: int):
        return (
            self._coll.where("organization_id", "==", organization_id)
            .where("deleted_at", "==", None)
            .order_by("created_at")
            .order_by(DOCUMENT_ID_FIELD)
        )

    async def paginated_find(
        self, organization_id: int, pagination: PaginationQuery
    ) -> PageResult[EntityT]:
        """Return one page of live entities ordered by (created_at, id).

        Fetches items_per_page + 1 to decide whether a next page exists; the
        returned last_id is None on the final page. An unknown cursor, or one
        owned by another organization, yields an empty page.
        """
        query = self._live_query(organization_id)
        if pagination.last_id is not None:
            cursor = await self.find_by_id(
                organization_id, pagination.last_id, include_deleted=True
            )
            if cursor is None:
                return PageResult(items=[], last_id=None)
            query = query.start_after(
                DocumentSnapshot(cursor.id, cursor.to_document())
            )
        query = query.limit(pagination.items_per_page + 1)

        items: list[EntityT] = []
        async for snapshot in query.stream():
            items.append(self.entity_type.from_document(snapshot.id, snapshot.to_dict()))
        has_more = len(items) > pagination.items_per_page
        items = items[: pagination.items_per_page]
        return PageResult(items=items, last_id=items[-1].id if has_more else None)

    async def find(self, organization_id: int) -> list[EntityT]:
        """Return all live entities of the organization in creation order (unbounded)."""
        return [
            self.entity_type.from_document(snapshot.id, snapshot.to_dict())
            async for snapshot in self._live_query(organization_id).stream()
        ]

    async def find_by_id(
        self,
        organization_id: int,
        entity_id: str,
        *,
        include_deleted: bool = False,
    ) -> EntityT | None:
        """Return the entity if it exists in this organization, else None.

        A document owned by another organization is logged and reported as None.
        Soft-deleted entities are returned only when include_deleted is True.
        An ID that cannot name a single document (empty, or containing "/")
        is reported as None without a store call.
        """
        if not entity_id or "/" in entity_id:
            return None
        snapshot = await self._coll.document(entity_id).get()
        if snapshot is None:
            return None
        entity = self.entity_type.from_document(snapshot.id, snapshot.to_dict())
        if not entity.belongs_to_organization(organization_id):
            logger.warning(
                get_message(
                    "document_not_of_organization",
                    resource_type=self.entity_type.RESOURCE_TYPE,
                    id=entity_id,
                    organization_id=organization_id,
                )
            )
            return None
        if entity.is_deleted and not include_deleted:
            return None
        return entity

    async def create(self, organization_id: int, data: Mapping[str, Any]) -> EntityT:
        """Persist a new entity with a fresh ID; only mutable fields are read from data.

        Raises:
            ValidationException: If a required field is missing or invalid.
        """
        now = utc_now()
        fields = {
            key: value
            for key, value in data.items()
            if key in self.entity_type.MUTABLE_FIELDS
        }
        entity = self.entity_type.from_document(
            generate_cuid(),
            {
                **fields,
                "organization_id": organization_id,
                "created_at": now,
                "updated_at": now,
                "deleted_at": None,
            },
        )
        await self._coll.create(entity.id, entity.to_document())
        logger.info(
            "Created %s %s (organization_id=%s)",
            self.entity_type.RESOURCE_TYPE,
            entity.id,
            organization_id,
        )
        return entity

    async def update(
        self, organization_id: int, entity_id: str, changes: Mapping[str, Any]
    ) -> EntityT:
        """Merge the given mutable fields into a live entity and advance updated_at.

        Raises:
            ResourceNotFoundException: If no live entity with this ID exists in
                the organization.
            ValidationException: If a key is unknown or immutable, or the merged
                entity is invalid.
        """
        entity = await self.find_by_id(organization_id, entity_id)
        if entity is None:
            raise self._not_found(entity_id)
        merged = entity.merge(changes, updated_at=utc_now())
        document = merged.to_document()
        patch = {key: document[key] for key in (*changes, "updated_at")}
        try:
            await self._coll.document(entity_id).update(patch)
        except DocumentMissingError:
            raise self._not_found(entity_id) from None
        return merged

    async def delete(self, organization_id: int, entity_id: str) -> bool:
        """Soft delete: set deleted_at and updated_at. Idempotent.

        An already deleted entity is left untouched (its deleted_at is kept).

        Raises:
            ResourceNotFoundException: If the document does not exist in the
                organization.
        """
        entity = await self.find_by_id(organization_id, entity_id, include_deleted=True)
        if entity is None:
            raise self._not_found(entity_id)
        if entity.is_deleted:
            return True
        deleted = entity.mark_deleted(utc_now())
        try:
            await self._coll.document(entity_id).update({
                "deleted_at": deleted.deleted_at,
                "updated_at": deleted.updated_at,
            })
        except DocumentMissingError:
            raise self._not_found(entity_id) from None
        logger.info(
            "Soft deleted %s %s (organization_id=%s)",
            self.entity_type.RESOURCE_TYPE,
            entity_id,
            organization_id,
        )
        return True

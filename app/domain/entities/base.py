"""Base entity for organization-scoped, soft-deletable documents.

Every stored entity carries an identifier, the owning organization, store
timestamps, and an optional deleted_at marker. Subclasses declare which
fields callers may set (MUTABLE_FIELDS) and map themselves to and from
document dicts explicitly.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, ClassVar, Self

from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import ensure_utc


@dataclass(frozen=True, kw_only=True)
class OrganizationScopedEntity:
    """Domain entity owned by exactly one organization.

    Lifecycle is Live (deleted_at is None) -> Deleted (deleted_at set), one-way.
    Validation runs on construction and on every merge.
    """

    RESOURCE_TYPE: ClassVar[str] = "entity"
    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset()

    id: str
    organization_id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate common rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException(
                f"{self.RESOURCE_TYPE} ID is required", field="id"
            )
        if (
            not isinstance(self.organization_id, int)
            or isinstance(self.organization_id, bool)
            or self.organization_id <= 0
        ):
            raise ValidationException(
                "organization_id must be a positive integer", field="organization_id"
            )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def belongs_to_organization(self, organization_id: int) -> bool:
        """Return whether this entity is owned by the given organization."""
        return self.organization_id == organization_id

    def merge(self, changes: Mapping[str, Any], updated_at: datetime) -> Self:
        """Return a copy with the given mutable fields replaced and updated_at set.

        Raises:
            ValidationException: If a key is not a mutable field, or the merged
                entity fails validation.
        """
        unknown = sorted(set(changes) - self.MUTABLE_FIELDS)
        if unknown:
            raise ValidationException(
                f"Cannot update field(s) on {self.RESOURCE_TYPE}: {', '.join(unknown)}",
                field=unknown[0],
            )
        return replace(self, **dict(changes), updated_at=updated_at)

    def mark_deleted(self, deleted_at: datetime) -> Self:
        """Return a soft-deleted copy. Idempotent: an already deleted entity is returned as is."""
        if self.is_deleted:
            return self
        return replace(self, deleted_at=deleted_at, updated_at=deleted_at)

    def to_document(self) -> dict[str, Any]:
        """Return the stored document fields (the ID is the document name, not a field)."""
        return {
            "organization_id": self.organization_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "deleted_at": self.deleted_at,
            **self._payload(),
        }

    def _payload(self) -> dict[str, Any]:
        """Entity-specific stored fields. Override in subclasses."""
        return {}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Self:
        """Build the entity from a document ID and its fields. Override in subclasses."""
        raise NotImplementedError

    @staticmethod
    def _common_fields(doc_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Return constructor kwargs for the fields every entity carries."""
        return {
            "id": doc_id,
            "organization_id": data.get("organization_id"),
            "created_at": ensure_utc(data.get("created_at")),
            "updated_at": ensure_utc(data.get("updated_at")),
            "deleted_at": ensure_utc(data.get("deleted_at")),
        }

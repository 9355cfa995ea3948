"""Reference entities that classify audit logs.

Category, sub-category and action type share one shape (name + description)
and one lifecycle; they are referenced by audit logs, never owned by them.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Self

from app.domain.entities.base import OrganizationScopedEntity
from app.domain.exceptions import ValidationException


@dataclass(frozen=True, kw_only=True)
class ReferenceEntity(OrganizationScopedEntity):
    """Named classification owned by an organization."""

    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"name", "description"})

    name: str
    description: str | None = None

    def validate(self) -> None:
        """Validate name. Raises ValidationException if invalid."""
        super().validate()
        if not self.name or not self.name.strip():
            raise ValidationException(
                f"{self.RESOURCE_TYPE} name is required", field="name"
            )

    def _payload(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Self:
        return cls(
            **cls._common_fields(doc_id, data),
            name=data.get("name", ""),
            description=data.get("description"),
        )


@dataclass(frozen=True, kw_only=True)
class CategoryEntity(ReferenceEntity):
    RESOURCE_TYPE: ClassVar[str] = "category"


@dataclass(frozen=True, kw_only=True)
class SubCategoryEntity(ReferenceEntity):
    RESOURCE_TYPE: ClassVar[str] = "sub_category"


@dataclass(frozen=True, kw_only=True)
class ActionTypeEntity(ReferenceEntity):
    RESOURCE_TYPE: ClassVar[str] = "action_type"

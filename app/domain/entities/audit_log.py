"""Audit log domain entity.

One record of "who did what to which resource" inside an organization.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Self

from app.domain.entities.base import OrganizationScopedEntity
from app.domain.exceptions import ValidationException


@dataclass(frozen=True, kw_only=True)
class AuditLogEntity(OrganizationScopedEntity):
    """Domain entity for an audit log record.

    method, url and user_id are required; classification references
    (category, sub-category, action type) are optional IDs of reference
    entities in the same organization.
    """

    RESOURCE_TYPE: ClassVar[str] = "audit_log"
    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({
        "facility_id",
        "user_id",
        "user_roles",
        "method",
        "url",
        "changes",
        "response",
        "category_id",
        "sub_category_id",
        "action_type_id",
    })

    user_id: int
    method: str
    url: str
    facility_id: int | None = None
    user_roles: list[str] | None = None
    changes: Any = None
    response: Any = None
    category_id: str | None = None
    sub_category_id: str | None = None
    action_type_id: str | None = None

    def validate(self) -> None:
        """Validate audit log rules. Raises ValidationException if invalid."""
        super().validate()
        if self.user_id is None:
            raise ValidationException("user_id is required", field="user_id")
        if not self.method or not self.method.strip():
            raise ValidationException("method is required", field="method")
        if not self.url or not self.url.strip():
            raise ValidationException("url is required", field="url")

    def _payload(self) -> dict[str, Any]:
        return {
            "facility_id": self.facility_id,
            "user_id": self.user_id,
            "user_roles": list(self.user_roles) if self.user_roles is not None else None,
            "method": self.method,
            "url": self.url,
            "changes": self.changes,
            "response": self.response,
            "category_id": self.category_id,
            "sub_category_id": self.sub_category_id,
            "action_type_id": self.action_type_id,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Self:
        return cls(
            **cls._common_fields(doc_id, data),
            facility_id=data.get("facility_id"),
            user_id=data.get("user_id"),
            user_roles=data.get("user_roles"),
            method=data.get("method", ""),
            url=data.get("url", ""),
            changes=data.get("changes"),
            response=data.get("response"),
            category_id=data.get("category_id"),
            sub_category_id=data.get("sub_category_id"),
            action_type_id=data.get("action_type_id"),
        )

"""DTOs for audit logs and the reference types that classify them."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.domain.entities import AuditLogEntity, ReferenceEntity


@dataclass(frozen=True)
class AuditLogCreate:
    """Input for recording one audit log. Reference IDs are optional."""

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


@dataclass(frozen=True)
class ReferenceResult:
    """Category, sub-category or action type read-model."""

    id: str
    organization_id: int
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AuditLogResult:
    """Audit log read-model with resolved references; deleted_at is not exposed."""

    id: str
    organization_id: int
    user_id: int
    method: str
    url: str
    facility_id: int | None
    user_roles: list[str] | None
    changes: Any
    response: Any
    category_id: str | None
    sub_category_id: str | None
    action_type_id: str | None
    category: ReferenceResult | None
    sub_category: ReferenceResult | None
    action_type: ReferenceResult | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AuditLogPage:
    """One page of audit logs and the cursor for the next page."""

    items: list[AuditLogResult]
    last_id: str | None


def reference_to_result(entity: ReferenceEntity) -> ReferenceResult:
    return ReferenceResult(
        id=entity.id,
        organization_id=entity.organization_id,
        name=entity.name,
        description=entity.description,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def audit_log_to_result(
    entity: AuditLogEntity,
    category: ReferenceEntity | None = None,
    sub_category: ReferenceEntity | None = None,
    action_type: ReferenceEntity | None = None,
) -> AuditLogResult:
    """Project an audit log entity and its resolved references to the read-model."""
    return AuditLogResult(
        id=entity.id,
        organization_id=entity.organization_id,
        user_id=entity.user_id,
        method=entity.method,
        url=entity.url,
        facility_id=entity.facility_id,
        user_roles=list(entity.user_roles) if entity.user_roles is not None else None,
        changes=entity.changes,
        response=entity.response,
        category_id=entity.category_id,
        sub_category_id=entity.sub_category_id,
        action_type_id=entity.action_type_id,
        category=reference_to_result(category) if category else None,
        sub_category=reference_to_result(sub_category) if sub_category else None,
        action_type=reference_to_result(action_type) if action_type else None,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )

"""Domain entities: organization-scoped documents with soft delete."""

from app.domain.entities.audit_log import AuditLogEntity
from app.domain.entities.base import OrganizationScopedEntity
from app.domain.entities.reference import (
    ActionTypeEntity,
    CategoryEntity,
    ReferenceEntity,
    SubCategoryEntity,
)

__all__ = [
    "ActionTypeEntity",
    "AuditLogEntity",
    "CategoryEntity",
    "OrganizationScopedEntity",
    "ReferenceEntity",
    "SubCategoryEntity",
]

"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    ActionTypeEntity,
    AuditLogEntity,
    CategoryEntity,
    OrganizationScopedEntity,
    ReferenceEntity,
    SubCategoryEntity,
)
from app.domain.enums import ReferenceKind, ResolutionStatus
from app.domain.exceptions import (
    AuditServiceException,
    ResourceNotFoundException,
    UnresolvedReferenceException,
    ValidationException,
)

__all__ = [
    # Entities
    "ActionTypeEntity",
    "AuditLogEntity",
    "CategoryEntity",
    "OrganizationScopedEntity",
    "ReferenceEntity",
    "SubCategoryEntity",
    # Enums
    "ReferenceKind",
    "ResolutionStatus",
    # Exceptions
    "AuditServiceException",
    "ResourceNotFoundException",
    "UnresolvedReferenceException",
    "ValidationException",
]

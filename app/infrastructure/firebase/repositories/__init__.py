"""Firestore-backed repository implementations."""

from app.infrastructure.firebase.repositories.action_type_repo_firestore import (
    ActionTypeRepository,
)
from app.infrastructure.firebase.repositories.audit_log_repo_firestore import (
    AuditLogRepository,
)
from app.infrastructure.firebase.repositories.base import OrganizationScopedRepository
from app.infrastructure.firebase.repositories.category_repo_firestore import (
    CategoryRepository,
)
from app.infrastructure.firebase.repositories.sub_category_repo_firestore import (
    SubCategoryRepository,
)

__all__ = [
    "ActionTypeRepository",
    "AuditLogRepository",
    "CategoryRepository",
    "OrganizationScopedRepository",
    "SubCategoryRepository",
]

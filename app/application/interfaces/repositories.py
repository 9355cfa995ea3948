"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Every operation is scoped to one organization; entities of other
organizations are never returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.pagination import PageResult, PaginationQuery
    from app.domain.entities import AuditLogEntity, ReferenceEntity


class IReferenceRepository(Protocol):
    """Protocol for category, sub-category and action type repositories."""

    async def find(self, organization_id: int) -> list[ReferenceEntity]:
        """Return all live references of the organization in creation order."""

    async def paginated_find(
        self, organization_id: int, pagination: PaginationQuery
    ) -> PageResult[ReferenceEntity]:
        """Return one page of live references."""

    async def find_by_id(
        self,
        organization_id: int,
        entity_id: str,
        *,
        include_deleted: bool = False,
    ) -> ReferenceEntity | None:
        """Return the reference if it exists in the organization."""

    async def create(
        self, organization_id: int, data: Mapping[str, Any]
    ) -> ReferenceEntity:
        """Create a reference with a fresh ID."""

    async def update(
        self, organization_id: int, entity_id: str, changes: Mapping[str, Any]
    ) -> ReferenceEntity:
        """Merge changes into a live reference."""

    async def delete(self, organization_id: int, entity_id: str) -> bool:
        """Soft delete the reference (idempotent)."""


class IAuditLogRepository(Protocol):
    """Protocol for audit log repository (DIP)."""

    async def paginated_find(
        self, organization_id: int, pagination: PaginationQuery
    ) -> PageResult[AuditLogEntity]:
        """Return one page of live audit logs ordered by creation."""

    async def find_by_id(
        self,
        organization_id: int,
        entity_id: str,
        *,
        include_deleted: bool = False,
    ) -> AuditLogEntity | None:
        """Return the audit log if it exists in the organization."""

    async def create(
        self, organization_id: int, data: Mapping[str, Any]
    ) -> AuditLogEntity:
        """Persist a new audit log with a fresh ID."""

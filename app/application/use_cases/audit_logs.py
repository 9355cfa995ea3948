"""Audit log use cases: record one audit log, list an organization's audit logs."""

from __future__ import annotations

import asyncio
from dataclasses import asdict

from app.application.dtos.audit_log import (
    AuditLogCreate,
    AuditLogPage,
    AuditLogResult,
    audit_log_to_result,
)
from app.application.dtos.pagination import PaginationQuery
from app.application.interfaces.repositories import (
    IAuditLogRepository,
    IReferenceRepository,
)
from app.application.services.reference_resolver import ReferenceResolver
from app.domain.entities import AuditLogEntity, ReferenceEntity
from app.domain.enums import ReferenceKind
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


class AuditLogService:
    """Creates audit logs after resolving their references, and lists them by page."""

    def __init__(
        self,
        audit_log_repo: IAuditLogRepository,
        category_repo: IReferenceRepository,
        sub_category_repo: IReferenceRepository,
        action_type_repo: IReferenceRepository,
    ) -> None:
        self.audit_log_repo = audit_log_repo
        self._reference_repos: dict[ReferenceKind, IReferenceRepository] = {
            ReferenceKind.CATEGORY: category_repo,
            ReferenceKind.SUB_CATEGORY: sub_category_repo,
            ReferenceKind.ACTION_TYPE: action_type_repo,
        }
        self.resolver = ReferenceResolver(
            category_repo, sub_category_repo, action_type_repo
        )

    @traced("audit_log.create")
    async def create_audit_log(
        self, organization_id: int, data: AuditLogCreate
    ) -> AuditLogResult:
        """Resolve the supplied references, then persist the audit log.

        Raises:
            UnresolvedReferenceException: If a supplied reference ID does not
                resolve to a live entity of the organization. Nothing is stored.
        """
        refs = await self.resolver.resolve(
            organization_id,
            category_id=data.category_id,
            sub_category_id=data.sub_category_id,
            action_type_id=data.action_type_id,
        )
        entity = await self.audit_log_repo.create(organization_id, asdict(data))
        return audit_log_to_result(
            entity,
            category=refs.category,
            sub_category=refs.sub_category,
            action_type=refs.action_type,
        )

    @traced("audit_log.list")
    async def get_organization_audit_logs(
        self, organization_id: int, pagination: PaginationQuery
    ) -> AuditLogPage:
        """Return one page of the organization's audit logs with references populated."""
        add_span_attributes(items_per_page=pagination.items_per_page)
        page = await self.audit_log_repo.paginated_find(organization_id, pagination)
        references = await self._load_references(organization_id, page.items)
        items = [
            audit_log_to_result(
                log,
                category=references[ReferenceKind.CATEGORY].get(log.category_id),
                sub_category=references[ReferenceKind.SUB_CATEGORY].get(
                    log.sub_category_id
                ),
                action_type=references[ReferenceKind.ACTION_TYPE].get(
                    log.action_type_id
                ),
            )
            for log in page.items
        ]
        return AuditLogPage(items=items, last_id=page.last_id)

    async def _load_references(
        self, organization_id: int, logs: list[AuditLogEntity]
    ) -> dict[ReferenceKind, dict[str, ReferenceEntity]]:
        """Look up each distinct reference ID on the page once, concurrently.

        Soft-deleted references are included so older logs keep their
        classification.
        """
        keys: list[tuple[ReferenceKind, str]] = []
        for kind in ReferenceKind:
            ids = {getattr(log, kind.field_name) for log in logs}
            keys.extend((kind, ref_id) for ref_id in sorted(i for i in ids if i))
        found = await asyncio.gather(*(
            self._reference_repos[kind].find_by_id(
                organization_id, ref_id, include_deleted=True
            )
            for kind, ref_id in keys
        ))
        references: dict[ReferenceKind, dict[str, ReferenceEntity]] = {
            kind: {} for kind in ReferenceKind
        }
        for (kind, ref_id), entity in zip(keys, found, strict=True):
            if entity is None:
                logger.debug("%s %s referenced by audit logs no longer exists", kind.value, ref_id)
                continue
            references[kind][ref_id] = entity
        return references

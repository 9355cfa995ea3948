"""Conditional, concurrent resolution of an audit log's classification references."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from app.application.interfaces.repositories import IReferenceRepository
from app.domain.entities import ReferenceEntity
from app.domain.enums import ReferenceKind, ResolutionStatus
from app.domain.exceptions import UnresolvedReferenceException
from app.shared.i18n import get_message
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReferenceResolution:
    """Outcome of one reference lookup."""

    kind: ReferenceKind
    status: ResolutionStatus
    entity_id: str | None = None
    entity: ReferenceEntity | None = None


@dataclass(frozen=True)
class ResolvedReferences:
    """Live reference entities for the IDs that were supplied (None where absent)."""

    category: ReferenceEntity | None = None
    sub_category: ReferenceEntity | None = None
    action_type: ReferenceEntity | None = None


class ReferenceResolver:
    """Looks up the supplied category, sub-category and action type IDs concurrently.

    An absent ID is skipped: no lookup and no error. A supplied ID must resolve
    to a live entity of the same organization, otherwise
    UnresolvedReferenceException lists every reference that failed.
    """

    def __init__(
        self,
        category_repo: IReferenceRepository,
        sub_category_repo: IReferenceRepository,
        action_type_repo: IReferenceRepository,
    ) -> None:
        self._repos: dict[ReferenceKind, IReferenceRepository] = {
            ReferenceKind.CATEGORY: category_repo,
            ReferenceKind.SUB_CATEGORY: sub_category_repo,
            ReferenceKind.ACTION_TYPE: action_type_repo,
        }

    async def _lookup(
        self, organization_id: int, kind: ReferenceKind, entity_id: str
    ) -> ReferenceResolution:
        entity = await self._repos[kind].find_by_id(organization_id, entity_id)
        if entity is None:
            return ReferenceResolution(kind, ResolutionStatus.MISSING, entity_id)
        return ReferenceResolution(kind, ResolutionStatus.RESOLVED, entity_id, entity)

    async def resolve(
        self,
        organization_id: int,
        *,
        category_id: str | None = None,
        sub_category_id: str | None = None,
        action_type_id: str | None = None,
    ) -> ResolvedReferences:
        """Resolve the supplied reference IDs within the organization.

        Every started lookup is awaited before any error is raised. A store
        error from a lookup propagates unchanged.

        Raises:
            UnresolvedReferenceException: If one or more supplied IDs do not
                resolve; references are listed in the order category,
                sub-category, action type.
        """
        requested = {
            ReferenceKind.CATEGORY: category_id,
            ReferenceKind.SUB_CATEGORY: sub_category_id,
            ReferenceKind.ACTION_TYPE: action_type_id,
        }
        lookups = {
            kind: self._lookup(organization_id, kind, entity_id)
            for kind, entity_id in requested.items()
            if entity_id
        }
        settled = await asyncio.gather(*lookups.values(), return_exceptions=True)

        outcomes: dict[ReferenceKind, ReferenceResolution] = {
            kind: ReferenceResolution(kind, ResolutionStatus.SKIPPED)
            for kind in ReferenceKind
        }
        for kind, result in zip(lookups, settled, strict=True):
            if isinstance(result, BaseException):
                raise result
            outcomes[kind] = result

        missing = [
            (kind, outcome.entity_id)
            for kind, outcome in outcomes.items()
            if outcome.status is ResolutionStatus.MISSING
        ]
        if missing:
            first_kind, first_id = missing[0]
            logger.info(
                "Unresolved references for organization %s: %s",
                organization_id,
                ", ".join(f"{kind.value}={ref_id}" for kind, ref_id in missing),
            )
            raise UnresolvedReferenceException(
                get_message(first_kind.message_key, id=first_id), missing
            )

        return ResolvedReferences(
            category=outcomes[ReferenceKind.CATEGORY].entity,
            sub_category=outcomes[ReferenceKind.SUB_CATEGORY].entity,
            action_type=outcomes[ReferenceKind.ACTION_TYPE].entity,
        )

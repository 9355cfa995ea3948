"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the organization, the document store client,
repositories and the audit log service. Routes depend only on these, never
on infrastructure directly. The store backend (Firestore REST or in-memory)
is chosen by DATABASE_BACKEND at startup.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request

from app.application.dtos.pagination import PaginationQuery
from app.application.use_cases.audit_logs import AuditLogService
from app.core.config import get_settings
from app.infrastructure.firebase import FirestoreClient, get_firestore_client
from app.infrastructure.firebase.repositories import (
    ActionTypeRepository,
    AuditLogRepository,
    CategoryRepository,
    SubCategoryRepository,
)


def get_organization_id(request: Request) -> int:
    """Return the organization from the X-Organization-ID header (positive integer)."""
    name = get_settings().organization_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(status_code=400, detail=f"Missing required header: {name}")
    try:
        organization_id = int(value.strip())
    except ValueError:
        organization_id = 0
    if organization_id <= 0:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {name}: must be a positive integer",
        )
    return organization_id


def get_store_client() -> FirestoreClient:
    """Return the document store client; 503 if it was not initialized."""
    client = get_firestore_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Document store not configured")
    return client


def get_pagination(
    items_per_page: Annotated[int | None, Query(ge=1)] = None,
    last_id: Annotated[str | None, Query(min_length=1)] = None,
) -> PaginationQuery:
    """Build the page request; page size defaults and is capped from settings."""
    settings = get_settings()
    size = items_per_page or settings.default_items_per_page
    return PaginationQuery(
        items_per_page=min(size, settings.max_items_per_page),
        last_id=last_id,
    )


def get_audit_log_repo(
    client: Annotated[FirestoreClient, Depends(get_store_client)],
) -> AuditLogRepository:
    return AuditLogRepository(client)


def get_category_repo(
    client: Annotated[FirestoreClient, Depends(get_store_client)],
) -> CategoryRepository:
    return CategoryRepository(client)


def get_sub_category_repo(
    client: Annotated[FirestoreClient, Depends(get_store_client)],
) -> SubCategoryRepository:
    return SubCategoryRepository(client)


def get_action_type_repo(
    client: Annotated[FirestoreClient, Depends(get_store_client)],
) -> ActionTypeRepository:
    return ActionTypeRepository(client)


def get_audit_log_service(
    audit_log_repo: Annotated[AuditLogRepository, Depends(get_audit_log_repo)],
    category_repo: Annotated[CategoryRepository, Depends(get_category_repo)],
    sub_category_repo: Annotated[SubCategoryRepository, Depends(get_sub_category_repo)],
    action_type_repo: Annotated[ActionTypeRepository, Depends(get_action_type_repo)],
) -> AuditLogService:
    """Audit log service wired to the repositories of the configured store."""
    return AuditLogService(
        audit_log_repo=audit_log_repo,
        category_repo=category_repo,
        sub_category_repo=sub_category_repo,
        action_type_repo=action_type_repo,
    )

"""Audit log API: thin routes delegating to AuditLogService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_audit_log_service,
    get_organization_id,
    get_pagination,
)
from app.application.dtos.audit_log import AuditLogCreate
from app.application.dtos.pagination import PaginationQuery
from app.application.use_cases.audit_logs import AuditLogService
from app.core.limiter import limit_writes
from app.schemas.audit_log import (
    AuditLogCreateRequest,
    AuditLogListResponse,
    AuditLogResponse,
)

router = APIRouter()


@router.post("", response_model=AuditLogResponse, status_code=201)
@limit_writes
async def create_audit_log(
    request: Request,
    body: AuditLogCreateRequest,
    organization_id: Annotated[int, Depends(get_organization_id)],
    service: Annotated[AuditLogService, Depends(get_audit_log_service)],
):
    """Record an audit log. Supplied category/sub-category/action type IDs must exist (400 otherwise)."""
    created = await service.create_audit_log(
        organization_id, AuditLogCreate(**body.model_dump())
    )
    return AuditLogResponse.model_validate(created)


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    organization_id: Annotated[int, Depends(get_organization_id)],
    service: Annotated[AuditLogService, Depends(get_audit_log_service)],
    pagination: Annotated[PaginationQuery, Depends(get_pagination)],
):
    """List the organization's audit logs in creation order. Pass last_id from the previous page to continue."""
    page = await service.get_organization_audit_logs(organization_id, pagination)
    return AuditLogListResponse.model_validate(page)

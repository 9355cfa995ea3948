"""Request/response schemas for audit log API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.reference import ReferenceResponse


class AuditLogCreateRequest(BaseModel):
    """Request body for recording an audit log.

    Any id, organization_id or timestamp in the body is ignored; the
    organization comes from the X-Organization-ID header.
    """

    user_id: int
    method: str = Field(..., min_length=1, max_length=16)
    url: str = Field(..., min_length=1)
    facility_id: int | None = None
    user_roles: list[str] | None = None
    changes: Any = None
    response: Any = None
    category_id: str | None = None
    sub_category_id: str | None = None
    action_type_id: str | None = None


class AuditLogResponse(BaseModel):
    """Single audit log with its resolved references (read)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: int
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
    category: ReferenceResponse | None = None
    sub_category: ReferenceResponse | None = None
    action_type: ReferenceResponse | None = None
    created_at: datetime
    updated_at: datetime


class AuditLogListResponse(BaseModel):
    """One page of audit logs; last_id is the cursor for the next page (None on the last page)."""

    model_config = ConfigDict(from_attributes=True)

    items: list[AuditLogResponse]
    last_id: str | None = None

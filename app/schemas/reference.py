"""Request/response schemas for categories, sub-categories and action types."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReferenceCreateRequest(BaseModel):
    """Request body for creating a category, sub-category or action type."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class ReferenceUpdateRequest(BaseModel):
    """Request body for PATCH (partial update). Only fields sent are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class ReferenceResponse(BaseModel):
    """Category, sub-category or action type (read)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: int
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ReferenceListResponse(BaseModel):
    """One page of references; last_id is the cursor for the next page."""

    items: list[ReferenceResponse]
    last_id: str | None = None

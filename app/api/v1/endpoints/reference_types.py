"""Category, sub-category and action type API.

The three reference types share one shape and lifecycle, so their routes are
built by one factory bound to a repository dependency.
"""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import (
    get_action_type_repo,
    get_category_repo,
    get_organization_id,
    get_pagination,
    get_sub_category_repo,
)
from app.application.dtos.pagination import PaginationQuery
from app.application.interfaces.repositories import IReferenceRepository
from app.core.limiter import limit_writes
from app.domain.exceptions import ResourceNotFoundException
from app.schemas.reference import (
    ReferenceCreateRequest,
    ReferenceListResponse,
    ReferenceResponse,
    ReferenceUpdateRequest,
)
from app.shared.i18n import get_message


def _endpoint_name(name: str) -> Callable:
    """Give a factory-built endpoint a unique name (route name and rate limit key)."""

    def decorator(func: Callable) -> Callable:
        func.__name__ = name
        func.__qualname__ = name
        return func

    return decorator


def build_reference_router(
    resource_type: str,
    get_repo: Callable[..., IReferenceRepository],
) -> APIRouter:
    """Return CRUD routes for one reference type backed by get_repo."""
    router = APIRouter()
    Repo = Annotated[IReferenceRepository, Depends(get_repo)]
    OrganizationId = Annotated[int, Depends(get_organization_id)]

    @router.post("", response_model=ReferenceResponse, status_code=201)
    @limit_writes
    @_endpoint_name(f"create_{resource_type}")
    async def create_reference(
        request: Request,
        body: ReferenceCreateRequest,
        organization_id: OrganizationId,
        repo: Repo,
    ):
        created = await repo.create(organization_id, body.model_dump())
        return ReferenceResponse.model_validate(created)

    @router.get("", response_model=ReferenceListResponse)
    @_endpoint_name(f"list_{resource_type}")
    async def list_references(
        organization_id: OrganizationId,
        repo: Repo,
        pagination: Annotated[PaginationQuery, Depends(get_pagination)],
    ):
        page = await repo.paginated_find(organization_id, pagination)
        return ReferenceListResponse(
            items=[ReferenceResponse.model_validate(item) for item in page.items],
            last_id=page.last_id,
        )

    @router.get("/{entity_id}", response_model=ReferenceResponse)
    @_endpoint_name(f"get_{resource_type}")
    async def get_reference(
        entity_id: str,
        organization_id: OrganizationId,
        repo: Repo,
    ):
        item = await repo.find_by_id(organization_id, entity_id)
        if item is None:
            raise ResourceNotFoundException(
                resource_type,
                entity_id,
                get_message("entity_not_found", resource_type=resource_type, id=entity_id),
            )
        return ReferenceResponse.model_validate(item)

    @router.patch("/{entity_id}", response_model=ReferenceResponse)
    @limit_writes
    @_endpoint_name(f"update_{resource_type}")
    async def update_reference(
        request: Request,
        entity_id: str,
        body: ReferenceUpdateRequest,
        organization_id: OrganizationId,
        repo: Repo,
    ):
        """Partial update: only fields present in the body are changed."""
        updated = await repo.update(
            organization_id, entity_id, body.model_dump(exclude_unset=True)
        )
        return ReferenceResponse.model_validate(updated)

    @router.delete("/{entity_id}", status_code=204)
    @limit_writes
    @_endpoint_name(f"delete_{resource_type}")
    async def delete_reference(
        request: Request,
        entity_id: str,
        organization_id: OrganizationId,
        repo: Repo,
    ) -> Response:
        """Soft delete. Deleting an already deleted entity succeeds."""
        await repo.delete(organization_id, entity_id)
        return Response(status_code=204)

    return router


categories_router = build_reference_router("category", get_category_repo)
sub_categories_router = build_reference_router("sub_category", get_sub_category_repo)
action_types_router = build_reference_router("action_type", get_action_type_repo)

"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import audit_logs, health, reference_types

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
api_router.include_router(
    reference_types.categories_router, prefix="/categories", tags=["categories"]
)
api_router.include_router(
    reference_types.sub_categories_router,
    prefix="/sub-categories",
    tags=["sub-categories"],
)
api_router.include_router(
    reference_types.action_types_router,
    prefix="/action-types",
    tags=["action-types"],
)

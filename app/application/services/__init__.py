"""Application services used by the use cases."""

from app.application.services.reference_resolver import (
    ReferenceResolution,
    ReferenceResolver,
    ResolvedReferences,
)

__all__ = [
    "ReferenceResolution",
    "ReferenceResolver",
    "ResolvedReferences",
]

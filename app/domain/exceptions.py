"""Domain exceptions for the audit log service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any

from app.domain.enums import ReferenceKind


class AuditServiceException(Exception):
    """Base exception for all audit log service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the HTTP layer."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AuditServiceException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            details: Optional extra context merged into details.
        """
        merged = {"field": field} if field else {}
        merged.update(details or {})
        super().__init__(message, "VALIDATION_ERROR", merged)


class UnresolvedReferenceException(ValidationException):
    """Raised when supplied reference IDs do not resolve to live entities.

    Every unresolved reference is listed in details["references"], in the
    order category, sub-category, action type. The message is the one of the
    first unresolved reference.
    """

    def __init__(
        self, message: str, missing: list[tuple[ReferenceKind, str]]
    ) -> None:
        """Initialize with the message and the (kind, id) pairs that failed.

        Args:
            message: Localized message for the first unresolved reference.
            missing: Non-empty list of (reference kind, identifier).
        """
        self.missing = list(missing)
        first_kind, first_id = self.missing[0]
        super().__init__(
            message,
            field=first_kind.field_name,
            details={
                "reference": first_kind.value,
                "id": first_id,
                "references": [
                    {"reference": kind.value, "id": ref_id}
                    for kind, ref_id in self.missing
                ],
            },
        )


class ResourceNotFoundException(AuditServiceException):
    """Raised when a requested resource is not found.

    Also raised when the resource exists in another organization; the two
    cases are indistinguishable to callers.
    """

    def __init__(
        self, resource_type: str, resource_id: str, message: str | None = None
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'category', 'audit_log').
            resource_id: The ID that was not found.
            message: Optional localized message; a plain English one otherwise.
        """
        super().__init__(
            message or f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )

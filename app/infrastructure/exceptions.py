"""Infrastructure exceptions for document store operations.

Store errors extend AuditServiceException so presentation can map them
to HTTP responses consistently. They are never retried in-process.
"""

from app.domain.exceptions import AuditServiceException


class StoreException(AuditServiceException):
    """Document store call failed (connectivity, timeout, rejected request)."""

    def __init__(
        self, operation: str, reason: str, status_code: int | None = None
    ) -> None:
        details: dict = {"operation": operation, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Document store {operation} failed",
            "STORE_ERROR",
            details,
        )

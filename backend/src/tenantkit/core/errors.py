"""Error definitions for the service layer.

Every domain failure raised by repositories and services is a
ServiceError carrying an ErrorKind. The API layer maps kinds onto HTTP
status codes and a stable error code string.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Caller-facing error taxonomy."""

    VALIDATION = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    BUSINESS = "BUSINESS_RULE_VIOLATION"
    INTERNAL = "INTERNAL_SERVER_ERROR"
    CANCELLED = "REQUEST_CANCELLED"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.BUSINESS: 422,
    ErrorKind.INTERNAL: 500,
    ErrorKind.CANCELLED: 499,
}


class ServiceError(Exception):
    """Base exception for all domain errors.

    Attributes:
        kind: Position in the error taxonomy.
        message: Human-readable error message, safe to return to callers.
        details: Additional error details.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the service error."""
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @property
    def error_code(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API response."""
        body: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "errorCode": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    """Input was malformed or carried a disallowed value."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        """Initialize validation error."""
        super().__init__(ErrorKind.VALIDATION, message)
        self.errors = errors or [message]

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary, including the individual field errors."""
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class UnauthorizedError(ServiceError):
    """Authentication failed or the presented credential is invalid."""

    def __init__(self, message: str = "Unauthorized access") -> None:
        """Initialize unauthorized error."""
        super().__init__(ErrorKind.UNAUTHORIZED, message)


class ForbiddenError(ServiceError):
    """Caller is authenticated but not permitted for this tenant or role."""

    def __init__(self, message: str = "Access forbidden") -> None:
        """Initialize forbidden error."""
        super().__init__(ErrorKind.FORBIDDEN, message)


class NotFoundError(ServiceError):
    """Referenced entity is absent or soft-deleted."""

    def __init__(self, entity: str, entity_id: str) -> None:
        """Initialize not found error."""
        super().__init__(
            ErrorKind.NOT_FOUND,
            f"{entity} with id '{entity_id}' was not found",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(ServiceError):
    """A uniqueness rule was violated."""

    def __init__(self, message: str) -> None:
        """Initialize conflict error."""
        super().__init__(ErrorKind.CONFLICT, message)


class BusinessError(ServiceError):
    """A domain rule not covered by the other kinds was violated."""

    def __init__(self, message: str) -> None:
        """Initialize business rule error."""
        super().__init__(ErrorKind.BUSINESS, message)

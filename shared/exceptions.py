"""
Error taxonomy for the Noodle backend.

Every failure that can reach a caller is one of a small, closed set of
kinds. Each kind has a stable machine-readable code and exactly one
HTTP-style status, looked up through ``status_for``. Feature modules
subclass these kinds for more specific codes but never add new kinds.
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Closed set of caller-visible error kinds."""

    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.RATE_LIMIT_EXCEEDED: 429,
    ErrorKind.INTERNAL_ERROR: 500,
}


def status_for(kind: ErrorKind) -> int:
    """Return the HTTP status for an error kind."""
    return STATUS_BY_KIND[kind]


class NoodleError(Exception):
    """
    Base exception for all Noodle errors.

    Subclasses fix ``kind``; the status code is always derived from it.
    """

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.kind.value
        self.details = dict(details or {})

    @property
    def status_code(self) -> int:
        return status_for(self.kind)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(NoodleError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message, code, details)
        self.resource = resource
        self.identifier = identifier


class UnauthorizedError(NoodleError):
    """Authentication failed (invalid or missing credentials)."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized access", **kwargs: Any):
        super().__init__(message, **kwargs)


class ForbiddenError(NoodleError):
    """Authorization failed (insufficient permissions)."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "Access forbidden", **kwargs: Any):
        super().__init__(message, **kwargs)


class ValidationError(NoodleError):
    """Input validation failed."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        fields: Optional[dict[str, str]] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.fields = fields
        if fields:
            self.details["fields"] = fields


class ConflictError(NoodleError):
    """Request conflicts with the current state of a resource."""

    kind = ErrorKind.CONFLICT


class RateLimitError(NoodleError):
    """Caller exceeded its request budget."""

    kind = ErrorKind.RATE_LIMIT_EXCEEDED

    def __init__(
        self,
        message: str = "Too many requests",
        retry_after: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class InternalError(NoodleError):
    """Unexpected failure inside the service."""

    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str = "Internal server error", **kwargs: Any):
        super().__init__(message, **kwargs)


class ExternalServiceError(InternalError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code=code, details=details)
        self.service = service
        self.details["service"] = service

"""
SEA Catering API - Custom Exception Classes.

Exception hierarchy for application error handling. Every error carries a
stable machine-readable ``kind`` (the error class) and ``code`` (the guard
that failed) alongside the human-readable message.
"""

from typing import Any, Dict, Optional


class SeaCateringException(Exception):
    """
    Base exception class for SEA Catering application.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error.
        kind: Stable error category (validation_error, not_found, ...).
        code: Stable identifier of the specific failure.
    """

    status_code: int = 500
    kind: str = "internal_error"

    def __init__(
        self,
        message: str = "An error occurred",
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        """
        Initialize SeaCateringException.

        Args:
            message: Human-readable error message.
            code: Identifier of the failed check (defaults to the kind).
            status_code: Override for the class status code.
        """
        self.message = message
        self.code = code or self.kind
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Render the error envelope returned to API callers."""
        return {
            "error": {
                "kind": self.kind,
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationError(SeaCateringException):
    """
    Exception raised for input validation failures.

    Used when:
    - Invalid input format
    - Missing required fields
    - Business rule violations (price mismatch, illegal transition)
    """

    status_code = 400
    kind = "validation_error"

    def __init__(self, message: str = "Validation error", code: Optional[str] = None):
        super().__init__(message=message, code=code)


class AuthenticationError(SeaCateringException):
    """
    Exception raised for authentication failures.

    Used when:
    - Invalid credentials
    - Expired tokens
    - Missing authentication
    """

    status_code = 401
    kind = "unauthorized"

    def __init__(self, message: str = "Authentication required", code: Optional[str] = None):
        super().__init__(message=message, code=code)


class ForbiddenError(SeaCateringException):
    """Exception raised when the caller lacks permission."""

    status_code = 403
    kind = "forbidden"

    def __init__(self, message: str = "Access denied", code: Optional[str] = None):
        super().__init__(message=message, code=code)


class CSRFError(ForbiddenError):
    """Missing, expired or mismatching anti-forgery token."""

    kind = "csrf_failed"

    def __init__(self, message: str = "CSRF validation failed", code: Optional[str] = None):
        super().__init__(message=message, code=code)


class NotFoundError(SeaCateringException):
    """
    Exception raised when a resource is not found.

    Used when:
    - User not found
    - Subscription does not exist or belongs to someone else
    """

    status_code = 404
    kind = "not_found"

    def __init__(self, message: str = "Resource not found", code: Optional[str] = None):
        super().__init__(message=message, code=code)


class ConflictError(SeaCateringException):
    """
    Exception raised for resource conflicts.

    Used when:
    - Duplicate entry
    - Concurrent status change lost the race
    """

    status_code = 409
    kind = "conflict"

    def __init__(self, message: str = "Resource conflict", code: Optional[str] = None):
        super().__init__(message=message, code=code)


class StorageUnavailableError(SeaCateringException):
    """Raised once transient storage failures exhaust the retry budget."""

    status_code = 503
    kind = "storage_unavailable"

    def __init__(
        self,
        message: str = "The service is temporarily unavailable, please try again",
        code: Optional[str] = None,
    ):
        super().__init__(message=message, code=code)

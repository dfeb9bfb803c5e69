"""SEA Catering API - Utilities Package."""

from app.utils.security import (
    validate_password_strength,
    sanitize_input,
    contains_xss,
)
from app.utils.errors import (
    SeaCateringException,
    ValidationError,
    AuthenticationError,
    ForbiddenError,
    CSRFError,
    NotFoundError,
    ConflictError,
    StorageUnavailableError,
)
from app.utils.retry import run_with_retry, is_transient_error

__all__ = [
    "validate_password_strength",
    "sanitize_input",
    "contains_xss",
    "SeaCateringException",
    "ValidationError",
    "AuthenticationError",
    "ForbiddenError",
    "CSRFError",
    "NotFoundError",
    "ConflictError",
    "StorageUnavailableError",
    "run_with_retry",
    "is_transient_error",
]

"""
SEA Catering API - Rate Limiting Middleware.

Prevents API abuse with configurable per-route rate limits.
Uses SlowAPI; point RATE_LIMIT_STORAGE_URI at Redis to share counters
between workers.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from settings import settings


logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Client address, honouring X-Forwarded-For and X-Real-IP from the proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key identifier from request.

    Uses user ID from JWT if authenticated, otherwise IP address.

    Args:
        request: FastAPI request object.

    Returns:
        str: User ID or IP address for rate limiting.
    """
    # Set by JWTBearer once the token is verified
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"

    return f"ip:{get_client_ip(request)}"


limiter = Limiter(
    key_func=get_user_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED and settings.ENV != "testing",
)


def auth_limit() -> str:
    """Rate limit for login and register."""
    return settings.RATE_LIMIT_AUTH


def general_limit() -> str:
    """Default rate limit for API endpoints."""
    return settings.RATE_LIMIT_GENERAL


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Turn a RateLimitExceeded into the standard error envelope.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSONResponse: 429 Too Many Requests with a Retry-After header.
    """
    retry_after = 60
    limit = getattr(exc, "limit", None)
    if limit is not None and getattr(limit, "limit", None) is not None:
        retry_after = int(limit.limit.get_expiry())

    logger.warning(f"Rate limit exceeded for {get_user_identifier(request)} on {request.url.path}")

    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "kind": "rate_limited",
                "code": "rate_limited",
                "message": "Too many requests, please try again later",
                "retry_after_seconds": retry_after,
            }
        },
        headers={"Retry-After": str(retry_after)},
    )

"""
SEA Catering API - FastAPI Dependencies.

Dependency injection helpers for routes.
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth import TokenIdentity, jwt_bearer
from app.models.user import User
from app.services.csrf import CSRFService
from app.services.subscription_lifecycle import SubscriptionLifecycle
from app.services.token_store import TokenStore, create_token_store
from app.utils.errors import AuthenticationError, ForbiddenError
from settings import settings


_token_store: Optional[TokenStore] = None


async def get_current_user_id(
    identity: TokenIdentity = Depends(jwt_bearer)
) -> int:
    """
    Get current authenticated user ID from JWT token.

    Args:
        identity: Caller identity extracted by jwt_bearer dependency.

    Returns:
        int: Authenticated user's ID.

    Raises:
        AuthenticationError: 401 if not authenticated.
    """
    if not identity:
        raise AuthenticationError("Authentication required", code="missing_token")
    return identity.user_id


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    Get current authenticated user from database.

    Raises:
        AuthenticationError: 401 if the token's user no longer exists.
    """
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User no longer exists", code="user_not_found")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only administrators through."""
    if not user.is_admin:
        raise ForbiddenError("Admin access required", code="admin_required")
    return user


def get_token_store() -> TokenStore:
    """Shared token store, built from TOKEN_STORE_URL on first use."""
    global _token_store
    if _token_store is None:
        _token_store = create_token_store(settings.TOKEN_STORE_URL)
    return _token_store


def get_csrf_service(store: TokenStore = Depends(get_token_store)) -> CSRFService:
    return CSRFService(store, ttl_seconds=settings.CSRF_TOKEN_TTL_SECONDS)


async def require_csrf(
    user_id: int = Depends(get_current_user_id),
    csrf: CSRFService = Depends(get_csrf_service),
    x_csrf_token: Optional[str] = Header(default=None, alias="X-CSRF-Token"),
) -> int:
    """
    Reject state-changing requests without a valid CSRF token.

    Returns:
        int: Authenticated user's ID.

    Raises:
        CSRFError: 403 when the token is missing, expired or wrong.
    """
    await csrf.validate(user_id, x_csrf_token)
    return user_id


def get_lifecycle(db: Session = Depends(get_db)) -> SubscriptionLifecycle:
    """Subscription state machine bound to the request's session."""
    return SubscriptionLifecycle(db)

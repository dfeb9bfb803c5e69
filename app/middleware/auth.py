"""
SEA Catering API - Authentication Middleware.

JWT verification for protected routes.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.services.auth import verify_token
from app.utils.errors import AuthenticationError


@dataclass
class TokenIdentity:
    """Identity carried by a verified access token."""

    user_id: int
    role: int


class JWTBearer(HTTPBearer):
    """
    JWT Bearer token authentication.

    Custom HTTPBearer that validates JWT tokens on protected routes and
    records the caller on ``request.state`` for rate-limit keys.

    Attributes:
        auto_error: Whether to raise on missing or invalid credentials.
    """

    def __init__(self, auto_error: bool = True):
        """
        Initialize JWTBearer.

        Args:
            auto_error: Whether to raise AuthenticationError on auth failure.
        """
        super().__init__(auto_error=False)
        self.raise_on_error = auto_error

    def _fail(self, message: str, code: str) -> None:
        if self.raise_on_error:
            raise AuthenticationError(message, code=code)
        return None

    async def __call__(self, request: Request) -> Optional[TokenIdentity]:
        """
        Verify JWT token from Authorization header.

        Args:
            request: FastAPI request object.

        Returns:
            Optional[TokenIdentity]: Caller identity if the token is valid.

        Raises:
            AuthenticationError: 401 if token is invalid or missing.
        """
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if not credentials:
            return self._fail("Authentication required", "missing_token")

        if credentials.scheme.lower() != "bearer":
            return self._fail("Invalid authentication scheme", "invalid_scheme")

        payload = verify_token(credentials.credentials)
        if not payload:
            return self._fail("Invalid or expired token", "invalid_token")

        try:
            identity = TokenIdentity(user_id=int(payload["sub"]), role=int(payload.get("role", 1)))
        except (KeyError, TypeError, ValueError):
            return self._fail("Invalid token payload", "invalid_token")

        request.state.user_id = identity.user_id
        return identity


# Global JWT bearer instance for dependency injection
jwt_bearer = JWTBearer()

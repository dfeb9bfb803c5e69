"""
SEA Catering API - CSRF Token Service.

Per-user anti-forgery tokens. A token is issued on request, kept in the
token store for a limited time, and must accompany every state-changing
call in the ``X-CSRF-Token`` header.
"""

import hmac
import logging
import secrets
from typing import Optional

from app.services.token_store import TokenStore
from app.utils.errors import CSRFError

logger = logging.getLogger(__name__)


class CSRFService:
    """Issue and check CSRF tokens against a ``TokenStore``."""

    def __init__(self, store: TokenStore, ttl_seconds: int = 3600):
        self.store = store
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(user_id) -> str:
        return f"csrf:{user_id}"

    async def issue(self, user_id) -> str:
        """
        Return the user's current token, creating one when none is live.

        Args:
            user_id: Authenticated user id.

        Returns:
            str: 64 hex character token.
        """
        existing = await self.store.get(self._key(user_id))
        if existing:
            return existing
        return await self.refresh(user_id)

    async def refresh(self, user_id) -> str:
        """Replace the user's token with a new one."""
        token = secrets.token_hex(32)
        await self.store.set(self._key(user_id), token, self.ttl_seconds)
        logger.debug(f"Issued CSRF token for user {user_id}")
        return token

    async def validate(self, user_id, token: Optional[str]) -> None:
        """
        Check ``token`` against the stored one.

        Raises:
            CSRFError: Missing, expired or mismatching token.
        """
        if not token:
            raise CSRFError("CSRF token missing", code="csrf_missing")

        stored = await self.store.get(self._key(user_id))
        if not stored:
            raise CSRFError("CSRF token expired", code="csrf_expired")

        if not hmac.compare_digest(str(stored), token):
            logger.warning(f"CSRF token mismatch for user {user_id}")
            raise CSRFError("Invalid CSRF token", code="csrf_invalid")

"""
SEA Catering API - Token Store.

Key-value storage with TTL for short-lived security tokens (CSRF tokens).
Injected into request handling instead of living in module-level dicts, so
several workers can share Redis and tests can use a fresh in-memory store.
"""

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from app.utils.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


class TokenStore(ABC):
    """Async key-value store with per-key expiry."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""


class MemoryTokenStore(TokenStore):
    """Single-process store for development and tests."""

    def __init__(self, clock=time.monotonic):
        self._items: Dict[str, Tuple[Any, float]] = {}
        self._clock = clock

    async def get(self, key: str) -> Optional[Any]:
        item = self._items.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at <= self._clock():
            self._items.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._items[key] = (value, self._clock() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._items.pop(key, None)


class RedisTokenStore(TokenStore):
    """
    Redis-backed store shared by all API workers.

    Lazy-initializes the client so the app can start before Redis is up.
    Unlike a cache, a failing token store must not fail open, so Redis
    errors surface as StorageUnavailableError.
    """

    def __init__(self, redis_url: str, socket_timeout: int = 5):
        self._redis_url = redis_url
        self._socket_timeout = socket_timeout
        self._client = None

    @property
    def client(self):
        """Lazy-load Redis client with connection pooling."""
        if self._client is None:
            import redis.asyncio as redis

            self._client = redis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
                max_connections=50,
                socket_connect_timeout=self._socket_timeout,
                socket_timeout=self._socket_timeout,
                retry_on_timeout=True,
            )
        return self._client

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await self.client.get(key)
        except Exception as e:
            logger.error(f"Token store get failed: {e}")
            raise StorageUnavailableError() from e
        return json.loads(value) if value else None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            await self.client.setex(key, ttl_seconds, json.dumps(value))
        except Exception as e:
            logger.error(f"Token store set failed: {e}")
            raise StorageUnavailableError() from e

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except Exception as e:
            logger.error(f"Token store delete failed: {e}")
            raise StorageUnavailableError() from e


def create_token_store(url: str) -> TokenStore:
    """Build the store named by ``TOKEN_STORE_URL`` (memory:// or redis://...)."""
    if url.startswith("memory://"):
        logger.info("Using in-memory token store")
        return MemoryTokenStore()
    if url.startswith(("redis://", "rediss://", "unix://")):
        logger.info("Using Redis token store")
        return RedisTokenStore(url)
    raise ValueError(f"Unsupported TOKEN_STORE_URL: {url}")

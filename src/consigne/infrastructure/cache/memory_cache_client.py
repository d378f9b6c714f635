"""In-process cache client backed by cachetools."""

import time
from typing import Optional

from cachetools import TTLCache

from consigne.infrastructure.cache.i_cache_client import ICacheClient


class MemoryCacheClient(ICacheClient):
    """
    In-memory key-value store for session-scoped state.

    Entries live in a TTLCache with LRU eviction. Per-key expirations
    shorter than the cache TTL are tracked alongside the value.
    """

    def __init__(self, maxsize: int = 1000, ttl: int = 86400):
        """
        Initialize memory cache.

        Args:
            maxsize: Max items kept (default: 1000)
            ttl: Default TTL in seconds (default: 24h)
        """
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    async def connect(self) -> None:
        """No connection needed."""

    async def disconnect(self) -> None:
        """Drop all entries."""
        self._cache.clear()

    async def set(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        deadline = time.monotonic() + expire_seconds if expire_seconds else None
        self._cache[key] = (value, deadline)
        return True

    async def get(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None

        value, deadline = entry
        if deadline is not None and time.monotonic() >= deadline:
            self._cache.pop(key, None)
            return None
        return value

    async def delete(self, key: str) -> bool:
        return self._cache.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

"""Redis cache client implementation."""

from typing import Optional

import redis.asyncio as aioredis

from consigne.infrastructure.cache.i_cache_client import ICacheClient


class RedisCacheClient(ICacheClient):
    """
    Redis cache client using async redis library.

    Provides key-value storage with automatic expiration. Survives process
    restarts, so it can back the durable disconnect marker.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
    ):
        """
        Initialize Redis client configuration.

        Args:
            host: Redis server host
            port: Redis server port
            db: Redis database number (0-15)
            password: Redis password (None if no auth)
        """
        self.host = host
        self.port = port
        self.db = db
        self.password = password if password else None
        self._client: Optional[aioredis.Redis] = None

    async def connect(self) -> None:
        """Establish connection to Redis server."""
        if self._client is not None:
            return

        self._client = aioredis.from_url(
            f"redis://{self.host}:{self.port}/{self.db}",
            password=self.password,
            encoding="utf-8",
            decode_responses=True,
        )

    async def disconnect(self) -> None:
        """Close connection to Redis server."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _redis(self) -> aioredis.Redis:
        if self._client is None:
            await self.connect()
        return self._client

    async def set(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        client = await self._redis()
        if expire_seconds:
            await client.setex(key, expire_seconds, value)
        else:
            await client.set(key, value)
        return True

    async def get(self, key: str) -> Optional[str]:
        client = await self._redis()
        return await client.get(key)

    async def delete(self, key: str) -> bool:
        client = await self._redis()
        return await client.delete(key) > 0

    async def exists(self, key: str) -> bool:
        client = await self._redis()
        return await client.exists(key) > 0

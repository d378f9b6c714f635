"""
Typed stores for local identity state.

Each store owns its own cache client and key namespace, so the username
cache and the disconnect marker can never collide on a key prefix.
"""

from typing import Optional

from consigne.infrastructure.cache.i_cache_client import ICacheClient


class AddressUsernameCache:
    """
    Address -> username hints.

    Entries are hints only: readers must confirm them against the live
    profile before trusting them.
    """

    NAMESPACE = "identity:username"

    def __init__(self, client: ICacheClient, ttl_seconds: Optional[int] = None):
        """
        Initialize username cache.

        Args:
            client: Backing cache client (session scoped)
            ttl_seconds: Optional entry lifetime
        """
        self.client = client
        self.ttl_seconds = ttl_seconds

    def _key(self, address: str) -> str:
        return f"{self.NAMESPACE}:{address}"

    async def get(self, address: str) -> Optional[str]:
        return await self.client.get(self._key(address))

    async def put(self, address: str, username: str) -> None:
        await self.client.set(self._key(address), username, self.ttl_seconds)

    async def remove(self, address: str) -> bool:
        return await self.client.delete(self._key(address))


class DisconnectMarker:
    """
    Durable "do not auto-reconnect" flag.

    Set when the user disconnects manually; consulted on the next start.
    The backing client must outlive the process (file or Redis).
    """

    KEY = "session:manual_disconnect"

    def __init__(self, client: ICacheClient):
        self.client = client

    async def set(self) -> None:
        await self.client.set(self.KEY, "true")

    async def clear(self) -> None:
        await self.client.delete(self.KEY)

    async def is_set(self) -> bool:
        return await self.client.get(self.KEY) == "true"

"""Cache client interface for key-value storage."""

from abc import ABC, abstractmethod
from typing import Optional


class ICacheClient(ABC):
    """
    Abstract key-value client.

    Values are whole strings written and read atomically; there are no
    partial updates, so concurrent writers resolve last-writer-wins.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying store."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the underlying store."""

    @abstractmethod
    async def set(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        """
        Store value with optional expiration.

        Args:
            key: Cache key
            value: Value to store (string)
            expire_seconds: TTL in seconds (None = no expiration)

        Returns:
            True if stored successfully
        """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Retrieve value by key.

        Args:
            key: Cache key

        Returns:
            Value if exists and not expired, None otherwise
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Args:
            key: Cache key

        Returns:
            True if key was deleted, False if key didn't exist
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if key exists in cache.

        Args:
            key: Cache key

        Returns:
            True if key exists and not expired
        """

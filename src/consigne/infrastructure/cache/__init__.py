"""
Cache infrastructure.
"""

from consigne.infrastructure.cache.file_cache_client import FileCacheClient
from consigne.infrastructure.cache.i_cache_client import ICacheClient
from consigne.infrastructure.cache.identity_stores import (
    AddressUsernameCache,
    DisconnectMarker,
)
from consigne.infrastructure.cache.memory_cache_client import MemoryCacheClient
from consigne.infrastructure.cache.redis_cache_client import RedisCacheClient

__all__ = [
    "ICacheClient",
    "MemoryCacheClient",
    "RedisCacheClient",
    "FileCacheClient",
    "AddressUsernameCache",
    "DisconnectMarker",
]

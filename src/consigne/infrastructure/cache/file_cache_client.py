"""JSON-file cache client for small durable local state."""

import asyncio
import json
import os
import time
from pathlib import Path
from typing import Optional

from consigne.infrastructure.cache.i_cache_client import ICacheClient
from consigne.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class FileCacheClient(ICacheClient):
    """
    Key-value store persisted as one JSON document.

    Every write replaces the whole file (write to temp file, then rename),
    so readers never observe a partial update. Meant for a handful of keys
    such as the manual-disconnect marker, not for bulk data.
    """

    def __init__(self, path: str | Path):
        """
        Initialize file cache.

        Args:
            path: JSON file location; parent directories are created
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        await asyncio.to_thread(self.path.parent.mkdir, parents=True, exist_ok=True)

    async def disconnect(self) -> None:
        """Nothing held open between calls."""

    def _read(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable state file {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp_path, self.path)

    @staticmethod
    def _live(entry: object) -> bool:
        if not isinstance(entry, dict) or "value" not in entry:
            return False
        expires_at = entry.get("expires_at")
        return expires_at is None or time.time() < expires_at

    async def set(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        expires_at = time.time() + expire_seconds if expire_seconds else None
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data[key] = {"value": value, "expires_at": expires_at}
            await asyncio.to_thread(self._write, data)
        return True

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
        entry = data.get(key)
        return entry["value"] if self._live(entry) else None

    async def delete(self, key: str) -> bool:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            if key not in data:
                return False
            del data[key]
            await asyncio.to_thread(self._write, data)
        return True

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

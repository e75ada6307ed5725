from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

from ..base import FileNotFoundError, StorageBackend, validate_key


class MemoryBackend(StorageBackend):
    """In-process storage for tests and local experiments. Not persistent."""

    def __init__(self):
        self._files: dict[str, bytes] = {}
        self._metadata: dict[str, dict[str, object]] = {}
        self._lock = asyncio.Lock()

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        metadata: Optional[dict[str, str]] = None,
    ) -> str:
        validate_key(key)
        async with self._lock:
            self._files[key] = bytes(data)
            self._metadata[key] = {
                **(metadata or {}),
                "size": len(data),
                "content_type": content_type,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        return f"memory://{key}"

    async def get(self, key: str) -> bytes:
        validate_key(key)
        try:
            return self._files[key]
        except KeyError:
            raise FileNotFoundError(f"File not found: {key}") from None

    async def delete(self, key: str) -> bool:
        validate_key(key)
        async with self._lock:
            self._metadata.pop(key, None)
            return self._files.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        validate_key(key)
        return key in self._files

    async def get_url(self, key: str) -> str:
        if not await self.exists(key):
            raise FileNotFoundError(f"File not found: {key}")
        return f"memory://{key}"

    async def get_metadata(self, key: str) -> dict[str, object]:
        validate_key(key)
        try:
            return dict(self._metadata[key])
        except KeyError:
            raise FileNotFoundError(f"File not found: {key}") from None

    def keys(self) -> list[str]:
        return sorted(self._files)

    def clear(self) -> None:
        self._files.clear()
        self._metadata.clear()

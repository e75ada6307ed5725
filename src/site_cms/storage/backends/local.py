from __future__ import annotations

import asyncio
import builtins
import logging
from pathlib import Path
from typing import Optional

from ..base import FileNotFoundError, StorageBackend, validate_key

logger = logging.getLogger(__name__)


class LocalBackend(StorageBackend):
    """Files on the local disk, served by the API under ``base_url``."""

    def __init__(self, base_path: str | Path, base_url: str = "/uploads"):
        self.base_path = Path(base_path)
        self.base_url = base_url.rstrip("/")

    def _get_file_path(self, key: str) -> Path:
        return self.base_path / validate_key(key)

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        metadata: Optional[dict[str, str]] = None,
    ) -> str:
        path = self._get_file_path(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        await asyncio.to_thread(_write)
        logger.debug("Stored %s (%d bytes, %s)", path, len(data), content_type)
        return f"{self.base_url}/{key}"

    async def get(self, key: str) -> bytes:
        path = self._get_file_path(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except builtins.FileNotFoundError:
            raise FileNotFoundError(f"File not found: {key}") from None

    async def delete(self, key: str) -> bool:
        path = self._get_file_path(key)
        try:
            await asyncio.to_thread(path.unlink)
        except builtins.FileNotFoundError:
            return False
        return True

    async def exists(self, key: str) -> bool:
        path = self._get_file_path(key)
        return await asyncio.to_thread(path.is_file)

    async def get_url(self, key: str) -> str:
        if not await self.exists(key):
            raise FileNotFoundError(f"File not found: {key}")
        return f"{self.base_url}/{key}"

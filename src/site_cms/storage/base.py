"""Storage backend contract shared by memory, local and S3 backends."""

from __future__ import annotations

import builtins
import re
from abc import ABC, abstractmethod
from typing import Optional

MAX_KEY_LENGTH = 1024
_SAFE_KEY = re.compile(r"^[A-Za-z0-9._/\-]+$")


class StorageError(Exception):
    """Base error for storage operations."""


class FileNotFoundError(StorageError, builtins.FileNotFoundError):  # noqa: A001
    """Raised when a key does not exist in the backend."""


class InvalidKeyError(StorageError, ValueError):
    """Raised for empty, absolute, traversing or otherwise unsafe keys."""


def validate_key(key: str) -> str:
    if not key:
        raise InvalidKeyError("Storage key must not be empty")
    if key.startswith("/"):
        raise InvalidKeyError(f"Storage key must be relative: {key!r}")
    if ".." in key.split("/"):
        raise InvalidKeyError(f"Storage key must not contain '..': {key!r}")
    if len(key) > MAX_KEY_LENGTH:
        raise InvalidKeyError(f"Storage key longer than {MAX_KEY_LENGTH} characters")
    if not _SAFE_KEY.match(key):
        raise InvalidKeyError(f"Storage key contains unsafe characters: {key!r}")
    return key


class StorageBackend(ABC):
    """Where uploaded binaries live.

    The media pipeline only needs ``put`` and ``delete``; ``get``, ``exists``
    and ``get_url`` serve tests, the CLI and diagnostics.
    """

    @abstractmethod
    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        metadata: Optional[dict[str, str]] = None,
    ) -> str:
        """Store ``data`` under ``key`` and return its public URL."""

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Return the stored bytes; raises FileNotFoundError when missing."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete ``key``; returns False when there was nothing to delete."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        ...

    @abstractmethod
    async def get_url(self, key: str) -> str:
        ...


__all__ = [
    "StorageBackend",
    "StorageError",
    "FileNotFoundError",
    "InvalidKeyError",
    "validate_key",
]

from .backends import LocalBackend, MemoryBackend, S3Backend
from .base import FileNotFoundError, InvalidKeyError, StorageBackend, StorageError
from .easy import easy_storage
from .integration import StorageDep, attach_storage, get_storage
from .settings import StorageSettings, get_storage_settings

__all__ = [
    "StorageBackend",
    "StorageError",
    "FileNotFoundError",
    "InvalidKeyError",
    "LocalBackend",
    "MemoryBackend",
    "S3Backend",
    "easy_storage",
    "attach_storage",
    "get_storage",
    "StorageDep",
    "StorageSettings",
    "get_storage_settings",
]

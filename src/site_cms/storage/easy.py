from __future__ import annotations

import logging
from typing import Optional

from .backends import LocalBackend, MemoryBackend, S3Backend
from .base import StorageBackend
from .settings import StorageSettings, get_storage_settings

logger = logging.getLogger(__name__)


def easy_storage(
    backend: Optional[str] = None,
    *,
    settings: Optional[StorageSettings] = None,
    **overrides,
) -> StorageBackend:
    """
    Build a storage backend from settings (env) plus explicit overrides.

    Example:
        storage = easy_storage()                         # env driven
        storage = easy_storage("local", base_path="/data/uploads")
        storage = easy_storage("memory")                 # tests
    """
    settings = settings or get_storage_settings()
    kind = backend or settings.resolved_backend

    if kind == "memory":
        logger.info("Using in-memory storage backend")
        return MemoryBackend()

    if kind == "local":
        base_path = overrides.get("base_path") or settings.local_base_path
        base_url = overrides.get("base_url") or settings.local_base_url
        logger.info("Using local storage backend at %s", base_path)
        return LocalBackend(base_path=base_path, base_url=base_url)

    if kind == "s3":
        bucket = overrides.get("bucket") or settings.s3_bucket
        if not bucket:
            raise ValueError("STORAGE_S3_BUCKET must be set for the s3 storage backend")
        logger.info("Using S3 storage backend bucket=%s", bucket)
        return S3Backend(
            bucket=bucket,
            region=overrides.get("region") or settings.s3_region,
            endpoint=overrides.get("endpoint") or settings.s3_endpoint,
            access_key=overrides.get("access_key") or settings.s3_access_key,
            secret_key=overrides.get("secret_key") or settings.s3_secret_key,
            public_base_url=overrides.get("public_base_url") or settings.s3_public_base_url,
        )

    raise ValueError(f"Unknown storage backend: {kind!r}")

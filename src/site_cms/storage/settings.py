from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Binary storage for uploads.

    ``backend`` is auto-detected when unset: S3 when a bucket is configured,
    local disk otherwise.
    """

    backend: Optional[Literal["s3", "local", "memory"]] = Field(default=None)
    folder: str = Field(default="media", description="Key prefix for uploaded media")

    # Local storage
    local_base_path: str = Field(default="uploads")
    local_base_url: str = Field(default="/uploads")

    # S3-compatible storage
    s3_bucket: Optional[str] = Field(default=None)
    s3_region: str = Field(default="us-east-1")
    s3_endpoint: Optional[str] = Field(default=None)
    s3_access_key: Optional[str] = Field(default=None)
    s3_secret_key: Optional[str] = Field(default=None)
    s3_public_base_url: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_backend(self) -> str:
        if self.backend:
            return self.backend
        return "s3" if self.s3_bucket else "local"


@lru_cache
def get_storage_settings(**kwargs) -> StorageSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return StorageSettings(**filtered)

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_MIMETYPES = [
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
    "application/pdf",
]


class MediaSettings(BaseSettings):
    max_width: int = Field(default=1920)
    max_height: int = Field(default=1080)
    output_format: str = Field(default="WEBP")
    output_mimetype: str = Field(default="image/webp")
    output_extension: str = Field(default=".webp")
    quality: int = Field(default=80, ge=1, le=100)
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)
    max_batch: int = Field(default=10)
    allowed_mimetypes: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_MIMETYPES))

    model_config = SettingsConfigDict(
        env_prefix="MEDIA_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_media_settings(**kwargs) -> MediaSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MediaSettings(**filtered)

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_cors_origins() -> str:
    origins = [
        os.getenv("FRONTEND_URL", "http://localhost:3001"),
        os.getenv("MAIN_SITE_URL", "http://localhost:3000"),
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    return ",".join(dict.fromkeys(origins))


class AppSettings(BaseSettings):
    # flat = easy env overrides
    name: str = "Admin API"
    version: str = "1.0.0"
    api_prefix: str = "/api"
    cors_origins: str = Field(default_factory=_default_cors_origins)

    model_config = SettingsConfigDict(
        env_prefix="APP_",  # APP_NAME, APP_VERSION, APP_CORS_ORIGINS
        env_file=".env",
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoSettings(BaseSettings):
    """
    MongoDB settings.

    Env support:
      - MONGO_URL, MONGO_DB, MONGO_SERVER_SELECTION_TIMEOUT_MS, MONGO_SOCKET_TIMEOUT_MS
      - MONGODB_URI is accepted as a fallback for deployments of the old admin API.
    """

    url: Optional[str] = Field(default=None)
    db: Optional[str] = Field(default=None)
    server_selection_timeout_ms: int = Field(default=5000)
    socket_timeout_ms: int = Field(default=45000)
    app_name: str = Field(default="site-cms")

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_url(self) -> str:
        url = self.url or os.getenv("MONGODB_URI")
        if not url:
            raise ValueError("MONGO_URL or MONGODB_URI must be set for database connectivity")
        return url


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)

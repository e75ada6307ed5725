from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError

from .settings import MongoSettings, get_mongo_settings

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "site_cms"


class MongoConnection:
    """Process-wide MongoDB handle.

    Created once at startup and handed to whatever needs storage access.
    ``connect()`` is idempotent: a second call reuses the open client.
    """

    def __init__(self, settings: MongoSettings | None = None):
        self.settings = settings or get_mongo_settings()
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> AsyncIOMotorDatabase:
        if self._db is not None:
            logger.debug("Using existing MongoDB connection")
            return self._db

        client = AsyncIOMotorClient(
            self.settings.resolved_url,
            serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
            socketTimeoutMS=self.settings.socket_timeout_ms,
            appname=self.settings.app_name,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except Exception:
            client.close()
            logger.error("MongoDB connection failed", exc_info=True)
            raise

        name = self.settings.db or _db_name_from_client(client)
        self._client = client
        self._db = client[name]
        logger.info("MongoDB connected: host=%s db=%s", _describe_hosts(client), name)
        return self._db

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise RuntimeError("MongoDB is not connected; call connect() first")
        return self._db

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None


def _db_name_from_client(client: AsyncIOMotorClient) -> str:
    try:
        return client.get_default_database().name
    except ConfigurationError:
        # URL without a database path
        return DEFAULT_DB_NAME


def _describe_hosts(client: AsyncIOMotorClient) -> str:
    return ",".join(f"{h}:{p}" for h, p in client.nodes) or "?"

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Iterable, Optional

from fastapi import Depends, FastAPI, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from .repository import NoSqlRepository
from .session import MongoConnection

logger = logging.getLogger(__name__)


def attach_mongo(
    app: FastAPI,
    connection: Optional[MongoConnection] = None,
    *,
    repositories: Iterable[NoSqlRepository] = (),
) -> MongoConnection:
    """Open ``connection`` for the app's lifetime and create unique indexes on startup."""
    connection = connection or MongoConnection()
    repos = tuple(repositories)

    existing = getattr(app.router, "lifespan_context", None)

    @asynccontextmanager
    async def composed_lifespan(_app: FastAPI):
        _app.state.mongo = connection
        db = await connection.connect()
        try:
            for repo in repos:
                await repo.ensure_indexes(db)
            logger.info("Mongo attached: %d collections indexed", len(repos))
            if existing:
                async with existing(_app):
                    yield
            else:
                yield
        finally:
            await connection.close()

    app.router.lifespan_context = composed_lifespan
    return connection


def get_connection(request: Request) -> MongoConnection:
    return request.app.state.mongo


def get_db(request: Request) -> AsyncIOMotorDatabase:
    return get_connection(request).db


DbDep = Annotated[AsyncIOMotorDatabase, Depends(get_db)]

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.db.nosql import MongoConnection, MongoSettings

T = TypeVar("T")


def run_with_db(
    fn: Callable[[AsyncIOMotorDatabase], Awaitable[T]],
    *,
    mongo_url: Optional[str] = None,
) -> T:
    """Open a connection, run ``fn(db)`` and close it again."""

    async def _run() -> T:
        settings = MongoSettings(url=mongo_url) if mongo_url else None
        connection = MongoConnection(settings)
        try:
            db = await connection.connect()
        except ValueError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=2)
        try:
            return await fn(db)
        finally:
            await connection.close()

    return asyncio.run(_run())

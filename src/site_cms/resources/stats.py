from __future__ import annotations

import asyncio
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.db.nosql import NoSqlRepository

from .blogs import blogs_repo
from .categories import categories_repo
from .services import services_repo

media_repo = NoSqlRepository(collection_name="media")


async def dashboard_stats(db: AsyncIOMotorDatabase) -> dict[str, Any]:
    (
        services,
        active_services,
        blogs,
        published,
        drafts,
        categories,
        media,
    ) = await asyncio.gather(
        services_repo.count(db),
        services_repo.count(db, {"isActive": True}),
        blogs_repo.count(db),
        blogs_repo.count(db, {"status": "published"}),
        blogs_repo.count(db, {"status": "draft"}),
        categories_repo.count(db),
        media_repo.count(db),
    )
    return {
        "services": {"total": services, "active": active_services},
        "blogs": {"total": blogs, "published": published, "drafts": drafts},
        "categories": categories,
        "media": media,
    }

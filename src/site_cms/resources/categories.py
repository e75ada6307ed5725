from __future__ import annotations

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.content.hooks import CATEGORY_HOOKS
from site_cms.content.models import CategoryDocument
from site_cms.db.nosql import NoSqlRepository, NoSqlService

CATEGORY_NOT_FOUND = "القسم غير موجود"

categories_repo = NoSqlRepository(collection_name="categories", unique_fields=("slug",))
category_service = NoSqlService(
    categories_repo,
    schema=CategoryDocument,
    hooks=CATEGORY_HOOKS,
    not_found_message=CATEGORY_NOT_FOUND,
)


async def list_categories(
    db: AsyncIOMotorDatabase, *, type: Optional[str] = None, active: bool = False
) -> list[dict[str, Any]]:
    query: dict[str, Any] = {}
    if type:
        query["type"] = type
    if active:
        query["isActive"] = True
    return await category_service.list(db, query, sort=[("order", 1), ("createdAt", -1)])

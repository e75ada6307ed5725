from __future__ import annotations

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.content.hooks import BLOG_HOOKS
from site_cms.content.models import BlogDocument, PublishStatus
from site_cms.db.nosql import NoSqlRepository, NoSqlService, to_object_id

from .populate import populate_ref

BLOG_NOT_FOUND = "المقال غير موجود"
RELATED_LIMIT = 3

blogs_repo = NoSqlRepository(collection_name="blogs", unique_fields=("slug",))
blog_service = NoSqlService(
    blogs_repo,
    schema=BlogDocument,
    hooks=BLOG_HOOKS,
    not_found_message=BLOG_NOT_FOUND,
)

BLOG_ORDER = [("order", 1), ("publishedAt", -1), ("createdAt", -1)]


async def list_blogs(
    db: AsyncIOMotorDatabase,
    *,
    status: Optional[str] = None,
    category: Optional[str] = None,
    featured: bool = False,
    limit: Optional[int] = None,
) -> list[dict[str, Any]]:
    query: dict[str, Any] = {}
    if status:
        query["status"] = status
    if category:
        query["category"] = category
    if featured:
        query["featured"] = True
    docs = await blog_service.list(db, query, sort=BLOG_ORDER, limit=limit)
    return await populate_ref(db, docs, "categoryRef")


async def get_blog(db: AsyncIOMotorDatabase, id: Any) -> dict[str, Any]:
    doc = await blog_service.get_or_404(db, id)
    return (await populate_ref(db, [doc], "categoryRef"))[0]


async def get_blog_by_slug(db: AsyncIOMotorDatabase, slug: str) -> dict[str, Any]:
    doc = await blog_service.get_by_slug(db, slug)
    return (await populate_ref(db, [doc], "categoryRef"))[0]


async def related_blogs(db: AsyncIOMotorDatabase, slug: str) -> list[dict[str, Any]]:
    """Published posts sharing the category or at least one tag, newest first."""
    blog = await blog_service.get_by_slug(db, slug)
    query = {
        "_id": {"$ne": to_object_id(blog["_id"])},
        "status": PublishStatus.PUBLISHED.value,
        "$or": [
            {"category": blog.get("category")},
            {"tags": {"$in": blog.get("tags") or []}},
        ],
    }
    return await blog_service.list(db, query, sort=[("publishedAt", -1)], limit=RELATED_LIMIT)


async def toggle_publish(db: AsyncIOMotorDatabase, id: Any) -> dict[str, Any]:
    blog = await blog_service.get_or_404(db, id)
    published = blog.get("status") == PublishStatus.PUBLISHED.value
    new_status = PublishStatus.DRAFT if published else PublishStatus.PUBLISHED
    # publishedAt is stamped by the hook chain on the first publish
    return await blog_service.update(db, id, {"status": new_status.value})


async def blog_category_names(db: AsyncIOMotorDatabase) -> list[Any]:
    return await blogs_repo.distinct(db, "category")

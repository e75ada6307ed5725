from __future__ import annotations

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.content.hooks import SERVICE_HOOKS
from site_cms.content.models import ServiceDocument
from site_cms.db.nosql import NoSqlRepository, NoSqlService

from .populate import populate_ref

SERVICE_NOT_FOUND = "الخدمة غير موجودة"

services_repo = NoSqlRepository(collection_name="services", unique_fields=("slug",))
service_service = NoSqlService(
    services_repo,
    schema=ServiceDocument,
    hooks=SERVICE_HOOKS,
    not_found_message=SERVICE_NOT_FOUND,
)


async def list_services(
    db: AsyncIOMotorDatabase, *, active: bool = False, category: Optional[str] = None
) -> list[dict[str, Any]]:
    query: dict[str, Any] = {}
    if active:
        query["isActive"] = True
    if category:
        query["category"] = category
    docs = await service_service.list(db, query, sort=[("order", 1), ("createdAt", -1)])
    return await populate_ref(db, docs, "category")


async def get_service(db: AsyncIOMotorDatabase, id: Any) -> dict[str, Any]:
    doc = await service_service.get_or_404(db, id)
    return (await populate_ref(db, [doc], "category"))[0]


async def get_service_by_slug(db: AsyncIOMotorDatabase, slug: str) -> dict[str, Any]:
    doc = await service_service.get_by_slug(db, slug)
    return (await populate_ref(db, [doc], "category"))[0]

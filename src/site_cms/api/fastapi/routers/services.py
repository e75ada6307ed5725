from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, status

from site_cms.api.fastapi.responses import ok
from site_cms.auth import UserDep
from site_cms.db.nosql import DbDep
from site_cms.resources import services

from ._schemas import ReorderRequest

router = APIRouter()
ROUTER_PREFIX = "/services"
ROUTER_TAG = "services"


@router.get("")
async def list_services(db: DbDep, active: Optional[str] = None, category: Optional[str] = None):
    docs = await services.list_services(db, active=active == "true", category=category)
    return ok(docs, count=True)


@router.get("/id/{id}")
async def get_service_by_id(id: str, db: DbDep, _user: UserDep):
    return ok(await services.get_service(db, id))


@router.get("/{slug}")
async def get_service(slug: str, db: DbDep):
    return ok(await services.get_service_by_slug(db, slug))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_service(db: DbDep, _user: UserDep, body: dict[str, Any] = Body(...)):
    return ok(await services.service_service.create(db, body))


@router.patch("/reorder")
async def reorder_services(payload: ReorderRequest, db: DbDep, _user: UserDep):
    await services.service_service.reorder(db, payload.ordered_ids)
    return ok(message="تم تحديث الترتيب بنجاح")


@router.put("/{id}")
async def update_service(id: str, db: DbDep, _user: UserDep, body: dict[str, Any] = Body(...)):
    return ok(await services.service_service.update(db, id, body))


@router.delete("/{id}")
async def delete_service(id: str, db: DbDep, _user: UserDep):
    await services.service_service.delete(db, id)
    return ok(message="تم حذف الخدمة بنجاح")


@router.patch("/{id}/toggle")
async def toggle_service(id: str, db: DbDep, _user: UserDep):
    return ok(await services.service_service.toggle(db, id, "isActive"))

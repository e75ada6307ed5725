from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, status

from site_cms.api.fastapi.responses import ok
from site_cms.auth import UserDep
from site_cms.db.nosql import DbDep
from site_cms.resources import categories

from ._schemas import ReorderRequest

router = APIRouter()
ROUTER_PREFIX = "/categories"
ROUTER_TAG = "categories"


@router.get("")
async def list_categories(db: DbDep, type: Optional[str] = None, active: Optional[str] = None):
    docs = await categories.list_categories(db, type=type, active=active == "true")
    return ok(docs, count=True)


@router.patch("/reorder")
async def reorder_categories(payload: ReorderRequest, db: DbDep, _user: UserDep):
    await categories.category_service.reorder(db, payload.ordered_ids)
    return ok(message="تم تحديث الترتيب بنجاح")


@router.get("/{id}")
async def get_category(id: str, db: DbDep):
    return ok(await categories.category_service.get_or_404(db, id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(db: DbDep, _user: UserDep, body: dict[str, Any] = Body(...)):
    return ok(await categories.category_service.create(db, body))


@router.put("/{id}")
async def update_category(id: str, db: DbDep, _user: UserDep, body: dict[str, Any] = Body(...)):
    return ok(await categories.category_service.update(db, id, body))


@router.delete("/{id}")
async def delete_category(id: str, db: DbDep, _user: UserDep):
    await categories.category_service.delete(db, id)
    return ok(message="تم حذف القسم بنجاح")


@router.patch("/{id}/toggle")
async def toggle_category(id: str, db: DbDep, _user: UserDep):
    return ok(await categories.category_service.toggle(db, id, "isActive"))

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, status

from site_cms.api.fastapi.responses import ok
from site_cms.auth import AdminDep
from site_cms.db.nosql import DbDep
from site_cms.resources import faq

from ._schemas import ReorderRequest

router = APIRouter()
ROUTER_PREFIX = "/faq"
ROUTER_TAG = "faq"


@router.get("")
async def list_faq(db: DbDep, active: Optional[str] = None):
    docs = await faq.list_faq(db, active=active == "true")
    return ok(docs, count=True)


@router.put("/reorder")
async def reorder_faq(payload: ReorderRequest, db: DbDep, _admin: AdminDep):
    await faq.faq_service.reorder(db, payload.ordered_ids)
    return ok(message="تم إعادة ترتيب الأقسام")


@router.get("/{id}")
async def get_faq_category(id: str, db: DbDep):
    return ok(await faq.faq_service.get_or_404(db, id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_faq_category(db: DbDep, _admin: AdminDep, body: dict[str, Any] = Body(...)):
    return ok(await faq.faq_service.create(db, body))


@router.put("/{id}")
async def update_faq_category(id: str, db: DbDep, _admin: AdminDep, body: dict[str, Any] = Body(...)):
    return ok(await faq.faq_service.update(db, id, body))


@router.delete("/{id}")
async def delete_faq_category(id: str, db: DbDep, _admin: AdminDep):
    await faq.faq_service.delete(db, id)
    return ok(message="تم حذف القسم بنجاح")


@router.patch("/{id}/toggle")
async def toggle_faq_category(id: str, db: DbDep, _admin: AdminDep):
    return ok(await faq.faq_service.toggle(db, id, "isActive"))


@router.post("/{id}/questions", status_code=status.HTTP_201_CREATED)
async def add_question(id: str, db: DbDep, _admin: AdminDep, body: dict[str, Any] = Body(...)):
    return ok(await faq.add_question(db, id, body))


@router.put("/{id}/questions/{question_id}")
async def update_question(
    id: str, question_id: str, db: DbDep, _admin: AdminDep, body: dict[str, Any] = Body(...)
):
    return ok(await faq.update_question(db, id, question_id, body))


@router.delete("/{id}/questions/{question_id}")
async def delete_question(id: str, question_id: str, db: DbDep, _admin: AdminDep):
    return ok(await faq.delete_question(db, id, question_id))


@router.patch("/{id}/questions/{question_id}/toggle")
async def toggle_question(id: str, question_id: str, db: DbDep, _admin: AdminDep):
    return ok(await faq.toggle_question(db, id, question_id))

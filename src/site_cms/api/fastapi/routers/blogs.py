from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, status

from site_cms.api.fastapi.responses import ok
from site_cms.auth import UserDep
from site_cms.db.nosql import DbDep
from site_cms.resources import blogs

router = APIRouter()
ROUTER_PREFIX = "/blogs"
ROUTER_TAG = "blogs"


@router.get("")
async def list_blogs(
    db: DbDep,
    status: Optional[str] = None,
    category: Optional[str] = None,
    featured: Optional[str] = None,
    limit: Optional[int] = None,
):
    docs = await blogs.list_blogs(
        db, status=status, category=category, featured=featured == "true", limit=limit
    )
    return ok(docs, count=True)


@router.get("/categories/list")
async def list_blog_categories(db: DbDep):
    return ok(await blogs.blog_category_names(db))


@router.get("/id/{id}")
async def get_blog_by_id(id: str, db: DbDep, _user: UserDep):
    return ok(await blogs.get_blog(db, id))


@router.get("/{slug}")
async def get_blog(slug: str, db: DbDep):
    return ok(await blogs.get_blog_by_slug(db, slug))


@router.get("/{slug}/related")
async def get_related_blogs(slug: str, db: DbDep):
    return ok(await blogs.related_blogs(db, slug))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_blog(db: DbDep, _user: UserDep, body: dict[str, Any] = Body(...)):
    return ok(await blogs.blog_service.create(db, body))


@router.put("/{id}")
async def update_blog(id: str, db: DbDep, _user: UserDep, body: dict[str, Any] = Body(...)):
    return ok(await blogs.blog_service.update(db, id, body))


@router.delete("/{id}")
async def delete_blog(id: str, db: DbDep, _user: UserDep):
    await blogs.blog_service.delete(db, id)
    return ok(message="تم حذف المقال بنجاح")


@router.patch("/{id}/featured")
async def toggle_featured(id: str, db: DbDep, _user: UserDep):
    return ok(await blogs.blog_service.toggle(db, id, "featured", default=False))


@router.patch("/{id}/publish")
async def toggle_publish(id: str, db: DbDep, _user: UserDep):
    return ok(await blogs.toggle_publish(db, id))

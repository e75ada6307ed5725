from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from site_cms.api.fastapi.responses import ok
from site_cms.db.nosql import DbDep
from site_cms.resources import dashboard_stats

router = APIRouter()
ROUTER_TAG = "status"

ENDPOINTS = ("services", "blogs", "categories", "media", "faq", "stats", "health")


@router.get("")
async def api_root(request: Request):
    settings = request.app.state.settings
    base = settings.api_prefix.rstrip("/")
    return {
        "status": "ok",
        "message": settings.name,
        "version": settings.version,
        "endpoints": {name: f"{base}/{name}" for name in ENDPOINTS},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "message": "API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/stats")
async def stats(db: DbDep):
    return ok(await dashboard_stats(db))

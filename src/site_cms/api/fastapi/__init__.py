from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from site_cms.api.fastapi.middleware.errors import (
    CatchAllExceptionMiddleware,
    register_error_handlers,
)
from site_cms.api.fastapi.routers import register_all_routers
from site_cms.app import ENV
from site_cms.app.settings import AppSettings, get_app_settings
from site_cms.db.nosql import MongoConnection, attach_mongo
from site_cms.media import MediaPipeline, MediaSettings
from site_cms.resources import ALL_REPOSITORIES, media_repo
from site_cms.storage import (
    LocalBackend,
    StorageBackend,
    StorageSettings,
    attach_storage,
    easy_storage,
    get_storage_settings,
)

logger = logging.getLogger(__name__)


def _mount_uploads(app: FastAPI, backend: LocalBackend) -> None:
    # remote backends hand out absolute URLs; only local files are served here
    if not backend.base_url.startswith("/"):
        return
    backend.base_path.mkdir(parents=True, exist_ok=True)
    app.mount(backend.base_url, StaticFiles(directory=backend.base_path), name="uploads")


def setup_cms_api(
    app_settings: Optional[AppSettings] = None,
    *,
    connection: Optional[MongoConnection] = None,
    storage: Optional[StorageBackend] = None,
    storage_settings: Optional[StorageSettings] = None,
    media_settings: Optional[MediaSettings] = None,
) -> FastAPI:
    """Build the admin API: middleware, error handlers, routers, Mongo and storage wiring."""
    settings = app_settings or get_app_settings()
    storage_settings = storage_settings or get_storage_settings()

    app = FastAPI(title=settings.name, version=settings.version)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app)

    @app.get("/", tags=["status"])
    async def root_status():
        return {
            "status": "ok",
            "message": f"{settings.name} is running",
            "version": settings.version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    register_all_routers(app, base_package="site_cms.api.fastapi.routers", prefix=settings.api_prefix)

    backend = attach_storage(app, storage or easy_storage(settings=storage_settings))
    app.state.media_pipeline = MediaPipeline(
        backend, media_repo, media_settings, folder=storage_settings.folder
    )
    if isinstance(backend, LocalBackend):
        _mount_uploads(app, backend)

    attach_mongo(app, connection, repositories=ALL_REPOSITORIES)

    logger.info("%s version of %s initialized [env: %s]", settings.version, settings.name, ENV)
    return app


__all__ = ["setup_cms_api"]

from __future__ import annotations

from fastapi import FastAPI

from site_cms.api.fastapi import setup_cms_api
from site_cms.app import setup_logging


def create_app() -> FastAPI:
    """uvicorn factory: ``uvicorn site_cms.main:create_app --factory``."""
    setup_logging()
    return setup_cms_api()

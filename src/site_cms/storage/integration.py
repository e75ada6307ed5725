from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from .base import StorageBackend

logger = logging.getLogger(__name__)


def attach_storage(app: FastAPI, backend: StorageBackend) -> StorageBackend:
    app.state.storage = backend
    logger.info("Storage attached: %s", type(backend).__name__)
    return backend


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


StorageDep = Annotated[StorageBackend, Depends(get_storage)]

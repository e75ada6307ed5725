from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def register_all_routers(
    app: FastAPI,
    *,
    base_package: Optional[str] = None,
    prefix: str = "",
) -> list[str]:
    """
    Discover and include every router under a routers package.

    - Any module with a top-level ``router`` is included under ``prefix``.
    - ``ROUTER_PREFIX`` and ``ROUTER_TAG`` module attributes refine the mount.
    - Modules whose name starts with ``_`` are skipped.

    Returns the names of the included modules.
    """
    base_package = base_package or __name__
    package_module: ModuleType = importlib.import_module(base_package)
    if not hasattr(package_module, "__path__"):
        raise RuntimeError(f"Provided base_package '{base_package}' is not a package (no __path__).")

    included: list[str] = []
    for _, module_name, _ in pkgutil.walk_packages(package_module.__path__, prefix=f"{base_package}."):
        if module_name.rsplit(".", 1)[-1].startswith("_"):
            continue
        module = importlib.import_module(module_name)
        router = getattr(module, "router", None)
        if router is None:
            continue
        router_prefix = getattr(module, "ROUTER_PREFIX", "")
        router_tag = getattr(module, "ROUTER_TAG", None)
        include_kwargs = {"prefix": prefix.rstrip("/") + router_prefix}
        if router_tag:
            include_kwargs["tags"] = [router_tag]
        app.include_router(router, **include_kwargs)
        included.append(module_name)
        logger.debug("Included router from module: %s (prefix=%s)", module_name, include_kwargs["prefix"])
    return included

"""Bulk-load categories and blog posts from a JSON document.

The document is ``{"categories": [...], "blogs": [...]}``. Records are matched
by slug; missing ones are created through the resource services so lifecycle
hooks and validation run, existing ones are skipped unless ``update`` is set.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.content.slug import slugify
from site_cms.db.nosql import NoSqlService

from .blogs import blog_service
from .categories import category_service

logger = logging.getLogger(__name__)


@dataclass
class SeedCounts:
    created: int = 0
    updated: int = 0
    skipped: int = 0


def load_seed_file(path: str | Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with 'categories' and/or 'blogs'")
    return data


async def _seed_records(
    db: AsyncIOMotorDatabase,
    service: NoSqlService,
    records: Sequence[Mapping[str, Any]],
    *,
    slug_source: str,
    update: bool,
) -> SeedCounts:
    counts = SeedCounts()
    for record in records:
        slug = record.get("slug") or slugify(record.get(slug_source))
        existing = await service.repo.find_by_slug(db, slug) if slug else None
        if existing is None:
            await service.create(db, record)
            counts.created += 1
            logger.info("Created %s: %s", service.repo.collection_name, record.get(slug_source))
        elif update:
            await service.update(db, existing["_id"], record)
            counts.updated += 1
        else:
            counts.skipped += 1
            logger.debug("Skipped existing %s %s", service.repo.collection_name, slug)
    return counts


async def seed_content(
    db: AsyncIOMotorDatabase, data: Mapping[str, Any], *, update: bool = False
) -> dict[str, SeedCounts]:
    # categories first: blogs may reference them
    return {
        "categories": await _seed_records(
            db, category_service, data.get("categories") or [], slug_source="name", update=update
        ),
        "blogs": await _seed_records(
            db, blog_service, data.get("blogs") or [], slug_source="title", update=update
        ),
    }

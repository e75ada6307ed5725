from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from site_cms.content.hooks import Hook, apply_hooks
from site_cms.content.models import CmsModel
from site_cms.exceptions import NotFound, ValidationFailure

from .repository import NoSqlRepository, SortSpec

logger = logging.getLogger(__name__)

# Bookkeeping fields owned by the repository, never part of a draft
_SYSTEM_FIELDS = ("_id", "id", "createdAt", "updatedAt")


def validation_messages(model: type[CmsModel], exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = [p for p in err.get("loc", ()) if isinstance(p, str)]
        name = loc[-1] if loc else ""
        if err.get("type") in ("missing", "string_too_short") and name in model.required_messages:
            msg = model.required_messages[name]
        else:
            msg = f"{'.'.join(loc) or 'body'}: {err.get('msg')}"
        if msg not in messages:
            messages.append(msg)
    return messages


def validate_document(model: type[CmsModel], data: Mapping[str, Any]) -> dict[str, Any]:
    try:
        return model.model_validate(dict(data)).to_document()
    except ValidationError as exc:
        raise ValidationFailure(validation_messages(model, exc)) from exc


class NoSqlService:
    """
    Resource service over a NoSqlRepository.

    Writes run the entity's lifecycle hooks on a draft of the document,
    validate the draft against ``schema`` and then issue one storage call.
    Reads are passthroughs.
    """

    def __init__(
        self,
        repo: NoSqlRepository,
        *,
        schema: Optional[type[CmsModel]] = None,
        hooks: Sequence[Hook] = (),
        not_found_message: Optional[str] = None,
    ):
        self.repo = repo
        self.schema = schema
        self.hooks = tuple(hooks)
        self.not_found_message = not_found_message

    def prepare(
        self, changes: Mapping[str, Any], previous: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        """Build the document to write: hooks first, then schema validation."""
        clean_changes = {k: v for k, v in changes.items() if k not in _SYSTEM_FIELDS}
        clean_previous = (
            {k: v for k, v in previous.items() if k not in _SYSTEM_FIELDS}
            if previous is not None
            else None
        )
        data = apply_hooks(self.hooks, clean_changes, clean_previous)
        if self.schema is None:
            return data
        return validate_document(self.schema, data)

    def _not_found(self) -> NotFound:
        return NotFound(self.not_found_message)

    async def create(self, db: AsyncIOMotorDatabase, data: Mapping[str, Any]) -> dict[str, Any]:
        doc = self.prepare(data)
        created = await self.repo.create(db, doc)
        logger.debug("Created %s %s", self.repo.collection_name, created.get("id"))
        return created

    async def get(self, db: AsyncIOMotorDatabase, id: Any) -> Optional[dict[str, Any]]:
        return await self.repo.get(db, id)

    async def get_or_404(self, db: AsyncIOMotorDatabase, id: Any) -> dict[str, Any]:
        doc = await self.repo.get(db, id)
        if doc is None:
            raise self._not_found()
        return doc

    async def get_by_slug(self, db: AsyncIOMotorDatabase, slug: str) -> dict[str, Any]:
        doc = await self.repo.find_by_slug(db, slug)
        if doc is None:
            raise self._not_found()
        return doc

    async def list(
        self,
        db: AsyncIOMotorDatabase,
        filter: Optional[Mapping[str, Any]] = None,
        *,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        return await self.repo.find_many(db, filter, sort=sort, limit=limit)

    async def update(
        self, db: AsyncIOMotorDatabase, id: Any, changes: Mapping[str, Any]
    ) -> dict[str, Any]:
        previous = await self.get_or_404(db, id)
        doc = self.prepare(changes, previous)
        updated = await self.repo.update(db, id, doc)
        if updated is None:
            # deleted between the read and the write
            raise self._not_found()
        return updated

    async def delete(self, db: AsyncIOMotorDatabase, id: Any) -> None:
        if not await self.repo.delete(db, id):
            raise self._not_found()

    async def toggle(
        self, db: AsyncIOMotorDatabase, id: Any, field: str, *, default: bool = True
    ) -> dict[str, Any]:
        previous = await self.get_or_404(db, id)
        return await self.update(db, id, {field: not previous.get(field, default)})

    async def reorder(self, db: AsyncIOMotorDatabase, ordered_ids: Sequence[Any]) -> int:
        """Set ``order`` to each id's position; one update per id, no transaction."""
        updated = 0
        for index, id in enumerate(ordered_ids):
            if await self.repo.update(db, id, {"order": index}) is not None:
                updated += 1
        return updated

    async def count(self, db: AsyncIOMotorDatabase, filter: Optional[Mapping[str, Any]] = None) -> int:
        return await self.repo.count(db, filter)

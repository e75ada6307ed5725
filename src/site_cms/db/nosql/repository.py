from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from site_cms.exceptions import DuplicateKey

logger = logging.getLogger(__name__)

SortSpec = Sequence[tuple[str, int]]

_INDEX_FIELD = re.compile(r"index: (?P<name>\S+?)_-?1\b")


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id; malformed ids yield ``None`` (callers treat that as not found)."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize(doc: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if doc is None:
        return None
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
        out["id"] = out["_id"]
    return out


def _duplicate_field(exc: DuplicateKeyError) -> tuple[str | None, Any]:
    details = exc.details or {}
    key_value = details.get("keyValue") or {}
    if key_value:
        field, value = next(iter(key_value.items()))
        return field, value
    match = _INDEX_FIELD.search(str(exc))
    return (match.group("name") if match else None), None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class NoSqlRepository:
    """Async Mongo repository over a single collection.

    - Methods take the database handle first so one repository instance
      can be shared by the whole process.
    - Returned documents carry ``_id``/``id`` as strings.
    - Unique-index violations surface as :class:`DuplicateKey`.
    """

    def __init__(self, *, collection_name: str, unique_fields: Iterable[str] = ()):
        self.collection_name = collection_name
        self.unique_fields = tuple(unique_fields)

    def collection(self, db: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
        return db[self.collection_name]

    async def ensure_indexes(self, db: AsyncIOMotorDatabase) -> list[str]:
        names = []
        for field in self.unique_fields:
            # sparse: FAQ categories may be stored before a slug is derived
            names.append(
                await self.collection(db).create_index(
                    [(field, 1)], unique=True, sparse=True, name=f"{field}_1"
                )
            )
        return names

    async def create(self, db: AsyncIOMotorDatabase, data: Mapping[str, Any]) -> dict[str, Any]:
        now = _now()
        doc = {**data, "createdAt": now, "updatedAt": now}
        doc.pop("_id", None)
        doc.pop("id", None)
        try:
            result = await self.collection(db).insert_one(doc)
        except DuplicateKeyError as exc:
            field, value = _duplicate_field(exc)
            logger.info("Duplicate key on %s.%s=%r", self.collection_name, field, value)
            raise DuplicateKey(field, value) from exc
        doc["_id"] = result.inserted_id
        return serialize(doc)  # type: ignore[return-value]

    async def get(self, db: AsyncIOMotorDatabase, id: Any) -> Optional[dict[str, Any]]:
        oid = to_object_id(id)
        if oid is None:
            return None
        return serialize(await self.collection(db).find_one({"_id": oid}))

    async def find_one(
        self, db: AsyncIOMotorDatabase, filter: Mapping[str, Any]
    ) -> Optional[dict[str, Any]]:
        return serialize(await self.collection(db).find_one(dict(filter)))

    async def find_by_slug(self, db: AsyncIOMotorDatabase, slug: str) -> Optional[dict[str, Any]]:
        return await self.find_one(db, {"slug": slug})

    async def find_many(
        self,
        db: AsyncIOMotorDatabase,
        filter: Optional[Mapping[str, Any]] = None,
        *,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        cursor = self.collection(db).find(dict(filter or {}))
        if sort:
            cursor = cursor.sort(list(sort))
        if offset:
            cursor = cursor.skip(offset)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return [serialize(d) for d in docs]  # type: ignore[misc]

    async def update(
        self, db: AsyncIOMotorDatabase, id: Any, data: Mapping[str, Any]
    ) -> Optional[dict[str, Any]]:
        oid = to_object_id(id)
        if oid is None:
            return None
        values = {k: v for k, v in data.items() if k not in ("_id", "id", "createdAt")}
        values["updatedAt"] = _now()
        try:
            doc = await self.collection(db).find_one_and_update(
                {"_id": oid},
                {"$set": values},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            field, value = _duplicate_field(exc)
            logger.info("Duplicate key on %s.%s=%r", self.collection_name, field, value)
            raise DuplicateKey(field, value) from exc
        return serialize(doc)

    async def delete(self, db: AsyncIOMotorDatabase, id: Any) -> bool:
        oid = to_object_id(id)
        if oid is None:
            return False
        result = await self.collection(db).delete_one({"_id": oid})
        return result.deleted_count > 0

    async def count(self, db: AsyncIOMotorDatabase, filter: Optional[Mapping[str, Any]] = None) -> int:
        return int(await self.collection(db).count_documents(dict(filter or {})))

    async def distinct(
        self, db: AsyncIOMotorDatabase, field: str, filter: Optional[Mapping[str, Any]] = None
    ) -> list[Any]:
        return list(await self.collection(db).distinct(field, dict(filter or {})))

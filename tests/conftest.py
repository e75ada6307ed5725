"""
Root conftest.py for site-cms tests.

This file provides:
1. Marker registration
2. An in-memory stand-in for the Motor database/collection API
3. Shared fixtures: storage, auth settings, users, the ASGI app and client

MongoDB is never contacted: ``FakeDatabase`` implements the subset of the
Motor collection API that ``NoSqlRepository`` and the resource modules use,
including unique indexes that raise pymongo's ``DuplicateKeyError``.
"""

from __future__ import annotations

import copy
import io
import re
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from PIL import Image
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from site_cms.api.fastapi import setup_cms_api
from site_cms.app.settings import AppSettings
from site_cms.auth import AuthSettings, create_access_token, set_auth_settings
from site_cms.db.nosql import get_db
from site_cms.media import MediaPipeline, MediaSettings
from site_cms.resources import media_repo
from site_cms.storage import MemoryBackend, StorageSettings


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    # Ensure custom markers are registered even if pyproject.toml isn't picked up in some contexts
    for name, desc in [
        ("api", "HTTP surface tests through the ASGI app"),
        ("media", "Upload pipeline and transcoding tests"),
        ("security", "Bearer token and role checks"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# IN-MEMORY MONGO
# =============================================================================


def _get_path(doc: Mapping[str, Any], dotted: str) -> Any:
    value: Any = doc
    for part in dotted.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value


def _equals(value: Any, expected: Any) -> bool:
    # array fields match when any element matches
    if isinstance(value, list) and not isinstance(expected, list):
        return expected in value
    return value == expected


def _match_condition(value: Any, cond: Any) -> bool:
    if isinstance(cond, Mapping) and cond and all(str(k).startswith("$") for k in cond):
        for op, arg in cond.items():
            if op == "$ne":
                if _equals(value, arg):
                    return False
            elif op == "$in":
                if not any(_equals(value, a) for a in arg):
                    return False
            elif op == "$regex":
                flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(arg, value, flags):
                    return False
            elif op == "$options":
                continue
            else:
                raise NotImplementedError(f"FakeCollection does not support {op}")
        return True
    return _equals(value, cond)


def matches(doc: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    for key, cond in query.items():
        if key == "$or":
            if not any(matches(doc, sub) for sub in cond):
                return False
        elif key == "$and":
            if not all(matches(doc, sub) for sub in cond):
                return False
        elif not _match_condition(_get_path(doc, key), cond):
            return False
    return True


def _sort_key(value: Any) -> tuple:
    # BSON comparison order, reduced to the types the app stores
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (5, value)
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, ObjectId):
        return (4, str(value))
    if isinstance(value, datetime):
        return (6, value.timestamp())
    return (3, str(value))


class FakeInsertOneResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeDeleteResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]):
        self._docs = docs
        self._sort: list[tuple[str, int]] = []
        self._skip = 0
        self._limit = 0

    def sort(self, key_or_list, direction: Optional[int] = None):
        if isinstance(key_or_list, str):
            self._sort = [(key_or_list, direction or 1)]
        else:
            self._sort = list(key_or_list)
        return self

    def skip(self, n: int):
        self._skip = n
        return self

    def limit(self, n: int):
        self._limit = n
        return self

    async def to_list(self, length: Optional[int] = None):
        docs = list(self._docs)
        for field, direction in reversed(self._sort):
            docs.sort(key=lambda d: _sort_key(_get_path(d, field)), reverse=direction < 0)
        docs = docs[self._skip:]
        if self._limit:
            docs = docs[: self._limit]
        if length:
            docs = docs[:length]
        return docs


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.indexes: dict[str, dict[str, Any]] = {}

    def _check_unique(self, doc: Mapping[str, Any], ignore_id: Any = None) -> None:
        for index_name, spec in self.indexes.items():
            field = spec["field"]
            if spec["sparse"] and field not in doc:
                continue
            value = doc.get(field)
            for other in self.docs:
                if other["_id"] == ignore_id:
                    continue
                if spec["sparse"] and field not in other:
                    continue
                if other.get(field) == value:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: test.{self.name} "
                        f"index: {index_name} dup key: {{ {field}: {value!r} }}",
                        11000,
                        {"keyValue": {field: value}},
                    )

    async def create_index(self, keys, unique: bool = False, sparse: bool = False, name: Optional[str] = None):
        field = keys[0][0]
        name = name or f"{field}_1"
        if unique:
            self.indexes[name] = {"field": field, "sparse": sparse}
        return name

    async def insert_one(self, doc: dict[str, Any]):
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self._check_unique(stored)
        self.docs.append(stored)
        doc["_id"] = stored["_id"]
        return FakeInsertOneResult(stored["_id"])

    async def find_one(self, query: Optional[Mapping[str, Any]] = None):
        for doc in self.docs:
            if matches(doc, query or {}):
                return copy.deepcopy(doc)
        return None

    def find(self, query: Optional[Mapping[str, Any]] = None, projection: Optional[Mapping[str, Any]] = None):
        found = [copy.deepcopy(d) for d in self.docs if matches(d, query or {})]
        if projection:
            keep = {k for k, v in projection.items() if v} | {"_id"}
            found = [{k: v for k, v in d.items() if k in keep} for d in found]
        return FakeCursor(found)

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        for index, doc in enumerate(self.docs):
            if not matches(doc, query):
                continue
            updated = {**copy.deepcopy(doc), **copy.deepcopy(update.get("$set", {}))}
            self._check_unique(updated, ignore_id=doc["_id"])
            self.docs[index] = updated
            return copy.deepcopy(updated if return_document == ReturnDocument.AFTER else doc)
        return None

    async def delete_one(self, query):
        for index, doc in enumerate(self.docs):
            if matches(doc, query):
                del self.docs[index]
                return FakeDeleteResult(1)
        return FakeDeleteResult(0)

    async def count_documents(self, query):
        return sum(1 for d in self.docs if matches(d, query))

    async def distinct(self, field: str, query: Optional[Mapping[str, Any]] = None):
        values: list[Any] = []
        for doc in self.docs:
            if not matches(doc, query or {}):
                continue
            value = _get_path(doc, field)
            for item in value if isinstance(value, list) else [value]:
                if item is not None and item not in values:
                    values.append(item)
        return values


class FakeDatabase:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


# =============================================================================
# DATABASE & STORAGE FIXTURES
# =============================================================================


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest_asyncio.fixture
async def indexed_db(fake_db):
    """A FakeDatabase with the unique slug/email indexes created."""
    from site_cms.resources import ALL_REPOSITORIES

    for repo in ALL_REPOSITORIES:
        await repo.ensure_indexes(fake_db)
    return fake_db


@pytest.fixture
def memory_storage() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def media_settings() -> MediaSettings:
    return MediaSettings()


@pytest.fixture
def pipeline(memory_storage, media_settings) -> MediaPipeline:
    return MediaPipeline(memory_storage, media_repo, media_settings, folder="media")


# =============================================================================
# IMAGE HELPERS
# =============================================================================


@pytest.fixture
def make_image():
    """Return a factory producing encoded image bytes generated with Pillow."""

    def _make(size=(64, 48), fmt="PNG", mode="RGB", color=(200, 30, 30)) -> bytes:
        if mode in ("RGBA", "LA") and isinstance(color, tuple) and len(color) == 3:
            color = (*color, 128) if mode == "RGBA" else (color[0], 128)
        elif mode in ("L", "P") and isinstance(color, tuple):
            color = color[0]
        buf = io.BytesIO()
        Image.new(mode, size, color).save(buf, fmt)
        return buf.getvalue()

    return _make


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def auth_settings():
    settings = AuthSettings(jwt_secret="test-secret-key-for-site-cms-tests")
    set_auth_settings(settings)
    yield settings
    set_auth_settings(None)


async def _create_user(db, **fields) -> dict[str, Any]:
    from site_cms.resources import user_service

    return await user_service.create(db, fields)


@pytest_asyncio.fixture
async def admin_user(indexed_db):
    return await _create_user(indexed_db, email="admin@example.com", name="Admin", role="admin")


@pytest_asyncio.fixture
async def editor_user(indexed_db):
    return await _create_user(indexed_db, email="editor@example.com", name="Editor", role="editor")


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(admin_user['id'])}"}


@pytest.fixture
def editor_headers(editor_user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(editor_user['id'])}"}


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def app(indexed_db, memory_storage, media_settings):
    application = setup_cms_api(
        AppSettings(),
        storage=memory_storage,
        storage_settings=StorageSettings(backend="memory"),
        media_settings=media_settings,
    )
    application.dependency_overrides[get_db] = lambda: indexed_db
    return application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def seed_docs(db: FakeDatabase, collection: str, docs: Iterable[Mapping[str, Any]]) -> list[ObjectId]:
    """Insert raw documents synchronously, bypassing hooks and validation."""
    ids = []
    for doc in docs:
        stored = {"_id": ObjectId(), **copy.deepcopy(dict(doc))}
        db[collection].docs.append(stored)
        ids.append(stored["_id"])
    return ids


@pytest.fixture
def insert_raw(indexed_db):
    def _insert(collection: str, *docs: Mapping[str, Any]) -> list[str]:
        return [str(i) for i in seed_docs(indexed_db, collection, docs)]

    return _insert


from __future__ import annotations

from typing import Any, Iterable, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.db.nosql import to_object_id


async def populate_ref(
    db: AsyncIOMotorDatabase,
    docs: Sequence[dict[str, Any]],
    field: str,
    *,
    collection: str = "categories",
    projection: Iterable[str] = ("name", "slug"),
) -> list[dict[str, Any]]:
    """Replace id strings in ``field`` with ``{_id, id, <projection>}`` of the referenced document.

    Ids that do not resolve (free-text categories, deleted references) are
    left untouched.
    """
    oids = {to_object_id(d.get(field)) for d in docs if d.get(field)}
    oids.discard(None)
    if not oids:
        return list(docs)

    fields = tuple(projection)
    cursor = db[collection].find({"_id": {"$in": list(oids)}}, {f: 1 for f in fields})
    refs = {}
    for ref in await cursor.to_list(length=None):
        ref_id = str(ref["_id"])
        refs[ref_id] = {"_id": ref_id, "id": ref_id, **{f: ref.get(f) for f in fields}}

    out = []
    for doc in docs:
        value = doc.get(field)
        if isinstance(value, str) and value in refs:
            doc = {**doc, field: refs[value]}
        out.append(doc)
    return out

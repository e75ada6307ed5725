"""FAQ categories and the questions embedded in them.

Questions live inside their category document; every question operation
rewrites the category's ``questions`` array through the category service so
the schema validates the whole list on each write.
"""

from __future__ import annotations

from typing import Any, Mapping

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.content.hooks import FAQ_CATEGORY_HOOKS
from site_cms.content.models import FAQCategoryDocument
from site_cms.db.nosql import NoSqlRepository, NoSqlService
from site_cms.exceptions import NotFound

FAQ_CATEGORY_NOT_FOUND = "القسم غير موجود"
QUESTION_NOT_FOUND = "السؤال غير موجود"

faq_repo = NoSqlRepository(collection_name="faqcategories", unique_fields=("slug",))
faq_service = NoSqlService(
    faq_repo,
    schema=FAQCategoryDocument,
    hooks=FAQ_CATEGORY_HOOKS,
    not_found_message=FAQ_CATEGORY_NOT_FOUND,
)


def _active_view(category: dict[str, Any]) -> dict[str, Any]:
    questions = [q for q in category.get("questions") or [] if q.get("isActive", True)]
    questions.sort(key=lambda q: q.get("order", 0))
    return {**category, "questions": questions}


async def list_faq(db: AsyncIOMotorDatabase, *, active: bool = False) -> list[dict[str, Any]]:
    query = {"isActive": True} if active else {}
    categories = await faq_service.list(db, query, sort=[("order", 1)])
    if active:
        return [_active_view(c) for c in categories]
    return categories


def _find_question(category: Mapping[str, Any], question_id: str) -> int:
    for index, question in enumerate(category.get("questions") or []):
        if str(question.get("_id")) == str(question_id):
            return index
    raise NotFound(QUESTION_NOT_FOUND)


async def add_question(db: AsyncIOMotorDatabase, id: Any, data: Mapping[str, Any]) -> dict[str, Any]:
    category = await faq_service.get_or_404(db, id)
    question = {k: v for k, v in data.items() if k not in ("_id", "id")}
    questions = [*(category.get("questions") or []), question]
    return await faq_service.update(db, id, {"questions": questions})


async def update_question(
    db: AsyncIOMotorDatabase, id: Any, question_id: str, data: Mapping[str, Any]
) -> dict[str, Any]:
    category = await faq_service.get_or_404(db, id)
    index = _find_question(category, question_id)
    questions = list(category["questions"])
    changes = {k: v for k, v in data.items() if k not in ("_id", "id")}
    questions[index] = {**questions[index], **changes}
    return await faq_service.update(db, id, {"questions": questions})


async def delete_question(db: AsyncIOMotorDatabase, id: Any, question_id: str) -> dict[str, Any]:
    """Remove a question; removing an unknown question id is a no-op."""
    category = await faq_service.get_or_404(db, id)
    questions = [q for q in category.get("questions") or [] if str(q.get("_id")) != str(question_id)]
    return await faq_service.update(db, id, {"questions": questions})


async def toggle_question(db: AsyncIOMotorDatabase, id: Any, question_id: str) -> dict[str, Any]:
    category = await faq_service.get_or_404(db, id)
    index = _find_question(category, question_id)
    questions = list(category["questions"])
    current = questions[index]
    questions[index] = {**current, "isActive": not current.get("isActive", True)}
    return await faq_service.update(db, id, {"questions": questions})

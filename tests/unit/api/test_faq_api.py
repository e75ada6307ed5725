from __future__ import annotations

import pytest

pytestmark = pytest.mark.api


@pytest.fixture
def faq_payload():
    return {
        "name": "الأسئلة العامة",
        "questions": [
            {"question": "كم يستغرق العزل؟", "answer": "يومين", "order": 2},
            {"question": "هل يوجد ضمان؟", "answer": "نعم", "order": 1},
            {"question": "سؤال مخفي", "answer": "-", "isActive": False},
        ],
    }


class TestFaqCategories:
    @pytest.mark.asyncio
    async def test_create_assigns_question_ids(self, client, admin_headers, faq_payload):
        resp = await client.post("/api/faq", json=faq_payload, headers=admin_headers)
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["slug"] == "الأسئلة-العامة"
        assert data["icon"] == "HelpCircle"
        assert all(q["_id"] for q in data["questions"])

    @pytest.mark.asyncio
    async def test_missing_answer(self, client, admin_headers):
        resp = await client.post(
            "/api/faq", json={"name": "x", "questions": [{"question": "q"}]}, headers=admin_headers
        )
        assert resp.status_code == 400
        assert "الإجابة مطلوبة" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_active_listing_filters_and_sorts_questions(self, client, admin_headers, faq_payload):
        await client.post("/api/faq", json=faq_payload, headers=admin_headers)
        await client.post("/api/faq", json={"name": "مخفي", "isActive": False}, headers=admin_headers)

        everything = (await client.get("/api/faq")).json()
        assert everything["count"] == 2

        active = (await client.get("/api/faq", params={"active": "true"})).json()
        assert active["count"] == 1
        assert [q["answer"] for q in active["data"][0]["questions"]] == ["نعم", "يومين"]

    @pytest.mark.asyncio
    async def test_rename_rederives_slug(self, client, admin_headers, faq_payload):
        created = (await client.post("/api/faq", json=faq_payload, headers=admin_headers)).json()["data"]
        resp = await client.put(f"/api/faq/{created['id']}", json={"name": "Pricing"}, headers=admin_headers)
        assert resp.json()["data"]["slug"] == "pricing"

    @pytest.mark.asyncio
    async def test_reorder_route_is_not_an_id(self, client, admin_headers):
        a = (await client.post("/api/faq", json={"name": "A"}, headers=admin_headers)).json()["data"]
        b = (await client.post("/api/faq", json={"name": "B"}, headers=admin_headers)).json()["data"]
        resp = await client.put("/api/faq/reorder", json={"orderedIds": [b["id"], a["id"]]}, headers=admin_headers)
        assert resp.json() == {"success": True, "message": "تم إعادة ترتيب الأقسام"}
        assert [c["name"] for c in (await client.get("/api/faq")).json()["data"]] == ["B", "A"]

    @pytest.mark.asyncio
    async def test_toggle_and_delete(self, client, admin_headers):
        created = (await client.post("/api/faq", json={"name": "A"}, headers=admin_headers)).json()["data"]
        toggled = (await client.patch(f"/api/faq/{created['id']}/toggle", headers=admin_headers)).json()["data"]
        assert toggled["isActive"] is False
        resp = await client.delete(f"/api/faq/{created['id']}", headers=admin_headers)
        assert resp.json()["success"] is True
        assert (await client.get(f"/api/faq/{created['id']}")).status_code == 404


class TestFaqQuestions:
    @pytest.mark.asyncio
    async def test_question_lifecycle(self, client, admin_headers):
        category = (await client.post("/api/faq", json={"name": "A"}, headers=admin_headers)).json()["data"]
        base = f"/api/faq/{category['id']}/questions"

        added = await client.post(base, json={"question": "لماذا؟", "answer": "لأن"}, headers=admin_headers)
        assert added.status_code == 201
        (question,) = added.json()["data"]["questions"]
        qid = question["_id"]

        updated = (
            await client.put(f"{base}/{qid}", json={"answer": "إجابة جديدة"}, headers=admin_headers)
        ).json()["data"]
        assert updated["questions"][0] == {**question, "answer": "إجابة جديدة"}

        toggled = (await client.patch(f"{base}/{qid}/toggle", headers=admin_headers)).json()["data"]
        assert toggled["questions"][0]["isActive"] is False

        removed = (await client.delete(f"{base}/{qid}", headers=admin_headers)).json()["data"]
        assert removed["questions"] == []

    @pytest.mark.asyncio
    async def test_unknown_question(self, client, admin_headers):
        category = (await client.post("/api/faq", json={"name": "A"}, headers=admin_headers)).json()["data"]
        base = f"/api/faq/{category['id']}/questions"

        resp = await client.put(f"{base}/missing", json={"answer": "x"}, headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == "السؤال غير موجود"

        resp = await client.delete(f"{base}/missing", headers=admin_headers)
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_category(self, client, admin_headers):
        resp = await client.post(
            "/api/faq/64b000000000000000000000/questions",
            json={"question": "q", "answer": "a"},
            headers=admin_headers,
        )
        assert resp.status_code == 404
        assert resp.json()["message"] == "القسم غير موجود"

    @pytest.mark.asyncio
    async def test_editor_cannot_add_questions(self, client, admin_headers, editor_headers):
        category = (await client.post("/api/faq", json={"name": "A"}, headers=admin_headers)).json()["data"]
        resp = await client.post(
            f"/api/faq/{category['id']}/questions", json={"question": "q", "answer": "a"}, headers=editor_headers
        )
        assert resp.status_code == 403

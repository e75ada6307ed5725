from __future__ import annotations

import pytest

pytestmark = pytest.mark.api


class TestStatusRoutes:
    @pytest.mark.asyncio
    async def test_root(self, client):
        resp = await client.get("/")
        body = resp.json()
        assert resp.status_code == 200
        assert body["status"] == "ok"
        assert body["message"] == "Admin API is running"

    @pytest.mark.asyncio
    async def test_api_root_lists_endpoints(self, client):
        body = (await client.get("/api")).json()
        assert body["message"] == "Admin API"
        assert body["endpoints"]["services"] == "/api/services"
        assert body["endpoints"]["health"] == "/api/health"

    @pytest.mark.asyncio
    async def test_health(self, client):
        body = (await client.get("/api/health")).json()
        assert body["status"] == "ok"
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_stats(self, client, insert_raw):
        insert_raw("services", {"slug": "a", "isActive": True}, {"slug": "b", "isActive": False})
        insert_raw("blogs", {"slug": "p", "status": "published"}, {"slug": "d", "status": "draft"})
        insert_raw("categories", {"slug": "c"})
        insert_raw("media", {"filename": "media/x.webp"})

        resp = await client.get("/api/stats")
        assert resp.json() == {
            "success": True,
            "data": {
                "services": {"total": 2, "active": 1},
                "blogs": {"total": 2, "published": 1, "drafts": 1},
                "categories": 1,
                "media": 1,
            },
        }

    @pytest.mark.asyncio
    async def test_cors_preflight(self, client):
        resp = await client.options(
            "/api/services",
            headers={"Origin": "http://localhost:3001", "Access-Control-Request-Method": "POST"},
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3001"

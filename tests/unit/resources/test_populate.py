from __future__ import annotations

import pytest

from site_cms.resources.populate import populate_ref


class TestPopulateRef:
    @pytest.mark.asyncio
    async def test_replaces_resolvable_ids(self, fake_db, insert_raw):
        (cat_id,) = insert_raw("categories", {"name": "عزل", "slug": "insulation", "type": "service", "order": 3})
        docs = [{"title": "a", "category": cat_id}, {"title": "b", "category": "free text"}, {"title": "c"}]

        out = await populate_ref(fake_db, docs, "category")

        assert out[0]["category"] == {"_id": cat_id, "id": cat_id, "name": "عزل", "slug": "insulation"}
        assert out[1]["category"] == "free text"
        assert "category" not in out[2]
        # inputs are not mutated
        assert docs[0]["category"] == cat_id

    @pytest.mark.asyncio
    async def test_dangling_reference_is_left_alone(self, fake_db):
        docs = [{"category": "64b000000000000000000000"}]
        assert await populate_ref(fake_db, docs, "category") == docs

    @pytest.mark.asyncio
    async def test_custom_projection(self, fake_db, insert_raw):
        (cat_id,) = insert_raw("categories", {"name": "x", "slug": "x", "type": "blog"})
        out = await populate_ref(fake_db, [{"ref": cat_id}], "ref", projection=("type",))
        assert out[0]["ref"] == {"_id": cat_id, "id": cat_id, "type": "blog"}

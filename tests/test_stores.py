"""매장 API 및 스킬 요건 테스트.

Store tests — CRUD, default skill requirements, per-day requirement
updates, requirement search and the store summary.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.schemas.store import SkillRequirement, StoreCreate
from shiftboard.services.store_service import store_service
from tests.conftest import auth_header

URL = "/api/v1/admin/stores"


class TestStoreCrud:
    """매장 CRUD 테스트."""

    async def test_create_with_defaults(self, client: AsyncClient, admin_token):
        """요건 없이 생성하면 기본 4개 요일 구분 요건."""
        res = await client.post(URL, json={"name": "Osaka Umeda", "address": "大阪府大阪市北区梅田1-1"}, headers=auth_header(admin_token))
        assert res.status_code == 201
        days = sorted(r["day"] for r in res.json()["skill_requirements"])
        assert days == ["holiday", "saturday", "sunday", "weekday"]

    async def test_create_with_requirements(self, client: AsyncClient, admin_token):
        body = {
            "name": "Kobe",
            "skill_requirements": [{"day": "weekday", "kitchen": {"A": 2, "B": 0, "C": 0}}],
        }
        res = await client.post(URL, json=body, headers=auth_header(admin_token))
        assert res.status_code == 201
        requirements = res.json()["skill_requirements"]
        assert len(requirements) == 1
        assert requirements[0]["kitchen"] == {"A": 2, "B": 0, "C": 0}
        assert requirements[0]["hall"] == {"A": 0, "B": 0, "C": 0}

    async def test_update_replaces_requirements(self, client: AsyncClient, admin_token, store):
        """요건 목록을 주면 전체 교체."""
        body = {"phone": "075-111-1111", "skill_requirements": [{"day": "weekday", "sales": {"A": 3, "B": 0, "C": 0}}]}
        res = await client.patch(f"{URL}/{store.id}", json=body, headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["phone"] == "075-111-1111"
        assert [r["day"] for r in data["skill_requirements"]] == ["weekday"]
        assert data["skill_requirements"][0]["sales"]["A"] == 3

    async def test_delete(self, client: AsyncClient, admin_token, store):
        res = await client.delete(f"{URL}/{store.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        res = await client.get(f"{URL}/{store.id}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_create_new_store_returns_id(self, db: AsyncSession):
        """create_new_store는 기본 요건으로 생성하고 ID를 반환."""
        store_id = await store_service.create_new_store(db, "Uji", "京都府宇治市宇治1-1", "0774-00-0000")
        store = await store_service.get_store(db, store_id)
        assert store.name == "Uji"
        assert len(store.skill_requirements) == 4

    async def test_get_nonexistent(self, client: AsyncClient, admin_token):
        """존재하지 않는 매장 조회 시 404."""
        res = await client.get(f"{URL}/{uuid.uuid4()}", headers=auth_header(admin_token))
        assert res.status_code == 404


class TestSkillRequirements:
    """요일 구분별 요건 테스트."""

    async def test_replace_existing_day(self, db: AsyncSession, store):
        """같은 요일 구분은 교체."""
        updated = await store_service.update_skill_requirement(
            db, store.id, SkillRequirement(day="weekday", kitchen={"A": 5, "B": 0, "C": 0})
        )
        weekday = [r for r in updated.skill_requirements if r.day == "weekday"]
        assert len(weekday) == 1
        assert weekday[0].kitchen == {"A": 5, "B": 0, "C": 0}
        assert len(updated.skill_requirements) == 4

    async def test_append_new_day(self, db: AsyncSession):
        store = await store_service.create_store(db, StoreCreate(name="Nara", skill_requirements=[]))
        updated = await store_service.update_skill_requirement(db, store.id, SkillRequirement(day="holiday"))
        assert [r.day for r in updated.skill_requirements] == ["holiday"]

    async def test_remove_day(self, client: AsyncClient, admin_token, store):
        res = await client.delete(f"{URL}/{store.id}/skill-requirements/holiday", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert "holiday" not in [r["day"] for r in res.json()["skill_requirements"]]

    async def test_search(self, client: AsyncClient, admin_token, store):
        """토요일 판매 A 2명 이상 필요 매장 검색."""
        params = {"day": "saturday", "skill": "sales", "level": "A", "min_count": 2}
        res = await client.get(f"{URL}/search", params=params, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert [s["id"] for s in res.json()] == [str(store.id)]

        params["min_count"] = 3
        res = await client.get(f"{URL}/search", params=params, headers=auth_header(admin_token))
        assert res.json() == []


class TestStoreSummary:
    """매장 요약 테스트."""

    async def test_summary(self, client: AsyncClient, admin_token, store):
        """매장 수, 구별 매장 수, 평일 필요 인원 합계."""
        res = await client.get(f"{URL}/summary", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total_stores"] == 1
        assert data["stores_by_region"] == {"中京区": 1}
        # 기본 평일 요건: kitchen 2 + hall 2 + sales 1
        assert data["total_weekday_staff_required"] == 5

    async def test_empty_summary(self, db: AsyncSession):
        summary = await store_service.get_stores_summary(db)
        assert summary == {"total_stores": 0, "stores_by_region": {}, "total_weekday_staff_required": 0}

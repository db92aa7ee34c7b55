"""이벤트, 계절 정보, 대시보드 테스트.

Event, seasonal info and dashboard aggregation tests.
"""

import asyncio
from datetime import date, datetime, timedelta

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.schemas.event import EventCreate, SeasonalArea, SeasonalInfoCreate
from shiftboard.schemas.shift import ShiftCreate
from shiftboard.services.attendance_service import AttendanceService
from shiftboard.services.dashboard_service import dashboard_service
from shiftboard.services.event_service import event_service
from shiftboard.services.shift_service import shift_service
from shiftboard.utils.date_utils import local_today
from tests.conftest import FixedClock, auth_header

EVENTS_URL = "/api/v1/admin/events"
SEASONAL_URL = "/api/v1/admin/seasonal-infos"
DASHBOARD_URL = "/api/v1/admin/dashboard"


def sakura(name: str = "Kyoto Sakura", areas: int = 4) -> dict:
    return {
        "name": name,
        "type": "sakura",
        "progress": 60,
        "areas": [
            {
                "name": f"Area {i}",
                "status": "blooming",
                "best_viewing_period": {"start": "2025-04-01", "end": "2025-04-07"} if i == 0 else None,
            }
            for i in range(areas)
        ],
    }


class TestEvents:
    """이벤트 CRUD 테스트."""

    async def test_create_and_get(self, client: AsyncClient, admin_token, store):
        res = await client.post(EVENTS_URL, json={
            "name": "Aoi Matsuri",
            "start_date": "2025-05-15",
            "end_date": "2025-05-15",
            "affected_stores": [str(store.id)],
            "customer_prediction": 300,
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        event_id = res.json()["id"]

        res = await client.get(f"{EVENTS_URL}/{event_id}", headers=auth_header(admin_token))
        assert res.json()["customer_prediction"] == 300

    async def test_end_before_start_rejected(self, client: AsyncClient, admin_token):
        res = await client.post(EVENTS_URL, json={
            "name": "Backwards", "start_date": "2025-05-15", "end_date": "2025-05-14",
        }, headers=auth_header(admin_token))
        assert res.status_code == 422

    async def test_update_end_before_start_rejected(self, client: AsyncClient, admin_token):
        """부분 수정 후 범위가 뒤집히면 400."""
        res = await client.post(EVENTS_URL, json={
            "name": "Gion", "start_date": "2025-07-01", "end_date": "2025-07-31",
        }, headers=auth_header(admin_token))
        event_id = res.json()["id"]

        res = await client.patch(f"{EVENTS_URL}/{event_id}", json={"end_date": "2025-06-30"}, headers=auth_header(admin_token))
        assert res.status_code == 400

        res = await client.patch(f"{EVENTS_URL}/{event_id}", json={"end_date": "2025-07-17"}, headers=auth_header(admin_token))
        assert res.json()["end_date"] == "2025-07-17"

    async def test_delete(self, client: AsyncClient, admin_token):
        res = await client.post(EVENTS_URL, json={
            "name": "Jidai", "start_date": "2025-10-22", "end_date": "2025-10-22",
        }, headers=auth_header(admin_token))
        event_id = res.json()["id"]
        res = await client.delete(f"{EVENTS_URL}/{event_id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        res = await client.get(f"{EVENTS_URL}/{event_id}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_range_overlap(self, db: AsyncSession):
        """범위 양 끝이 포함되는 겹침 조회, 시작일순."""
        await event_service.save_event(db, EventCreate(name="B", start_date=date(2025, 4, 10), end_date=date(2025, 4, 12)))
        await event_service.save_event(db, EventCreate(name="A", start_date=date(2025, 3, 28), end_date=date(2025, 4, 1)))
        await event_service.save_event(db, EventCreate(name="C", start_date=date(2025, 4, 8), end_date=date(2025, 4, 8)))

        events = await event_service.get_events_by_date_range(db, date(2025, 4, 1), date(2025, 4, 8))
        assert [e.name for e in events] == ["A", "C"]

    async def test_same_start_date_keeps_insertion_order(self, db: AsyncSession):
        """시작일이 같으면 등록 순."""
        await event_service.save_event(db, EventCreate(name="Zeta", start_date=date(2025, 4, 5), end_date=date(2025, 4, 6)))
        await asyncio.sleep(0.01)
        await event_service.save_event(db, EventCreate(name="Alpha", start_date=date(2025, 4, 5), end_date=date(2025, 4, 5)))

        events = await event_service.get_events_by_date_range(db, date(2025, 4, 1), date(2025, 4, 30))
        assert [e.name for e in events] == ["Zeta", "Alpha"]
        assert [e.name for e in await event_service.get_all_events(db)] == ["Zeta", "Alpha"]

    async def test_upcoming(self, db: AsyncSession):
        """기준일부터 days일 이내에 겹치는 이벤트."""
        today = date(2025, 4, 1)
        await event_service.save_event(db, EventCreate(name="Soon", start_date=date(2025, 4, 20), end_date=date(2025, 4, 21)))
        await event_service.save_event(db, EventCreate(name="Later", start_date=date(2025, 6, 1), end_date=date(2025, 6, 1)))
        await event_service.save_event(db, EventCreate(name="Ongoing", start_date=date(2025, 3, 25), end_date=date(2025, 4, 2)))

        events = await event_service.get_upcoming_events(db, days=30, today=today)
        assert [e.name for e in events] == ["Ongoing", "Soon"]

    async def test_by_store(self, client: AsyncClient, admin_token, store):
        await client.post(EVENTS_URL, json={
            "name": "Local", "start_date": "2025-05-01", "end_date": "2025-05-01", "affected_stores": [str(store.id)],
        }, headers=auth_header(admin_token))
        await client.post(EVENTS_URL, json={
            "name": "Elsewhere", "start_date": "2025-05-01", "end_date": "2025-05-01",
        }, headers=auth_header(admin_token))

        res = await client.get(f"{EVENTS_URL}/stores/{store.id}", headers=auth_header(admin_token))
        assert [e["name"] for e in res.json()] == ["Local"]

    async def test_employee_forbidden(self, client: AsyncClient, employee_token):
        res = await client.get(EVENTS_URL, headers=auth_header(employee_token))
        assert res.status_code == 403


class TestSeasonalInfo:
    """계절 정보 테스트."""

    async def test_create_and_latest(self, client: AsyncClient, admin_token):
        res = await client.post(SEASONAL_URL, json=sakura(), headers=auth_header(admin_token))
        assert res.status_code == 201
        assert res.json()["areas"][0]["best_viewing_period"]["start"] == "2025-04-01"

        res = await client.get(f"{SEASONAL_URL}/latest/sakura", headers=auth_header(admin_token))
        assert res.json()["name"] == "Kyoto Sakura"

    async def test_latest_missing(self, client: AsyncClient, admin_token):
        res = await client.get(f"{SEASONAL_URL}/latest/azalea", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_invalid_type(self, client: AsyncClient, admin_token):
        res = await client.post(SEASONAL_URL, json={**sakura(), "type": "maple"}, headers=auth_header(admin_token))
        assert res.status_code == 422

    async def test_external_update_overwrites_latest(self, client: AsyncClient, admin_token):
        """외부 갱신은 유형별 최신 기록을 덮어씀."""
        res = await client.post(SEASONAL_URL, json=sakura(), headers=auth_header(admin_token))
        info_id = res.json()["id"]

        res = await client.post(
            f"{SEASONAL_URL}/external-update", json={**sakura("Kyoto Sakura 2"), "progress": 90}, headers=auth_header(admin_token)
        )
        assert res.json()["id"] == info_id
        assert res.json()["progress"] == 90

        res = await client.get(SEASONAL_URL, headers=auth_header(admin_token))
        assert len(res.json()) == 1

    async def test_external_update_creates(self, client: AsyncClient, admin_token):
        res = await client.post(
            f"{SEASONAL_URL}/external-update", json={**sakura(), "type": "azalea"}, headers=auth_header(admin_token)
        )
        assert res.status_code == 200
        assert res.json()["type"] == "azalea"

    async def test_best_viewing(self, db: AsyncSession):
        """최적 관람 기간 양 끝 포함."""
        await event_service.save_seasonal_info(db, SeasonalInfoCreate(**sakura()))

        assert len(await event_service.get_areas_in_best_viewing_period(db, today=date(2025, 4, 7))) == 1
        assert await event_service.get_areas_in_best_viewing_period(db, today=date(2025, 4, 8)) == []

    async def test_put_replaces(self, client: AsyncClient, admin_token):
        res = await client.post(SEASONAL_URL, json=sakura(), headers=auth_header(admin_token))
        info_id = res.json()["id"]
        res = await client.put(f"{SEASONAL_URL}/{info_id}", json=sakura("Renamed", areas=1), headers=auth_header(admin_token))
        assert res.json()["name"] == "Renamed"
        assert len(res.json()["areas"]) == 1


class TestDashboard:
    """대시보드 집계 테스트."""

    async def test_summary_empty(self, client: AsyncClient, admin_token):
        """데이터가 없어도 빈 요약."""
        res = await client.get(f"{DASHBOARD_URL}/summary", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json() == {"upcoming_events": [], "seasonal_highlights": []}

    async def test_summary_highlights(self, db: AsyncSession):
        """유형별 최신 정보, 지역은 앞 3개까지."""
        await event_service.save_seasonal_info(db, SeasonalInfoCreate(**sakura(areas=5)))
        await event_service.save_seasonal_info(
            db, SeasonalInfoCreate(name="Azalea", type="azalea", progress=10, areas=[SeasonalArea(name="Umekoji", status="budding")])
        )
        await event_service.save_event(db, EventCreate(name="Soon", start_date=date(2025, 4, 5), end_date=date(2025, 4, 5)))

        summary = await dashboard_service.get_dashboard_summary(db, today=date(2025, 4, 1))
        assert [e.name for e in summary["upcoming_events"]] == ["Soon"]
        assert [h["type"] for h in summary["seasonal_highlights"]] == ["sakura", "azalea"]
        assert [a["name"] for a in summary["seasonal_highlights"][0]["areas"]] == ["Area 0", "Area 1", "Area 2"]

    async def test_attendance_overview(self, db: AsyncSession, employee, other_employee, store):
        """매장별 통계와 전체 합계."""
        day = date(2025, 4, 1)
        service = AttendanceService(clock=FixedClock(datetime(2025, 4, 1, 9, 30)))
        late = await service.clock_in(db, employee.id, store.id)
        await service.clock_out(db, late.id, time=datetime(2025, 4, 1, 17, 30))
        normal = await service.clock_in(db, other_employee.id, store.id, time=datetime(2025, 4, 1, 9, 0))
        await service.clock_out(db, normal.id, time=datetime(2025, 4, 1, 15, 0))

        overview = await dashboard_service.get_attendance_overview(db, day, day)
        assert overview["total_attendances"] == 2
        assert overview["late_count"] == 1
        assert overview["early_count"] == 1
        assert overview["total_hours"] == 14.0
        assert overview["average_hours_per_attendance"] == 7.0
        assert overview["stores"][0]["store_name"] == "Kyoto Sanjo"

    async def test_attendance_overview_empty(self, client: AsyncClient, admin_token, store):
        res = await client.get(
            f"{DASHBOARD_URL}/attendance-overview",
            params={"date_from": "2025-04-01", "date_to": "2025-04-07"},
            headers=auth_header(admin_token),
        )
        data = res.json()
        assert data["total_attendances"] == 0
        assert data["average_hours_per_attendance"] == 0
        assert data["stores"][0]["total_hours"] == 0

    async def test_shift_overview(self, client: AsyncClient, admin_token, db: AsyncSession, employee, store):
        """기본 기간은 오늘부터 7일."""
        today = local_today()
        await shift_service.create_shifts_in_batch(db, [
            ShiftCreate(user_id=employee.id, store_id=store.id, date=today, start_time="09:00", end_time="17:00"),
            ShiftCreate(user_id=employee.id, store_id=store.id, date=today + timedelta(days=30), start_time="09:00", end_time="17:00"),
        ])
        await event_service.save_event(db, EventCreate(name="Today", start_date=today, end_date=today))
        await db.commit()

        res = await client.get(f"{DASHBOARD_URL}/shift-overview", headers=auth_header(admin_token))
        data = res.json()
        assert data["date_from"] == today.isoformat()
        assert data["total_shifts"] == 1
        assert data["shifts_per_store"] == {str(store.id): 1}
        assert [e["name"] for e in data["events"]] == ["Today"]

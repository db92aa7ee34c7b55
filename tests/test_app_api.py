"""앱(직원) API 테스트 — 내 근태, 내 시프트, 내 시프트 희망.

App API tests — the employee's own attendance, shifts and shift preferences.
"""

from datetime import date, datetime

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.schemas.shift import ShiftCreate
from shiftboard.services.attendance_service import attendance_service
from shiftboard.services.shift_service import shift_service
from tests.conftest import FixedClock, auth_header, make_token

ATTENDANCE = "/api/v1/app/my/attendance"
SHIFTS = "/api/v1/app/my/shifts"
PREFERENCES = "/api/v1/app/my/shift-preferences"


@pytest.fixture
def clock(monkeypatch) -> FixedClock:
    """싱글턴 근태 서비스의 시계를 고정합니다."""
    fixed = FixedClock(datetime(2025, 4, 1, 8, 55))
    monkeypatch.setattr(attendance_service, "clock", fixed)
    return fixed


class TestMyAttendance:
    """내 근태 API 테스트."""

    async def test_full_day(self, client: AsyncClient, employee_token, store, clock):
        """출근 → 휴식 → 퇴근."""
        res = await client.post(f"{ATTENDANCE}/clock-in", json={"store_id": str(store.id)}, headers=auth_header(employee_token))
        assert res.status_code == 201
        data = res.json()
        assert data["state"] == "clocked_in"
        assert data["status"] == "normal"
        attendance_id = data["id"]

        clock.now = datetime(2025, 4, 1, 12, 0)
        res = await client.post(f"{ATTENDANCE}/{attendance_id}/break-start", headers=auth_header(employee_token))
        assert res.json()["has_active_break"] is True

        clock.now = datetime(2025, 4, 1, 12, 30)
        res = await client.post(f"{ATTENDANCE}/{attendance_id}/break-end", headers=auth_header(employee_token))
        assert res.json()["state"] == "clocked_in"

        clock.now = datetime(2025, 4, 1, 17, 5)
        res = await client.post(f"{ATTENDANCE}/{attendance_id}/clock-out", headers=auth_header(employee_token))
        data = res.json()
        assert data["state"] == "clocked_out"
        assert data["total_work_hours"] == 7.67
        assert data["status"] == "normal"

    async def test_time_override_ignored(self, client: AsyncClient, employee_token, store, clock):
        """직원은 출근 시각을 지정할 수 없음."""
        res = await client.post(
            f"{ATTENDANCE}/clock-in",
            json={"store_id": str(store.id), "time": "2025-03-01T09:00:00"},
            headers=auth_header(employee_token),
        )
        assert res.json()["date"] == "2025-04-01"

    async def test_double_clock_in(self, client: AsyncClient, employee_token, store, clock):
        await client.post(f"{ATTENDANCE}/clock-in", json={"store_id": str(store.id)}, headers=auth_header(employee_token))
        res = await client.post(f"{ATTENDANCE}/clock-in", json={"store_id": str(store.id)}, headers=auth_header(employee_token))
        assert res.status_code == 409

    async def test_break_end_without_break(self, client: AsyncClient, employee_token, store, clock):
        res = await client.post(f"{ATTENDANCE}/clock-in", json={"store_id": str(store.id)}, headers=auth_header(employee_token))
        res = await client.post(f"{ATTENDANCE}/{res.json()['id']}/break-end", headers=auth_header(employee_token))
        assert res.status_code == 409

    async def test_unknown_store(self, client: AsyncClient, employee_token, clock):
        res = await client.post(
            f"{ATTENDANCE}/clock-in",
            json={"store_id": "00000000-0000-0000-0000-000000000000"},
            headers=auth_header(employee_token),
        )
        assert res.status_code == 404

    async def test_other_employee_record_forbidden(self, client: AsyncClient, employee_token, other_employee, store, clock):
        """다른 직원의 기록은 변경 불가."""
        res = await client.post(
            f"{ATTENDANCE}/clock-in", json={"store_id": str(store.id)}, headers=auth_header(make_token(other_employee))
        )
        res = await client.post(f"{ATTENDANCE}/{res.json()['id']}/clock-out", headers=auth_header(employee_token))
        assert res.status_code == 403

    async def test_today(self, client: AsyncClient, employee_token, store, clock):
        res = await client.get(f"{ATTENDANCE}/today", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json() is None

        await client.post(f"{ATTENDANCE}/clock-in", json={"store_id": str(store.id)}, headers=auth_header(employee_token))
        res = await client.get(f"{ATTENDANCE}/today", headers=auth_header(employee_token))
        assert res.json()["date"] == "2025-04-01"

    async def test_history_and_stats(self, client: AsyncClient, employee_token, store, clock):
        """이력 조회와 월간 통계."""
        res = await client.post(f"{ATTENDANCE}/clock-in", json={"store_id": str(store.id)}, headers=auth_header(employee_token))
        clock.now = datetime(2025, 4, 1, 17, 55)
        await client.post(f"{ATTENDANCE}/{res.json()['id']}/clock-out", headers=auth_header(employee_token))

        res = await client.get(
            f"{ATTENDANCE}/history",
            params={"start_date": "2025-04-01", "end_date": "2025-04-30"},
            headers=auth_header(employee_token),
        )
        assert len(res.json()) == 1

        res = await client.get(f"{ATTENDANCE}/stats", params={"year": 2025, "month": 4}, headers=auth_header(employee_token))
        data = res.json()
        assert data["total_days"] == 1
        assert data["total_hours"] == 9.0
        assert data["late_count"] == 0

    async def test_stats_empty_month(self, client: AsyncClient, employee_token):
        res = await client.get(f"{ATTENDANCE}/stats", params={"year": 2025, "month": 2}, headers=auth_header(employee_token))
        assert res.json() == {
            "total_days": 0, "total_hours": 0, "late_count": 0, "early_count": 0, "average_hours_per_day": 0,
        }


class TestMyShifts:
    """내 시프트 API 테스트."""

    async def test_only_own_shifts(self, client: AsyncClient, db: AsyncSession, employee_token, employee, other_employee, store):
        await shift_service.create_shifts_in_batch(db, [
            ShiftCreate(user_id=employee.id, store_id=store.id, date=date(2025, 4, 2), start_time="09:00", end_time="17:00"),
            ShiftCreate(user_id=other_employee.id, store_id=store.id, date=date(2025, 4, 2), start_time="13:00", end_time="21:00"),
        ])
        await db.commit()

        res = await client.get(
            SHIFTS, params={"start_date": "2025-04-01", "end_date": "2025-04-30"}, headers=auth_header(employee_token)
        )
        data = res.json()
        assert len(data) == 1
        assert data[0]["user_id"] == str(employee.id)


class TestMyShiftPreferences:
    """내 시프트 희망 API 테스트."""

    async def test_save_and_get(self, client: AsyncClient, employee_token, employee):
        res = await client.put(PREFERENCES, json={
            "year": 2025,
            "month": 5,
            "desired_days_per_week": 3,
            "preferred_weekdays": ["monday", "wednesday"],
            "unavailable_dates": ["2025-05-05"],
        }, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["user_id"] == str(employee.id)

        res = await client.get(PREFERENCES, params={"year": 2025, "month": 5}, headers=auth_header(employee_token))
        assert res.json()["desired_days_per_week"] == 3

    async def test_user_id_in_body_ignored(self, client: AsyncClient, employee_token, employee, other_employee):
        """직원은 본인 희망만 저장."""
        res = await client.put(PREFERENCES, json={
            "user_id": str(other_employee.id), "year": 2025, "month": 5,
        }, headers=auth_header(employee_token))
        assert res.json()["user_id"] == str(employee.id)

    async def test_missing(self, client: AsyncClient, employee_token):
        res = await client.get(PREFERENCES, params={"year": 2025, "month": 6}, headers=auth_header(employee_token))
        assert res.status_code == 404

    async def test_unavailable_dates(self, client: AsyncClient, employee_token):
        res = await client.put(PREFERENCES, json={"year": 2025, "month": 5}, headers=auth_header(employee_token))
        preference_id = res.json()["id"]

        res = await client.post(
            f"{PREFERENCES}/{preference_id}/unavailable-dates", json={"date": "2025-05-10"}, headers=auth_header(employee_token)
        )
        assert res.json()["unavailable_dates"] == ["2025-05-10"]

        res = await client.delete(f"{PREFERENCES}/{preference_id}/unavailable-dates/2025-05-10", headers=auth_header(employee_token))
        assert res.json()["unavailable_dates"] == []

    async def test_other_preference_forbidden(self, client: AsyncClient, employee_token, other_employee):
        res = await client.put(PREFERENCES, json={"year": 2025, "month": 5}, headers=auth_header(make_token(other_employee)))
        res = await client.post(
            f"{PREFERENCES}/{res.json()['id']}/unavailable-dates", json={"date": "2025-05-10"}, headers=auth_header(employee_token)
        )
        assert res.status_code == 403

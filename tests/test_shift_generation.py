"""시프트 자동 생성 테스트.

Shift generation tests — constraint package contents, generator output
validation, the httpx-backed generator and saving generated shifts.
"""

import json
from datetime import date
from typing import Any

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.schemas.event import EventCreate
from shiftboard.schemas.generation import GenerationOptions, RelationshipConstraint
from shiftboard.schemas.shift import ShiftPreferenceSave
from shiftboard.services.event_service import event_service
from shiftboard.services.shift_generation_service import (
    HttpShiftGenerator,
    ShiftGenerationService,
    shift_generation_service,
)
from shiftboard.services.shift_preference_service import shift_preference_service
from shiftboard.services.shift_service import shift_service
from shiftboard.utils.exceptions import InvalidGenerationResultError
from tests.conftest import auth_header

URL = "/api/v1/admin/shift-generation"


class FakeGenerator:
    """고정 결과 생성기 — 받은 패키지를 기록합니다."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.packages: list[dict] = []

    async def generate(self, package: dict[str, Any]) -> Any:
        self.packages.append(package)
        return self.result


class FixedConstraints:
    def __init__(self, constraints: list[RelationshipConstraint]) -> None:
        self.constraints = constraints

    async def get_constraints(self, db: AsyncSession) -> list[RelationshipConstraint]:
        return self.constraints


def generated(user, store, day: str = "2025-04-01") -> dict:
    return {"user_id": str(user.id), "store_id": str(store.id), "date": day, "start_time": "09:00", "end_time": "17:00"}


class TestConstraintPackage:
    """제약 패키지 구성 테스트."""

    async def test_contents(self, db: AsyncSession, employee, other_employee, store):
        """직원, 매장, 시작 월의 희망, 겹치는 이벤트, 관계 제약, 옵션 포함."""
        await shift_preference_service.save_preference(
            db, employee.id, ShiftPreferenceSave(year=2025, month=4, unavailable_dates=[date(2025, 4, 3)])
        )
        await shift_preference_service.save_preference(db, employee.id, ShiftPreferenceSave(year=2025, month=5))
        await event_service.save_event(
            db, EventCreate(name="Aoi Matsuri", start_date=date(2025, 3, 30), end_date=date(2025, 4, 2), affected_stores=[str(store.id)])
        )
        await event_service.save_event(
            db, EventCreate(name="Gion", start_date=date(2025, 7, 1), end_date=date(2025, 7, 31))
        )
        constraint = RelationshipConstraint(employee1_id=str(employee.id), employee2_id=str(other_employee.id), reason="conflict")
        service = ShiftGenerationService(generator=FakeGenerator({"shifts": []}), relationship_provider=FixedConstraints([constraint]))

        package = await service.build_constraint_package(
            db, date(2025, 4, 1), date(2025, 4, 7), GenerationOptions(distribute_shifts_evenly=False)
        )

        assert package.period == {"start_date": "2025-04-01", "end_date": "2025-04-07"}
        assert {e["id"] for e in package.employees} == {str(employee.id), str(other_employee.id)}
        assert package.employees[0]["skills"].keys() == {"kitchen", "hall", "sales", "overall"}
        assert package.stores[0]["id"] == str(store.id)
        assert len(package.stores[0]["skill_requirements"]) == 4
        assert len(package.preferences) == 1
        assert package.preferences[0]["unavailable_dates"] == ["2025-04-03"]
        assert [e["name"] for e in package.events] == ["Aoi Matsuri"]
        assert package.events[0]["start_date"] == "2025-03-30"
        assert package.relationship_constraints == [constraint]
        assert package.options.distribute_shifts_evenly is False

    async def test_default_provider_is_empty(self, db: AsyncSession):
        service = ShiftGenerationService(generator=FakeGenerator({"shifts": []}))
        package = await service.build_constraint_package(db, date(2025, 4, 1), date(2025, 4, 7))
        assert package.relationship_constraints == []
        assert package.employees == []


class TestGenerateShifts:
    """생성 결과 검증 테스트."""

    async def test_maps_to_planned_unsaved(self, db: AsyncSession, employee, store):
        """생성 결과는 ID 없는 planned 시프트."""
        generator = FakeGenerator({"shifts": [generated(employee, store)]})
        service = ShiftGenerationService(generator=generator)

        shifts = await service.generate_shifts(db, date(2025, 4, 1), date(2025, 4, 7))
        assert len(shifts) == 1
        assert shifts[0].id is None
        assert shifts[0].status == "planned"
        assert shifts[0].date == date(2025, 4, 1)
        assert generator.packages[0]["period"]["start_date"] == "2025-04-01"
        assert await shift_service.get_all_shifts(db, date(2025, 4, 1), date(2025, 4, 7)) == []

    @pytest.mark.parametrize("raw", [
        None,
        [],
        {"schedule": []},
        {"shifts": [{"user_id": "not-a-uuid", "store_id": "x", "date": "2025-04-01", "start_time": "9", "end_time": "17:00"}]},
    ])
    async def test_invalid_output(self, db: AsyncSession, raw):
        """형식이 맞지 않으면 InvalidGenerationResultError."""
        service = ShiftGenerationService(generator=FakeGenerator(raw))
        with pytest.raises(InvalidGenerationResultError):
            await service.generate_shifts(db, date(2025, 4, 1), date(2025, 4, 7))

    @pytest.mark.parametrize("start_time", ["25:00", "09:99", "24:00"])
    async def test_out_of_range_time_rejected(self, db: AsyncSession, employee, store, start_time):
        """범위를 벗어난 시각은 InvalidGenerationResultError."""
        shift = {**generated(employee, store), "start_time": start_time}
        service = ShiftGenerationService(generator=FakeGenerator({"shifts": [shift]}))
        with pytest.raises(InvalidGenerationResultError):
            await service.generate_shifts(db, date(2025, 4, 1), date(2025, 4, 7))

    async def test_generate_and_save(self, db: AsyncSession, employee, store):
        """생성 후 일괄 저장."""
        service = ShiftGenerationService(generator=FakeGenerator({"shifts": [
            generated(employee, store, "2025-04-01"),
            generated(employee, store, "2025-04-02"),
        ]}))
        ids = await service.generate_and_save(db, date(2025, 4, 1), date(2025, 4, 7))
        assert len(ids) == 2
        saved = await shift_service.get_user_shifts(db, employee.id, date(2025, 4, 1), date(2025, 4, 7))
        assert [s.id for s in saved] == ids


class TestHttpShiftGenerator:
    """HTTP 생성기 테스트."""

    async def test_parses_message_content(self):
        """chat-completions 응답의 message.content를 JSON으로 파싱."""
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            content = json.dumps({"shifts": []})
            return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

        generator = HttpShiftGenerator(
            url="https://generator.test/v1/chat/completions",
            api_key="secret",
            model="test-model",
            transport=httpx.MockTransport(handler),
        )
        result = await generator.generate({"period": {"start_date": "2025-04-01", "end_date": "2025-04-07"}, "options": {}})

        assert result == {"shifts": []}
        assert seen["auth"] == "Bearer secret"
        assert seen["body"]["model"] == "test-model"
        assert "2025-04-01" in seen["body"]["messages"][0]["content"]

    async def test_http_error(self):
        """HTTP 오류는 InvalidGenerationResultError."""
        generator = HttpShiftGenerator(
            url="https://generator.test/v1/chat/completions",
            api_key="",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with pytest.raises(InvalidGenerationResultError):
            await generator.generate({})

    async def test_non_json_content(self):
        """JSON이 아닌 응답 내용도 InvalidGenerationResultError."""
        generator = HttpShiftGenerator(
            url="https://generator.test/v1/chat/completions",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "sorry"}}]})
            ),
        )
        with pytest.raises(InvalidGenerationResultError):
            await generator.generate({})


class TestGenerationApi:
    """시프트 생성 API 테스트."""

    async def test_generate_without_save(self, client: AsyncClient, admin_token, monkeypatch, employee, store):
        monkeypatch.setattr(shift_generation_service, "generator", FakeGenerator({"shifts": [generated(employee, store)]}))
        res = await client.post(
            URL, json={"start_date": "2025-04-01", "end_date": "2025-04-07"}, headers=auth_header(admin_token)
        )
        assert res.status_code == 200
        data = res.json()
        assert data["ids"] == []
        assert data["shifts"][0]["id"] is None
        assert data["shifts"][0]["status"] == "planned"

    async def test_generate_and_save(self, client: AsyncClient, admin_token, monkeypatch, employee, store):
        """save=true이면 저장 후 ID 반환."""
        monkeypatch.setattr(shift_generation_service, "generator", FakeGenerator({"shifts": [generated(employee, store)]}))
        res = await client.post(
            URL, json={"start_date": "2025-04-01", "end_date": "2025-04-07", "save": True}, headers=auth_header(admin_token)
        )
        data = res.json()
        assert len(data["ids"]) == 1
        assert data["shifts"][0]["id"] == data["ids"][0]

    async def test_invalid_result_is_502(self, client: AsyncClient, admin_token, monkeypatch):
        monkeypatch.setattr(shift_generation_service, "generator", FakeGenerator({"nope": True}))
        res = await client.post(
            URL, json={"start_date": "2025-04-01", "end_date": "2025-04-07"}, headers=auth_header(admin_token)
        )
        assert res.status_code == 502

    async def test_reversed_range(self, client: AsyncClient, admin_token):
        res = await client.post(
            URL, json={"start_date": "2025-04-07", "end_date": "2025-04-01"}, headers=auth_header(admin_token)
        )
        assert res.status_code == 422

    async def test_constraints_preview(self, client: AsyncClient, admin_token, employee, store):
        res = await client.post(
            f"{URL}/constraints", json={"start_date": "2025-04-01", "end_date": "2025-04-07"}, headers=auth_header(admin_token)
        )
        assert res.status_code == 200
        data = res.json()
        assert data["period"]["end_date"] == "2025-04-07"
        assert data["options"]["consider_skill_requirements"] is True

"""로깅 및 저장소 오류 처리 테스트.

Logging tests — request log masking, acting-user extraction, domain event
shipping, and the storage failure handler.
"""

import uuid
from datetime import date
from typing import Any

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from starlette.requests import Request

from shiftboard.middleware.axiom_logging import error_reason, mask_sensitive, request_user_id
from shiftboard.services.event_service import event_service
from shiftboard.utils import event_logger
from tests.conftest import auth_header, make_token


class FakeAxiom:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.ingested: list[tuple[str, list[dict]]] = []

    def ingest_events(self, dataset: str, events: list[dict]) -> Any:
        if self.fail:
            raise RuntimeError("axiom down")
        self.ingested.append((dataset, events))


def make_request(authorization: str | None) -> Request:
    headers = [(b"authorization", authorization.encode())] if authorization else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestMasking:
    """민감 필드 마스킹 테스트."""

    def test_contact_data_masked(self):
        masked = mask_sensitive({"name": "Sato", "email": "sato@example.com", "phone": "090", "skills": {"hall": "A"}})
        assert masked == {"name": "Sato", "email": "***", "phone": "***", "skills": {"hall": "A"}}

    def test_nested_lists_truncated(self):
        masked = mask_sensitive({"shifts": [{"note": str(i)} for i in range(50)]})
        assert len(masked["shifts"]) == 20

    def test_deep_nesting_elided(self):
        data: dict = {"a": {"b": {"c": {"d": {"e": {"f": {"g": 1}}}}}}}
        assert mask_sensitive(data)["a"]["b"]["c"]["d"]["e"]["f"] == "..."


class TestRequestUser:
    """요청 직원 식별 테스트."""

    async def test_bearer_token(self, employee):
        assert request_user_id(make_request(f"Bearer {make_token(employee)}")) == str(employee.id)

    def test_missing_or_invalid(self):
        assert request_user_id(make_request(None)) is None
        assert request_user_id(make_request("Bearer garbage")) is None
        assert request_user_id(make_request("Basic abc")) is None


class TestErrorReason:
    def test_detail(self):
        assert error_reason(b'{"detail": "User already on break"}') == "User already on break"

    def test_plain_text(self):
        assert error_reason(b"Internal Server Error") == "Internal Server Error"


class TestDomainEvents:
    """도메인 이벤트 전송 테스트."""

    def test_noop_without_axiom(self, monkeypatch):
        monkeypatch.setattr(event_logger, "_client", None)
        monkeypatch.setattr(event_logger.settings, "AXIOM_API_TOKEN", "")
        event_logger.log_event("attendance.clock_in", user_id="x")

    def test_ships_jsonable_payload(self, monkeypatch):
        fake = FakeAxiom()
        monkeypatch.setattr(event_logger, "_client", fake)
        monkeypatch.setattr(event_logger.settings, "AXIOM_DATASET", "shiftboard")

        shift_id = uuid.uuid4()
        event_logger.log_event("shifts.batch_created", count=1, shift_ids=[shift_id], day=date(2025, 4, 1))

        dataset, events = fake.ingested[0]
        assert dataset == "shiftboard"
        assert events[0]["event"] == "shifts.batch_created"
        assert events[0]["shift_ids"] == [str(shift_id)]
        assert events[0]["day"] == "2025-04-01"

    def test_ingest_failure_swallowed(self, monkeypatch):
        """전송 실패는 호출자에 영향 없음."""
        monkeypatch.setattr(event_logger, "_client", FakeAxiom(fail=True))
        event_logger.log_event("attendance.clock_out")


class TestStoreFailure:
    """저장소 오류 → 503."""

    async def test_database_error_is_503(self, client: AsyncClient, admin_token, monkeypatch):
        async def broken(db):
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))

        monkeypatch.setattr(event_service, "get_all_events", broken)
        res = await client.get("/api/v1/admin/events", headers=auth_header(admin_token))
        assert res.status_code == 503
        assert res.json()["detail"] == "Storage operation failed"

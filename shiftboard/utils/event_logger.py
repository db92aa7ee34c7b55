"""도메인 이벤트 로거 — Axiom으로 구조화 로그 전송.

Domain event logger — Ships structured business events (clock-in/out,
breaks, batch shift creation, shift generation) to the same Axiom dataset
used by the request logging middleware. No-op when Axiom is not configured.
"""

from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from axiom_py import Client as AxiomClient

from shiftboard.config import settings

_client: AxiomClient | None = None


def get_axiom_client() -> AxiomClient | None:
    """Axiom 클라이언트를 지연 생성합니다 (Lazily build the shared Axiom client)."""
    global _client
    if _client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
        _client = AxiomClient(token=settings.AXIOM_API_TOKEN)
    return _client


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def log_event(event: str, **fields: Any) -> None:
    """도메인 이벤트를 기록합니다.

    Record a domain event. Failures to ship the log never affect the caller.

    Args:
        event: 이벤트 이름 (Event name, e.g. "attendance.clock_in")
        **fields: 이벤트 속성 (Event attributes)
    """
    client: AxiomClient | None = get_axiom_client()
    if client is None:
        return

    payload: dict[str, Any] = {
        "kind": "domain_event",
        "event": event,
        "logged_at": datetime.now(timezone.utc).isoformat(),
        **{k: _jsonable(v) for k, v in fields.items()},
    }
    try:
        client.ingest_events(settings.AXIOM_DATASET, [payload])
    except Exception:
        pass  # 로깅 실패가 업무 처리에 영향주지 않도록 — Never break an operation on log failure

"""시프트 자동 생성 서비스 — 제약 패키지 구성과 외부 생성기 호출.

Shift Generation Service — Assembles a self-contained constraint package for
a date range and delegates the actual assignment to an external generation
capability (a black box returning candidate shifts). The raw output is
validated before it is mapped to unsaved planned shifts.

Generated assignments are not checked against the constraints they were
generated from (unavailable dates, relationship constraints, skill needs).
"""

import json
from datetime import date
from typing import Any, Protocol, Sequence
from uuid import UUID

import httpx
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.config import settings
from shiftboard.models.event import Event
from shiftboard.models.shift import Shift, ShiftPreference
from shiftboard.models.store import Store
from shiftboard.models.user import User, default_skills
from shiftboard.repositories.store_repository import store_repository
from shiftboard.repositories.user_repository import user_repository
from shiftboard.schemas.generation import (
    ConstraintPackage,
    GenerationOptions,
    GenerationResult,
    RelationshipConstraint,
)
from shiftboard.schemas.shift import ShiftCreate
from shiftboard.services.event_service import event_service
from shiftboard.services.shift_preference_service import shift_preference_service
from shiftboard.services.shift_service import shift_service
from shiftboard.services.store_service import requirement_to_dict
from shiftboard.utils.date_utils import format_date
from shiftboard.utils.event_logger import log_event
from shiftboard.utils.exceptions import InvalidGenerationResultError

GENERATION_PROMPT: str = """You are a shift scheduling assistant. Build a shift plan for {start} to {end}
from the JSON data in the user message.

Respect these constraints, in priority order:
1. Never schedule two employees listed together in relationship_constraints in the same shift slot.
2. Meet each store's skill requirements for the day-category (weekday, saturday, sunday, holiday).
3. Respect each employee's desired number of work days as far as possible.
4. Distribute shifts evenly so no employee carries a disproportionate load.
5. Respect preferred weekdays as far as possible.
6. Never schedule an employee on one of their unavailable dates.

Options:
- prioritize employee preferences: {prioritize}
- distribute shifts evenly: {distribute}
- consider skill requirements: {skills}

Answer with a JSON object of the form
{{"shifts": [{{"user_id": "...", "store_id": "...", "date": "YYYY-MM-DD", "start_time": "HH:MM", "end_time": "HH:MM"}}]}}.
"""


class RelationshipConstraintProvider(Protocol):
    """직원 간 관계 제약 공급자 (Source of employee pairs that must not share a shift)."""

    async def get_constraints(self, db: AsyncSession) -> list[RelationshipConstraint]:
        ...


class EmptyRelationshipConstraintProvider:
    """관계 제약 미수집 — 항상 빈 목록 (No constraint source yet; always empty)."""

    async def get_constraints(self, db: AsyncSession) -> list[RelationshipConstraint]:
        return []


class ShiftGenerator(Protocol):
    """외부 시프트 생성기 (Takes a constraint package, returns raw generator output)."""

    async def generate(self, package: dict[str, Any]) -> Any:
        ...


class HttpShiftGenerator:
    """Chat-completions 형식 HTTP API 기반 생성기.

    Shift generator backed by a chat-completions style HTTP API. The model is
    asked for a JSON object; its message content is parsed and returned as-is.
    Transport, HTTP status and JSON decoding failures all surface as
    InvalidGenerationResultError.

    Attributes:
        url: API 엔드포인트 (Endpoint URL)
        api_key: API 키 (Bearer API key)
        model: 모델 이름 (Model name)
        timeout: 요청 제한 시간(초) (Request timeout in seconds)
    """

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url: str = url or settings.GENERATOR_API_URL
        self.api_key: str = settings.GENERATOR_API_KEY if api_key is None else api_key
        self.model: str = model or settings.GENERATOR_MODEL
        self.timeout: float = timeout or settings.GENERATOR_TIMEOUT_SECONDS
        self.transport: httpx.AsyncBaseTransport | None = transport

    def build_request(self, package: dict[str, Any]) -> dict[str, Any]:
        options: dict[str, Any] = package.get("options", {})
        period: dict[str, str] = package.get("period", {})
        prompt: str = GENERATION_PROMPT.format(
            start=period.get("start_date", ""),
            end=period.get("end_date", ""),
            prioritize="on" if options.get("prioritize_employee_preferences") else "default",
            distribute="on" if options.get("distribute_shifts_evenly") else "default",
            skills="on" if options.get("consider_skill_requirements") else "default",
        )
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": prompt},
                {"role": "user", "content": json.dumps(package, ensure_ascii=False)},
            ],
            "response_format": {"type": "json_object"},
        }

    async def generate(self, package: dict[str, Any]) -> Any:
        headers: dict[str, str] = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response: httpx.Response = await client.post(self.url, json=self.build_request(package), headers=headers)
                response.raise_for_status()
            content: str = response.json()["choices"][0]["message"]["content"] or "{}"
            return json.loads(content)
        except httpx.HTTPError as exc:
            raise InvalidGenerationResultError(f"Shift generator request failed: {exc}") from exc
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise InvalidGenerationResultError() from exc


class ShiftGenerationService:
    """시프트 자동 생성 서비스.

    Service assembling constraint packages and running the shift generator.

    Attributes:
        generator: 외부 시프트 생성기 (External shift generation capability)
        relationship_provider: 관계 제약 공급자 (Relationship constraint source)
    """

    def __init__(
        self,
        generator: ShiftGenerator | None = None,
        relationship_provider: RelationshipConstraintProvider | None = None,
    ) -> None:
        self.generator: ShiftGenerator = generator or HttpShiftGenerator()
        self.relationship_provider: RelationshipConstraintProvider = (
            relationship_provider or EmptyRelationshipConstraintProvider()
        )

    async def build_constraint_package(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
        options: GenerationOptions | None = None,
    ) -> ConstraintPackage:
        """제약 패키지를 구성합니다.

        Gather everything the generator needs for [start_date, end_date]:
        the employee and store rosters, preferences for the start date's
        month, overlapping events, relationship constraints and the options.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            start_date: 시작일, 포함 (Inclusive start date)
            end_date: 종료일, 포함 (Inclusive end date)
            options: 생성 옵션 (Generation options)

        Returns:
            ConstraintPackage: 제약 패키지 (Self-contained constraint package)
        """
        employees: Sequence[User] = await user_repository.get_ordered(db)
        stores: Sequence[Store] = await store_repository.get_ordered(db)
        # 시작일이 속한 월의 희망만 사용 — Only the start date's month is consulted
        preferences: Sequence[ShiftPreference] = await shift_preference_service.get_all_preferences_for_month(
            db, start_date.year, start_date.month
        )
        events: Sequence[Event] = await event_service.get_events_by_date_range(db, start_date, end_date)
        constraints: list[RelationshipConstraint] = await self.relationship_provider.get_constraints(db)

        return ConstraintPackage(
            period={"start_date": format_date(start_date), "end_date": format_date(end_date)},
            employees=[
                {
                    "id": str(u.id),
                    "name": u.name,
                    "skills": {**default_skills(), **(u.skills or {})},
                    "desired_work_days": u.desired_work_days,
                }
                for u in employees
            ],
            stores=[
                {
                    "id": str(s.id),
                    "name": s.name,
                    "skill_requirements": [requirement_to_dict(r) for r in s.skill_requirements],
                }
                for s in stores
            ],
            preferences=[
                {
                    "user_id": str(p.user_id),
                    "desired_days_per_week": p.desired_days_per_week,
                    "preferred_weekdays": list(p.preferred_weekdays or []),
                    "unavailable_dates": list(p.unavailable_dates or []),
                }
                for p in preferences
            ],
            events=[
                {
                    "name": e.name,
                    "start_date": format_date(e.start_date),
                    "end_date": format_date(e.end_date),
                    "affected_stores": list(e.affected_stores or []),
                    "customer_prediction": e.customer_prediction,
                }
                for e in events
            ],
            relationship_constraints=constraints,
            options=options or GenerationOptions(),
        )

    def parse_result(self, raw: Any) -> list[Shift]:
        """생성기 출력을 검증하고 미저장 시프트로 변환합니다.

        Validate raw generator output against {"shifts": [...]} and map each
        entry to an unsaved Shift with status "planned" and no id.

        Raises:
            InvalidGenerationResultError: 형식이 맞지 않을 때 (Malformed output)
        """
        try:
            result: GenerationResult = GenerationResult.model_validate(raw)
        except ValidationError as exc:
            raise InvalidGenerationResultError() from exc

        return [
            Shift(
                user_id=s.user_id,
                store_id=s.store_id,
                date=s.date,
                start_time=s.start_time,
                end_time=s.end_time,
                status="planned",
            )
            for s in result.shifts
        ]

    async def generate_shifts(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
        options: GenerationOptions | None = None,
    ) -> list[Shift]:
        """시프트를 생성합니다 (저장하지 않음).

        Build the constraint package, call the generator and return the
        candidate shifts without persisting them.

        Raises:
            InvalidGenerationResultError: 생성기 응답 오류 (Generator failure or malformed output)
        """
        package: ConstraintPackage = await self.build_constraint_package(db, start_date, end_date, options)
        raw: Any = await self.generator.generate(package.model_dump(mode="json"))
        shifts: list[Shift] = self.parse_result(raw)

        log_event(
            "shifts.generated",
            start_date=start_date,
            end_date=end_date,
            employee_count=len(package.employees),
            store_count=len(package.stores),
            shift_count=len(shifts),
        )
        return shifts

    async def generate_and_save(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
        options: GenerationOptions | None = None,
    ) -> list[UUID]:
        """시프트를 생성하고 일괄 저장합니다 (Generate, then persist all shifts in one batch)."""
        shifts: list[Shift] = await self.generate_shifts(db, start_date, end_date, options)
        return await self.save_generated(db, shifts)

    async def save_generated(self, db: AsyncSession, shifts: list[Shift]) -> list[UUID]:
        """생성된 시프트를 일괄 저장하고 각 시프트에 ID를 채웁니다.

        Persist generated shifts all-or-nothing and stamp each one with its
        new id, in input order.
        """
        specs: list[ShiftCreate] = [
            ShiftCreate(
                user_id=s.user_id,
                store_id=s.store_id,
                date=s.date,
                start_time=s.start_time,
                end_time=s.end_time,
            )
            for s in shifts
        ]
        ids: list[UUID] = await shift_service.create_shifts_in_batch(db, specs)
        for shift, shift_id in zip(shifts, ids):
            shift.id = shift_id
        return ids


# 싱글턴 인스턴스 — Singleton instance
shift_generation_service: ShiftGenerationService = ShiftGenerationService()

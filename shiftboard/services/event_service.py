"""이벤트 및 계절 정보 서비스.

Event and Seasonal Info Service — Local events (demand signals for
scheduling) and seasonal viewing information (sakura, azalea, other) shown
on the dashboard. Event date ranges and best-viewing periods are inclusive.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.config import settings
from shiftboard.models.event import Event, SeasonalInfo
from shiftboard.repositories.event_repository import event_repository, seasonal_info_repository
from shiftboard.schemas.event import (
    EventCreate,
    EventResponse,
    EventUpdate,
    SeasonalArea,
    SeasonalInfoCreate,
    SeasonalInfoResponse,
    SeasonalInfoUpdate,
)
from shiftboard.utils.date_utils import local_today
from shiftboard.utils.exceptions import BadRequestError, NotFoundError


def _areas_to_json(areas: list[SeasonalArea]) -> list[dict[str, Any]]:
    return [area.model_dump(mode="json") for area in areas]


def _viewing_period(area: dict[str, Any]) -> tuple[date, date] | None:
    period: dict[str, Any] | None = area.get("best_viewing_period")
    if not period:
        return None
    return date.fromisoformat(period["start"]), date.fromisoformat(period["end"])


class EventService:
    """이벤트 및 계절 정보 비즈니스 로직을 처리하는 서비스.

    Service handling event and seasonal information business logic.
    """

    # === 이벤트 (Events) ===

    def event_to_response(self, event: Event) -> EventResponse:
        return EventResponse(
            id=str(event.id),
            name=event.name,
            start_date=event.start_date,
            end_date=event.end_date,
            affected_stores=list(event.affected_stores or []),
            customer_prediction=event.customer_prediction,
        )

    async def get_event(self, db: AsyncSession, event_id: UUID) -> Event:
        """이벤트 단건을 조회합니다.

        Raises:
            NotFoundError: 이벤트가 없을 때 (Event not found)
        """
        event: Event | None = await event_repository.get_by_id(db, event_id)
        if event is None:
            raise NotFoundError("이벤트를 찾을 수 없습니다 (Event not found)")
        return event

    async def get_all_events(self, db: AsyncSession) -> Sequence[Event]:
        return await event_repository.get_all(db, order_by=[Event.start_date, Event.created_at])

    async def get_events_by_date_range(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
    ) -> Sequence[Event]:
        """기간과 겹치는 이벤트 (Events overlapping [start_date, end_date], by start date)."""
        return await event_repository.get_overlapping(db, start_date, end_date)

    async def get_events_by_store(self, db: AsyncSession, store_id: UUID) -> list[Event]:
        """매장에 영향을 주는 이벤트 (Events listing the store among affected stores)."""
        key: str = str(store_id)
        events: Sequence[Event] = await self.get_all_events(db)
        return [e for e in events if key in (e.affected_stores or [])]

    async def save_event(self, db: AsyncSession, data: EventCreate) -> Event:
        return await event_repository.create(db, data.model_dump())

    async def update_event(self, db: AsyncSession, event_id: UUID, data: EventUpdate) -> Event:
        """이벤트를 부분 수정합니다 (Partially update an event).

        Raises:
            NotFoundError: 이벤트가 없을 때 (Event not found)
            BadRequestError: 종료일이 시작일보다 이를 때 (End before start)
        """
        event: Event = await self.get_event(db, event_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        start: date = update_data.get("start_date") or event.start_date
        end: date = update_data.get("end_date") or event.end_date
        if end < start:
            raise BadRequestError("종료일이 시작일보다 빠릅니다 (end_date must not be before start_date)")

        return await event_repository.update(db, event_id, update_data)

    async def delete_event(self, db: AsyncSession, event_id: UUID) -> None:
        if not await event_repository.delete(db, event_id):
            raise NotFoundError("이벤트를 찾을 수 없습니다 (Event not found)")

    async def get_upcoming_events(
        self,
        db: AsyncSession,
        days: int | None = None,
        today: date | None = None,
    ) -> Sequence[Event]:
        """다가오는 이벤트를 조회합니다.

        Events overlapping [today, today + days], sorted by start date with
        ties kept in stored order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            days: 조회 기간(일), 기본값은 설정값 (Window in days, defaults to UPCOMING_EVENT_DAYS)
            today: 기준일, 기본값은 오늘 (Reference date, defaults to today)

        Returns:
            Sequence[Event]: 이벤트 목록 (Upcoming events)
        """
        start: date = today or local_today()
        window: int = settings.UPCOMING_EVENT_DAYS if days is None else days
        return await event_repository.get_overlapping(db, start, start + timedelta(days=window))

    # === 계절 정보 (Seasonal info) ===

    def seasonal_to_response(self, info: SeasonalInfo) -> SeasonalInfoResponse:
        return SeasonalInfoResponse(
            id=str(info.id),
            name=info.name,
            type=info.type,
            progress=info.progress,
            areas=[SeasonalArea(**a) for a in info.areas or []],
            last_updated=info.last_updated,
        )

    async def get_seasonal_info(self, db: AsyncSession, info_id: UUID) -> SeasonalInfo:
        """계절 정보 단건을 조회합니다.

        Raises:
            NotFoundError: 계절 정보가 없을 때 (Seasonal info not found)
        """
        info: SeasonalInfo | None = await seasonal_info_repository.get_by_id(db, info_id)
        if info is None:
            raise NotFoundError("계절 정보를 찾을 수 없습니다 (Seasonal info not found)")
        return info

    async def get_latest_seasonal_info_by_type(self, db: AsyncSession, info_type: str) -> SeasonalInfo | None:
        return await seasonal_info_repository.get_latest_by_type(db, info_type)

    async def get_all_seasonal_infos(self, db: AsyncSession) -> Sequence[SeasonalInfo]:
        return await seasonal_info_repository.get_all(db, order_by=SeasonalInfo.last_updated.desc())

    async def save_seasonal_info(
        self,
        db: AsyncSession,
        data: SeasonalInfoCreate,
        info_id: UUID | None = None,
    ) -> SeasonalInfo:
        """계절 정보를 생성하거나 ID 기준으로 교체합니다.

        Create seasonal info, or replace the record with `info_id` when it
        exists. last_updated is refreshed on every save.
        """
        values: dict[str, Any] = {
            "name": data.name,
            "type": data.type,
            "progress": data.progress,
            "areas": _areas_to_json(data.areas),
            "last_updated": datetime.now(timezone.utc),
        }
        if info_id is not None:
            existing: SeasonalInfo | None = await seasonal_info_repository.update(db, info_id, values)
            if existing is not None:
                return existing
            values["id"] = info_id
        return await seasonal_info_repository.create(db, values)

    async def update_seasonal_info(
        self,
        db: AsyncSession,
        info_id: UUID,
        data: SeasonalInfoUpdate,
    ) -> SeasonalInfo:
        """계절 정보를 부분 수정합니다 (Partial update; last_updated is refreshed).

        Raises:
            NotFoundError: 계절 정보가 없을 때 (Seasonal info not found)
        """
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True, mode="json")
        update_data["last_updated"] = datetime.now(timezone.utc)

        info: SeasonalInfo | None = await seasonal_info_repository.update(db, info_id, update_data)
        if info is None:
            raise NotFoundError("계절 정보를 찾을 수 없습니다 (Seasonal info not found)")
        return info

    async def delete_seasonal_info(self, db: AsyncSession, info_id: UUID) -> None:
        if not await seasonal_info_repository.delete(db, info_id):
            raise NotFoundError("계절 정보를 찾을 수 없습니다 (Seasonal info not found)")

    async def update_seasonal_info_from_external_source(
        self,
        db: AsyncSession,
        info_type: str,
        name: str,
        progress: float,
        areas: list[SeasonalArea],
    ) -> SeasonalInfo:
        """외부 소스 정보로 유형별 최신 계절 정보를 갱신합니다.

        Overwrite the latest record of `info_type` with externally sourced
        data, or create one when none exists yet.
        """
        existing: SeasonalInfo | None = await seasonal_info_repository.get_latest_by_type(db, info_type)
        data = SeasonalInfoCreate(name=name, type=info_type, progress=progress, areas=areas)
        return await self.save_seasonal_info(db, data, existing.id if existing is not None else None)

    async def get_areas_in_best_viewing_period(
        self,
        db: AsyncSession,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """오늘이 최적 관람 기간인 지역을 찾습니다.

        Find areas whose best-viewing period contains `today` (both bounds
        inclusive). Areas without a period are skipped.

        Returns:
            list[dict]: [{info_id, info_name, type, area}]
        """
        day: date = today or local_today()
        found: list[dict[str, Any]] = []
        for info in await self.get_all_seasonal_infos(db):
            for area in info.areas or []:
                period: tuple[date, date] | None = _viewing_period(area)
                if period is not None and period[0] <= day <= period[1]:
                    found.append({
                        "info_id": str(info.id),
                        "info_name": info.name,
                        "type": info.type,
                        "area": area,
                    })
        return found


# 싱글턴 인스턴스 — Singleton instance
event_service: EventService = EventService()

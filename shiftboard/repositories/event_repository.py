"""이벤트 및 계절 정보 레포지토리.

Event and Seasonal Info Repositories — Overlap-range queries for events and
latest-by-type lookup for seasonal information.
"""

from datetime import date
from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.event import Event, SeasonalInfo
from shiftboard.repositories.base import BaseRepository


class EventRepository(BaseRepository[Event]):
    """이벤트 테이블 레포지토리 (Repository for the events table)."""

    def __init__(self) -> None:
        super().__init__(Event)

    async def get_overlapping(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
    ) -> Sequence[Event]:
        """기간과 겹치는 이벤트를 시작일순으로 조회합니다.

        Retrieve events whose inclusive range overlaps [start_date, end_date]:
        event.start_date <= end_date and event.end_date >= start_date.
        Ties on start date keep insertion order.

        Returns:
            Sequence[Event]: 이벤트 목록 (List of events)
        """
        query: Select = (
            select(Event)
            .where(Event.start_date <= end_date)
            .where(Event.end_date >= start_date)
            .order_by(Event.start_date, Event.created_at)
        )
        result = await db.execute(query)
        return result.scalars().all()


class SeasonalInfoRepository(BaseRepository[SeasonalInfo]):
    """계절 정보 테이블 레포지토리 (Repository for the seasonal_infos table)."""

    def __init__(self) -> None:
        super().__init__(SeasonalInfo)

    async def get_latest_by_type(
        self,
        db: AsyncSession,
        info_type: str,
    ) -> SeasonalInfo | None:
        """유형별 최신 계절 정보 (Most recently updated record of a type, or None)."""
        query: Select = (
            select(SeasonalInfo)
            .where(SeasonalInfo.type == info_type)
            .order_by(SeasonalInfo.last_updated.desc())
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instances
event_repository: EventRepository = EventRepository()
seasonal_info_repository: SeasonalInfoRepository = SeasonalInfoRepository()

"""대시보드 서비스 — 대시보드 집계 비즈니스 로직.

Dashboard Service — Aggregation logic for the admin dashboard.
Composes the event, attendance and shift services: upcoming events,
seasonal highlights, attendance overview and shift overview. Empty
populations yield zero-valued aggregates, never errors.
"""

from datetime import date, timedelta
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.config import settings
from shiftboard.models.event import Event, SeasonalInfo
from shiftboard.models.store import Store
from shiftboard.repositories.store_repository import store_repository
from shiftboard.services.attendance_service import attendance_service
from shiftboard.services.event_service import event_service
from shiftboard.services.shift_service import shift_service
from shiftboard.utils.date_utils import local_today, round_half_up

# 하이라이트 대상 유형과 순서 — Seasonal types highlighted, in display order
SEASONAL_TYPES: tuple[str, ...] = ("sakura", "azalea", "other")
HIGHLIGHT_AREA_COUNT: int = 3


class DashboardService:
    """대시보드 서비스.

    Dashboard aggregation service for admin dashboard views.
    """

    async def get_dashboard_summary(
        self,
        db: AsyncSession,
        today: date | None = None,
    ) -> dict:
        """대시보드 요약 — 다가오는 이벤트와 계절 하이라이트.

        Upcoming events in the next UPCOMING_EVENT_DAYS days and, for each of
        sakura/azalea/other, the latest record with its first three areas.
        Types with no record are omitted.

        Returns:
            dict: {upcoming_events, seasonal_highlights}
        """
        events: Sequence[Event] = await event_service.get_upcoming_events(
            db, days=settings.UPCOMING_EVENT_DAYS, today=today
        )

        highlights: list[dict[str, Any]] = []
        for info_type in SEASONAL_TYPES:
            info: SeasonalInfo | None = await event_service.get_latest_seasonal_info_by_type(db, info_type)
            if info is None:
                continue
            highlights.append({
                "type": info.type,
                "name": info.name,
                "progress": info.progress,
                "areas": [
                    {"name": a.get("name", ""), "status": a.get("status", "")}
                    for a in (info.areas or [])[:HIGHLIGHT_AREA_COUNT]
                ],
                "last_updated": info.last_updated,
            })

        return {
            "upcoming_events": [event_service.event_to_response(e) for e in events],
            "seasonal_highlights": highlights,
        }

    async def get_attendance_overview(
        self,
        db: AsyncSession,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict:
        """근태 개요 — 매장별 근태 통계와 전체 합계.

        Per-store attendance statistics over the range plus overall totals.
        Defaults to the last seven days.

        Returns:
            dict: {date_from, date_to, total_attendances, late_count, early_count,
                   total_hours, average_hours_per_attendance, stores: [...]}
        """
        if date_to is None:
            date_to = local_today()
        if date_from is None:
            date_from = date_to - timedelta(days=7)

        stores: Sequence[Store] = await store_repository.get_ordered(db)
        per_store: list[dict[str, Any]] = []
        total: int = 0
        late: int = 0
        early: int = 0
        hours: float = 0
        for store in stores:
            stats: dict = await attendance_service.get_store_attendance_stats(db, store.id, date_from, date_to)
            per_store.append({"store_id": str(store.id), "store_name": store.name, **stats})
            total += stats["total_attendances"]
            late += stats["late_count"]
            early += stats["early_count"]
            hours += stats["total_hours"]

        return {
            "date_from": date_from,
            "date_to": date_to,
            "total_attendances": total,
            "late_count": late,
            "early_count": early,
            "total_hours": round_half_up(hours, 2),
            "average_hours_per_attendance": round_half_up(hours / total, 2) if total else 0,
            "stores": per_store,
        }

    async def get_shift_overview(
        self,
        db: AsyncSession,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict:
        """시프트 개요 — 기간 시프트 통계와 겹치는 이벤트.

        Shift statistics over the range together with the events that overlap
        it. Defaults to the next seven days.

        Returns:
            dict: {date_from, date_to, total_shifts, shifts_per_store, shifts_per_day, events}
        """
        if date_from is None:
            date_from = local_today()
        if date_to is None:
            date_to = date_from + timedelta(days=7)

        stats: dict = await shift_service.get_shift_statistics(db, date_from, date_to)
        events: Sequence[Event] = await event_service.get_events_by_date_range(db, date_from, date_to)
        return {
            "date_from": date_from,
            "date_to": date_to,
            **stats,
            "events": [event_service.event_to_response(e) for e in events],
        }


# 싱글턴 인스턴스 — Singleton instance
dashboard_service: DashboardService = DashboardService()

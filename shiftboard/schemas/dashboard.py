"""대시보드 Pydantic 스키마.

Dashboard response schemas.
"""

from datetime import date, datetime

from pydantic import BaseModel

from shiftboard.schemas.event import EventResponse


class AreaHighlight(BaseModel):
    name: str
    status: str


class SeasonalHighlight(BaseModel):
    """유형별 최신 계절 정보 요약 (Latest seasonal record of one type, first three areas)."""

    type: str
    name: str
    progress: float
    areas: list[AreaHighlight]
    last_updated: datetime


class DashboardSummary(BaseModel):
    upcoming_events: list[EventResponse]
    seasonal_highlights: list[SeasonalHighlight]


class StoreAttendanceOverview(BaseModel):
    store_id: str
    store_name: str
    total_attendances: int
    late_count: int
    early_count: int
    total_hours: float
    average_hours_per_attendance: float


class AttendanceOverview(BaseModel):
    """기간 근태 개요 — 매장별 통계와 합계 (Per-store attendance stats plus totals)."""

    date_from: date
    date_to: date
    total_attendances: int
    late_count: int
    early_count: int
    total_hours: float
    average_hours_per_attendance: float
    stores: list[StoreAttendanceOverview]


class ShiftOverview(BaseModel):
    """기간 시프트 개요 — 시프트 통계와 겹치는 이벤트 (Shift stats plus overlapping events)."""

    date_from: date
    date_to: date
    total_shifts: int
    shifts_per_store: dict[str, int]
    shifts_per_day: dict[str, int]
    events: list[EventResponse]

"""근태 Pydantic 스키마.

Attendance request/response schemas.
Clock and break instants are business-local wall-clock datetimes; aware
datetimes in requests are converted on entry.
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel


class ClockInRequest(BaseModel):
    """출근 요청 스키마.

    Clock-in request. `time` defaults to now and is mainly for admin back-filling.

    Attributes:
        store_id: 매장 UUID (Store identifier)
        time: 출근 시각, 선택 (Optional clock-in instant)
    """

    store_id: UUID
    time: datetime | None = None


class AdminClockInRequest(ClockInRequest):
    user_id: UUID


class ClockActionRequest(BaseModel):
    """휴식/퇴근 요청 스키마 (Break start/end and clock-out; `time` defaults to now)."""

    time: datetime | None = None


class BreakPeriod(BaseModel):
    start_time: datetime
    end_time: datetime | None = None


class AttendanceResponse(BaseModel):
    """근태 응답 스키마.

    Attendance response with the derived state.

    Attributes:
        state: 파생 상태 (clocked_in | on_break | clocked_out)
        has_active_break: 진행 중 휴식 여부 (Whether an open break exists)
    """

    id: str
    user_id: UUID
    store_id: UUID
    date: date
    clock_in_time: datetime
    clock_out_time: datetime | None
    break_times: list[BreakPeriod]
    total_work_hours: float | None
    status: Literal["normal", "late", "early"]
    state: Literal["clocked_in", "on_break", "clocked_out"]
    has_active_break: bool


class MonthlyAttendanceStats(BaseModel):
    """직원 월간 근태 통계 (Per-employee monthly attendance statistics)."""

    total_days: int
    total_hours: float
    late_count: int
    early_count: int
    average_hours_per_day: float


class StoreAttendanceStats(BaseModel):
    """매장 기간 근태 통계 (Per-store attendance statistics over a date range)."""

    total_attendances: int
    late_count: int
    early_count: int
    total_hours: float
    average_hours_per_attendance: float

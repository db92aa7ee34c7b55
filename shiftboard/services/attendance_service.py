"""근태 관리 서비스 — 출퇴근/휴식 상태 머신과 근태 통계.

Attendance Service — Clock-in/out and break state machine plus attendance
statistics. One attendance record per employee per calendar day.

State flow (derived from the record):
    (none) --clock_in--> clocked_in --start_break--> on_break
    on_break --end_break--> clocked_in
    clocked_in | on_break --clock_out--> clocked_out (terminal)

"Now" comes from an injectable clock and expected working hours from an
injectable ExpectedWindowPolicy, so both can be replaced per store or in tests.
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from typing import Any, Protocol, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.config import settings
from shiftboard.models.attendance import Attendance
from shiftboard.repositories.attendance_repository import attendance_repository
from shiftboard.repositories.store_repository import store_repository
from shiftboard.repositories.user_repository import user_repository
from shiftboard.utils.date_utils import (
    MS_PER_HOUR,
    get_month_date_range,
    local_now,
    round_half_up,
    to_local,
)
from shiftboard.utils.event_logger import log_event
from shiftboard.utils.exceptions import (
    AlreadyClockedInError,
    AlreadyClockedOutError,
    BreakAlreadyActiveError,
    NoActiveBreakError,
    NotFoundError,
)


class ExpectedWindowPolicy(Protocol):
    """예정 근무 시간 정책 (Expected working window for a clock-in instant)."""

    def expected_window(self, clock_in: datetime) -> tuple[int, int]:
        """(예정 시작 시, 예정 종료 시)를 반환합니다 (Return (start_hour, end_hour))."""
        ...


class NoonSplitPolicy:
    """정오 기준 정책 — 오전 출근은 9~17시, 오후 출근은 13~21시.

    Morning clock-ins (hour < 12) expect 09:00–17:00, afternoon ones 13:00–21:00.
    """

    def expected_window(self, clock_in: datetime) -> tuple[int, int]:
        if clock_in.hour < 12:
            return 9, 17
        return 13, 21


def _parse_instant(value: str | datetime | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def has_active_break(breaks: Iterable[Mapping[str, Any]]) -> bool:
    """종료되지 않은 휴식이 있는지 확인합니다 (Whether any break has no end time)."""
    return any(b.get("end_time") is None for b in breaks)


def calculate_total_work_hours(
    clock_in: datetime,
    clock_out: datetime,
    breaks: Iterable[Mapping[str, Any]],
) -> float:
    """총 근무 시간을 계산합니다.

    Compute (clock_out − clock_in − Σ completed breaks) in hours, rounded
    half-up to two decimals. Breaks without an end are ignored and break
    order does not matter.

    Args:
        clock_in: 출근 시각 (Clock-in instant)
        clock_out: 퇴근 시각 (Clock-out instant)
        breaks: 휴식 목록, 시작/종료는 datetime 또는 ISO 문자열
                (Breaks with datetime or ISO-string start_time/end_time)

    Returns:
        float: 근무 시간 (Worked hours)

    Example:
        08:55 → 17:05 with a 12:00–12:30 break  # 7.67
    """
    total_ms: float = (clock_out - clock_in).total_seconds() * 1000
    for period in breaks:
        start: datetime | None = _parse_instant(period.get("start_time"))
        end: datetime | None = _parse_instant(period.get("end_time"))
        if start is not None and end is not None:
            total_ms -= (end - start).total_seconds() * 1000
    return round_half_up(total_ms / MS_PER_HOUR, 2)


def derive_state(attendance: Attendance) -> str:
    """근태 기록의 현재 상태 (clocked_in | on_break | clocked_out)."""
    if attendance.clock_out_time is not None:
        return "clocked_out"
    if has_active_break(attendance.break_times or []):
        return "on_break"
    return "clocked_in"


class AttendanceService:
    """근태 관리 서비스.

    Attendance service handling clock-in, breaks, clock-out, lookups and
    statistics.

    Attributes:
        clock: 현재 시각 함수 (Returns the current business-local wall-clock time)
        policy: 예정 근무 시간 정책 (Expected working window policy)
        grace_minutes: 지각 유예 시간(분) (Minutes past the expected hour before "late")
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = local_now,
        policy: ExpectedWindowPolicy | None = None,
        grace_minutes: int | None = None,
    ) -> None:
        self.clock: Callable[[], datetime] = clock
        self.policy: ExpectedWindowPolicy = policy or NoonSplitPolicy()
        self.grace_minutes: int = settings.LATE_GRACE_MINUTES if grace_minutes is None else grace_minutes

    def _resolve_time(self, time: datetime | None) -> datetime:
        return self.clock() if time is None else to_local(time)

    def _is_late(self, clock_in: datetime) -> bool:
        expected_start, _ = self.policy.expected_window(clock_in)
        if clock_in.hour > expected_start:
            return True
        return clock_in.hour == expected_start and clock_in.minute > self.grace_minutes

    def _is_early(self, clock_in: datetime, clock_out: datetime) -> bool:
        # 예정 종료 시각은 출근 시각 기준으로 결정 — Expected end is keyed off the clock-in
        _, expected_end = self.policy.expected_window(clock_in)
        return clock_out.hour < expected_end

    # === 상태 전이 (State transitions) ===

    async def clock_in(
        self,
        db: AsyncSession,
        user_id: UUID,
        store_id: UUID,
        time: datetime | None = None,
    ) -> Attendance:
        """출근을 기록합니다.

        Create the attendance record for the employee's calendar day.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 직원 UUID (Employee UUID)
            store_id: 매장 UUID (Store UUID)
            time: 출근 시각, 기본값은 현재 (Clock-in instant, defaults to now)

        Returns:
            Attendance: 생성된 근태 기록 (Created attendance record)

        Raises:
            NotFoundError: 직원 또는 매장이 없을 때 (Unknown employee or store)
            AlreadyClockedInError: 같은 날짜에 기록이 이미 있을 때
                                   (A record already exists for that day)
        """
        if await user_repository.get_by_id(db, user_id) is None:
            raise NotFoundError("직원을 찾을 수 없습니다 (Employee not found)")
        if await store_repository.get_by_id(db, store_id) is None:
            raise NotFoundError("매장을 찾을 수 없습니다 (Store not found)")

        now: datetime = self._resolve_time(time)
        work_date: date = now.date()

        existing: Attendance | None = await attendance_repository.get_user_on_date(db, user_id, work_date)
        if existing is not None:
            raise AlreadyClockedInError()

        try:
            attendance: Attendance = await attendance_repository.create(
                db,
                {
                    "user_id": user_id,
                    "store_id": store_id,
                    "date": work_date,
                    "clock_in_time": now,
                    "break_times": [],
                    "status": "late" if self._is_late(now) else "normal",
                },
            )
        except IntegrityError as exc:
            # 동시 출근 요청 — A concurrent clock-in won the unique constraint
            await db.rollback()
            raise AlreadyClockedInError() from exc

        log_event(
            "attendance.clock_in",
            attendance_id=attendance.id,
            user_id=user_id,
            store_id=store_id,
            clock_in_time=now,
            status=attendance.status,
        )
        return attendance

    async def start_break(
        self,
        db: AsyncSession,
        attendance_id: UUID,
        time: datetime | None = None,
    ) -> Attendance:
        """휴식을 시작합니다.

        Append an open break to the record.

        Raises:
            NotFoundError: 근태 기록이 없을 때 (Attendance not found)
            AlreadyClockedOutError: 이미 퇴근한 경우 (Already clocked out)
            BreakAlreadyActiveError: 진행 중인 휴식이 있을 때 (An open break exists)
        """
        attendance: Attendance = await self.get_attendance(db, attendance_id)
        if attendance.clock_out_time is not None:
            raise AlreadyClockedOutError()

        breaks: list[dict[str, Any]] = list(attendance.break_times or [])
        if has_active_break(breaks):
            raise BreakAlreadyActiveError()

        now: datetime = self._resolve_time(time)
        breaks.append({"start_time": now.isoformat(), "end_time": None})
        # JSON 컬럼은 새 리스트를 대입해야 변경이 감지됨 — Reassign so the JSON change is tracked
        attendance.break_times = breaks
        await db.flush()
        await db.refresh(attendance)

        log_event("attendance.break_start", attendance_id=attendance.id, user_id=attendance.user_id, time=now)
        return attendance

    async def end_break(
        self,
        db: AsyncSession,
        attendance_id: UUID,
        time: datetime | None = None,
    ) -> Attendance:
        """진행 중인 휴식을 종료합니다.

        Close the open break. After clock-out no break can be open, so the
        call reports NoActiveBreakError.

        Raises:
            NotFoundError: 근태 기록이 없을 때 (Attendance not found)
            NoActiveBreakError: 진행 중인 휴식이 없을 때 (No open break)
        """
        attendance: Attendance = await self.get_attendance(db, attendance_id)

        now: datetime = self._resolve_time(time)
        breaks: list[dict[str, Any]] = [dict(b) for b in attendance.break_times or []]
        open_break: dict[str, Any] | None = next((b for b in breaks if b.get("end_time") is None), None)
        if open_break is None:
            raise NoActiveBreakError()

        open_break["end_time"] = now.isoformat()
        attendance.break_times = breaks
        await db.flush()
        await db.refresh(attendance)

        log_event("attendance.break_end", attendance_id=attendance.id, user_id=attendance.user_id, time=now)
        return attendance

    async def clock_out(
        self,
        db: AsyncSession,
        attendance_id: UUID,
        time: datetime | None = None,
    ) -> Attendance:
        """퇴근을 기록합니다.

        Record the clock-out. An open break is closed at the clock-out instant
        first; total hours and the early-leave status are then computed. A
        "late" status is kept even when the employee also left early.

        Raises:
            NotFoundError: 근태 기록이 없을 때 (Attendance not found)
            AlreadyClockedOutError: 이미 퇴근한 경우 (Already clocked out)
        """
        attendance: Attendance = await self.get_attendance(db, attendance_id)
        if attendance.clock_out_time is not None:
            raise AlreadyClockedOutError()

        now: datetime = self._resolve_time(time)

        # 진행 중 휴식 자동 종료 — Auto-close an open break at the clock-out instant
        breaks: list[dict[str, Any]] = [dict(b) for b in attendance.break_times or []]
        open_break: dict[str, Any] | None = next((b for b in breaks if b.get("end_time") is None), None)
        if open_break is not None:
            open_break["end_time"] = now.isoformat()

        status: str = attendance.status
        if status != "late" and self._is_early(attendance.clock_in_time, now):
            status = "early"

        attendance.break_times = breaks
        attendance.clock_out_time = now
        attendance.total_work_hours = calculate_total_work_hours(attendance.clock_in_time, now, breaks)
        attendance.status = status
        await db.flush()
        await db.refresh(attendance)

        log_event(
            "attendance.clock_out",
            attendance_id=attendance.id,
            user_id=attendance.user_id,
            clock_out_time=now,
            total_work_hours=attendance.total_work_hours,
            status=status,
        )
        return attendance

    # === 조회 (Lookups) ===

    async def get_attendance(
        self,
        db: AsyncSession,
        attendance_id: UUID,
    ) -> Attendance:
        """근태 기록 단건을 조회합니다.

        Raises:
            NotFoundError: 근태 기록이 없을 때 (When attendance not found)
        """
        attendance: Attendance | None = await attendance_repository.get_by_id(db, attendance_id)
        if attendance is None:
            raise NotFoundError("근태 기록을 찾을 수 없습니다 (Attendance record not found)")
        return attendance

    async def get_user_attendance_for_date(
        self,
        db: AsyncSession,
        user_id: UUID,
        work_date: date,
    ) -> Attendance | None:
        return await attendance_repository.get_user_on_date(db, user_id, work_date)

    async def get_user_attendances_for_period(
        self,
        db: AsyncSession,
        user_id: UUID,
        start_date: date,
        end_date: date,
    ) -> Sequence[Attendance]:
        return await attendance_repository.get_in_range(db, start_date, end_date, user_id=user_id)

    async def get_store_attendances_for_date(
        self,
        db: AsyncSession,
        store_id: UUID,
        work_date: date,
    ) -> Sequence[Attendance]:
        return await attendance_repository.get_in_range(db, work_date, work_date, store_id=store_id)

    async def get_today_attendance(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Attendance | None:
        """오늘 근태 기록 (Today's record for the employee, by the injected clock)."""
        return await attendance_repository.get_user_on_date(db, user_id, self.clock().date())

    # === 통계 (Statistics) ===

    async def get_monthly_attendance_stats(
        self,
        db: AsyncSession,
        user_id: UUID,
        year: int,
        month: int,
    ) -> dict:
        """직원 월간 근태 통계를 계산합니다.

        Compute per-employee statistics for a month. Records without total
        hours contribute zero hours. No records yields all zeros.

        Returns:
            dict: {total_days, total_hours, late_count, early_count, average_hours_per_day}
        """
        start, end = get_month_date_range(year, month)
        records: Sequence[Attendance] = await attendance_repository.get_in_range(
            db, start.date(), end.date(), user_id=user_id
        )

        total_days: int = len(records)
        total_hours: float = sum(r.total_work_hours or 0 for r in records)
        return {
            "total_days": total_days,
            "total_hours": round_half_up(total_hours, 2),
            "late_count": sum(1 for r in records if r.status == "late"),
            "early_count": sum(1 for r in records if r.status == "early"),
            "average_hours_per_day": round_half_up(total_hours / total_days, 2) if total_days else 0,
        }

    async def get_store_attendance_stats(
        self,
        db: AsyncSession,
        store_id: UUID,
        start_date: date,
        end_date: date,
    ) -> dict:
        """매장 기간 근태 통계를 계산합니다.

        Compute per-store statistics over [start_date, end_date].

        Returns:
            dict: {total_attendances, late_count, early_count, total_hours,
                   average_hours_per_attendance}
        """
        records: Sequence[Attendance] = await attendance_repository.get_in_range(
            db, start_date, end_date, store_id=store_id
        )

        total: int = len(records)
        total_hours: float = sum(r.total_work_hours or 0 for r in records)
        return {
            "total_attendances": total,
            "late_count": sum(1 for r in records if r.status == "late"),
            "early_count": sum(1 for r in records if r.status == "early"),
            "total_hours": round_half_up(total_hours, 2),
            "average_hours_per_attendance": round_half_up(total_hours / total, 2) if total else 0,
        }

    # === 응답 구성 (Response building) ===

    def build_response(self, attendance: Attendance) -> dict:
        """근태 응답 딕셔너리를 구성합니다.

        Build the attendance response dict with the derived state and the
        open-break flag.
        """
        breaks: list[dict[str, Any]] = list(attendance.break_times or [])
        return {
            "id": str(attendance.id),
            "user_id": str(attendance.user_id),
            "store_id": str(attendance.store_id),
            "date": attendance.date,
            "clock_in_time": attendance.clock_in_time,
            "clock_out_time": attendance.clock_out_time,
            "break_times": [
                {"start_time": _parse_instant(b.get("start_time")), "end_time": _parse_instant(b.get("end_time"))}
                for b in breaks
            ],
            "total_work_hours": attendance.total_work_hours,
            "status": attendance.status,
            "state": derive_state(attendance),
            "has_active_break": has_active_break(breaks),
        }


# 싱글턴 인스턴스 — Singleton instance
attendance_service: AttendanceService = AttendanceService()

"""앱 근태 라우터 — 내 근태 기록 API.

App Attendance Router — API endpoints for the employee's own attendance:
clock-in, breaks, clock-out, today's record, history and monthly stats.
Employees always clock at the current time; back-filling is admin-only.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import get_current_user
from shiftboard.database import get_db
from shiftboard.models.attendance import Attendance
from shiftboard.models.user import User
from shiftboard.schemas.attendance import AttendanceResponse, ClockInRequest, MonthlyAttendanceStats
from shiftboard.services.attendance_service import attendance_service
from shiftboard.utils.exceptions import ForbiddenError

router: APIRouter = APIRouter()


async def _get_own_attendance(db: AsyncSession, attendance_id: UUID, user: User) -> Attendance:
    attendance: Attendance = await attendance_service.get_attendance(db, attendance_id)
    if attendance.user_id != user.id:
        raise ForbiddenError("본인의 근태 기록만 변경할 수 있습니다 (Not your attendance record)")
    return attendance


@router.post("/clock-in", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
async def clock_in(
    data: ClockInRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """출근을 기록합니다.

    Clock in at the given store for today.

    Args:
        data: 출근 요청 (Clock-in request; `time` is ignored for employees)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 직원 (Authenticated employee)

    Returns:
        dict: 생성된 근태 기록 (Created attendance record)
    """
    attendance: Attendance = await attendance_service.clock_in(db, current_user.id, data.store_id)
    await db.commit()
    return attendance_service.build_response(attendance)


@router.post("/{attendance_id}/break-start", response_model=AttendanceResponse)
async def start_break(
    attendance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    await _get_own_attendance(db, attendance_id, current_user)
    attendance: Attendance = await attendance_service.start_break(db, attendance_id)
    await db.commit()
    return attendance_service.build_response(attendance)


@router.post("/{attendance_id}/break-end", response_model=AttendanceResponse)
async def end_break(
    attendance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    await _get_own_attendance(db, attendance_id, current_user)
    attendance: Attendance = await attendance_service.end_break(db, attendance_id)
    await db.commit()
    return attendance_service.build_response(attendance)


@router.post("/{attendance_id}/clock-out", response_model=AttendanceResponse)
async def clock_out(
    attendance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """퇴근을 기록합니다 (진행 중 휴식은 자동 종료).

    Clock out; an open break is closed at the same instant.
    """
    await _get_own_attendance(db, attendance_id, current_user)
    attendance: Attendance = await attendance_service.clock_out(db, attendance_id)
    await db.commit()
    return attendance_service.build_response(attendance)


@router.get("/today", response_model=AttendanceResponse | None)
async def get_my_today_attendance(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict | None:
    """오늘 내 근태 기록을 조회합니다.

    Get today's attendance record for the current employee.

    Returns:
        dict | None: 오늘 근태 기록 또는 None (Today's attendance or None)
    """
    attendance: Attendance | None = await attendance_service.get_today_attendance(db, current_user.id)
    if attendance is None:
        return None
    return attendance_service.build_response(attendance)


@router.get("/history", response_model=list[AttendanceResponse])
async def get_my_attendance_history(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: Annotated[date, Query()],
    end_date: Annotated[date, Query()],
) -> list[dict]:
    records = await attendance_service.get_user_attendances_for_period(db, current_user.id, start_date, end_date)
    return [attendance_service.build_response(r) for r in records]


@router.get("/stats", response_model=MonthlyAttendanceStats)
async def get_my_monthly_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    year: Annotated[int, Query(ge=2000, le=2100)],
    month: Annotated[int, Query(ge=1, le=12)],
) -> dict:
    return await attendance_service.get_monthly_attendance_stats(db, current_user.id, year, month)

"""관리자 근태 라우터 — 근태 조회, 대리 기록 및 통계 API.

Admin Attendance Router — API endpoints for attendance lookups, recording
clock events on behalf of an employee, and attendance statistics.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.attendance import Attendance
from shiftboard.models.user import User
from shiftboard.schemas.attendance import (
    AdminClockInRequest,
    AttendanceResponse,
    ClockActionRequest,
    MonthlyAttendanceStats,
    StoreAttendanceStats,
)
from shiftboard.services.attendance_service import attendance_service
from shiftboard.utils.exceptions import BadRequestError

router: APIRouter = APIRouter()


@router.get("", response_model=list[AttendanceResponse])
async def list_attendances(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    user_id: Annotated[UUID | None, Query()] = None,
    store_id: Annotated[UUID | None, Query()] = None,
    work_date: Annotated[date | None, Query(alias="date")] = None,
    start_date: Annotated[date | None, Query()] = None,
    end_date: Annotated[date | None, Query()] = None,
) -> list[dict]:
    """근태 기록 목록을 조회합니다.

    List attendance records either for one employee over a period
    (user_id + start_date + end_date) or for one store on a day (store_id + date).

    Raises:
        BadRequestError: 필터 조합이 맞지 않을 때 (Unsupported filter combination)
    """
    if user_id is not None and start_date is not None and end_date is not None:
        records = await attendance_service.get_user_attendances_for_period(db, user_id, start_date, end_date)
    elif store_id is not None and work_date is not None:
        records = await attendance_service.get_store_attendances_for_date(db, store_id, work_date)
    else:
        raise BadRequestError(
            "user_id+start_date+end_date 또는 store_id+date가 필요합니다 "
            "(Provide user_id with start_date and end_date, or store_id with date)"
        )
    return [attendance_service.build_response(r) for r in records]


@router.get("/stats/monthly", response_model=MonthlyAttendanceStats)
async def get_monthly_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    user_id: Annotated[UUID, Query()],
    year: Annotated[int, Query(ge=2000, le=2100)],
    month: Annotated[int, Query(ge=1, le=12)],
) -> dict:
    """직원 월간 근태 통계 (Per-employee monthly attendance statistics)."""
    return await attendance_service.get_monthly_attendance_stats(db, user_id, year, month)


@router.get("/stats/store", response_model=StoreAttendanceStats)
async def get_store_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    store_id: Annotated[UUID, Query()],
    start_date: Annotated[date, Query()],
    end_date: Annotated[date, Query()],
) -> dict:
    """매장 기간 근태 통계 (Per-store attendance statistics over a range)."""
    return await attendance_service.get_store_attendance_stats(db, store_id, start_date, end_date)


@router.get("/{attendance_id}", response_model=AttendanceResponse)
async def get_attendance(
    attendance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    attendance: Attendance = await attendance_service.get_attendance(db, attendance_id)
    return attendance_service.build_response(attendance)


@router.post("/clock-in", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
async def clock_in(
    data: AdminClockInRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """직원 대신 출근을 기록합니다 (Record a clock-in on behalf of an employee)."""
    attendance: Attendance = await attendance_service.clock_in(db, data.user_id, data.store_id, data.time)
    await db.commit()
    return attendance_service.build_response(attendance)


@router.post("/{attendance_id}/break-start", response_model=AttendanceResponse)
async def start_break(
    attendance_id: UUID,
    data: ClockActionRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    attendance: Attendance = await attendance_service.start_break(db, attendance_id, data.time)
    await db.commit()
    return attendance_service.build_response(attendance)


@router.post("/{attendance_id}/break-end", response_model=AttendanceResponse)
async def end_break(
    attendance_id: UUID,
    data: ClockActionRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    attendance: Attendance = await attendance_service.end_break(db, attendance_id, data.time)
    await db.commit()
    return attendance_service.build_response(attendance)


@router.post("/{attendance_id}/clock-out", response_model=AttendanceResponse)
async def clock_out(
    attendance_id: UUID,
    data: ClockActionRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    attendance: Attendance = await attendance_service.clock_out(db, attendance_id, data.time)
    await db.commit()
    return attendance_service.build_response(attendance)

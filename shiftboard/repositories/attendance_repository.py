"""근태 관리 레포지토리 — 근태 기록 관련 DB 쿼리 담당.

Attendance Repository — Handles attendance record database queries:
per-employee-day lookup and date-range listing by employee or store.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.attendance import Attendance
from shiftboard.repositories.base import BaseRepository


class AttendanceRepository(BaseRepository[Attendance]):
    """근태 기록 레포지토리.

    Attendance record repository with employee-day and range queries.

    Extends:
        BaseRepository[Attendance]
    """

    def __init__(self) -> None:
        super().__init__(Attendance)

    async def get_user_on_date(
        self,
        db: AsyncSession,
        user_id: UUID,
        work_date: date,
    ) -> Attendance | None:
        """특정 직원의 특정 날짜 근태 기록을 조회합니다.

        Retrieve the attendance record of an employee for a calendar date.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 직원 UUID (Employee UUID)
            work_date: 근무 날짜 (Calendar date)

        Returns:
            Attendance | None: 근태 기록 또는 None (Attendance record or None)
        """
        query: Select = (
            select(Attendance)
            .where(Attendance.user_id == user_id)
            .where(Attendance.date == work_date)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_in_range(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
        user_id: UUID | None = None,
        store_id: UUID | None = None,
    ) -> Sequence[Attendance]:
        """날짜 범위 내 근태 기록을 조회합니다.

        Retrieve attendance records whose date lies in [start_date, end_date],
        ordered by date then clock-in.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            start_date: 시작일, 포함 (Inclusive start date)
            end_date: 종료일, 포함 (Inclusive end date)
            user_id: 직원 필터, 선택 (Optional employee filter)
            store_id: 매장 필터, 선택 (Optional store filter)

        Returns:
            Sequence[Attendance]: 근태 목록 (List of attendance records)
        """
        query: Select = (
            select(Attendance)
            .where(Attendance.date >= start_date)
            .where(Attendance.date <= end_date)
        )
        if user_id is not None:
            query = query.where(Attendance.user_id == user_id)
        if store_id is not None:
            query = query.where(Attendance.store_id == store_id)

        query = query.order_by(Attendance.date, Attendance.clock_in_time)
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
attendance_repository: AttendanceRepository = AttendanceRepository()

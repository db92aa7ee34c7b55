"""시프트 레포지토리 — 시프트 날짜 범위 쿼리.

Shift Repository — Date-range queries for shifts.
All ranges are closed intervals on the calendar date.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.shift import Shift
from shiftboard.repositories.base import BaseRepository


class ShiftRepository(BaseRepository[Shift]):
    """시프트 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the shifts table.
    """

    def __init__(self) -> None:
        super().__init__(Shift)

    async def get_in_range(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
        user_id: UUID | None = None,
        store_id: UUID | None = None,
    ) -> Sequence[Shift]:
        """날짜 범위 내 시프트를 조회합니다.

        Retrieve shifts whose date lies in [start_date, end_date].
        Ordered by date, then store and start time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            start_date: 시작일, 포함 (Inclusive start date)
            end_date: 종료일, 포함 (Inclusive end date)
            user_id: 직원 필터, 선택 (Optional employee filter)
            store_id: 매장 필터, 선택 (Optional store filter)

        Returns:
            Sequence[Shift]: 시프트 목록 (List of shifts)
        """
        query: Select = (
            select(Shift)
            .where(Shift.date >= start_date)
            .where(Shift.date <= end_date)
        )
        if user_id is not None:
            query = query.where(Shift.user_id == user_id)
        if store_id is not None:
            query = query.where(Shift.store_id == store_id)

        query = query.order_by(Shift.date, Shift.store_id, Shift.start_time)
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
shift_repository: ShiftRepository = ShiftRepository()

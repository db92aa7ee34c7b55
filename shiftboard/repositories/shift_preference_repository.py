"""시프트 희망 레포지토리 — 직원별 월간 희망 조회.

Shift Preference Repository — Per-employee monthly preference queries.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.shift import ShiftPreference
from shiftboard.repositories.base import BaseRepository


class ShiftPreferenceRepository(BaseRepository[ShiftPreference]):
    """시프트 희망 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the shift_preferences table.
    """

    def __init__(self) -> None:
        super().__init__(ShiftPreference)

    async def get_for_user_period(
        self,
        db: AsyncSession,
        user_id: UUID,
        year: int,
        month: int,
    ) -> ShiftPreference | None:
        """직원의 특정 월 희망을 조회합니다.

        Retrieve the preference of one employee for (year, month).

        Returns:
            ShiftPreference | None: 희망 또는 None (Preference or None)
        """
        query: Select = (
            select(ShiftPreference)
            .where(ShiftPreference.user_id == user_id)
            .where(ShiftPreference.year == year)
            .where(ShiftPreference.month == month)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_for_month(
        self,
        db: AsyncSession,
        year: int,
        month: int,
    ) -> Sequence[ShiftPreference]:
        """해당 월 전체 희망을 제출 순서로 조회합니다 (All preferences for a month, by submitted_at)."""
        query: Select = (
            select(ShiftPreference)
            .where(ShiftPreference.year == year)
            .where(ShiftPreference.month == month)
            .order_by(ShiftPreference.submitted_at)
        )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
shift_preference_repository: ShiftPreferenceRepository = ShiftPreferenceRepository()

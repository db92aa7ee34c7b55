"""매장 레포지토리 — 매장 및 스킬 요건 쿼리.

Store Repository — Store and skill requirement queries.
Skill requirements are eager-loaded with their store (selectin).
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.store import Store, StoreSkillRequirement
from shiftboard.repositories.base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    """매장 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the stores table.
    """

    def __init__(self) -> None:
        super().__init__(Store)

    async def get_ordered(self, db: AsyncSession) -> Sequence[Store]:
        """이름순 매장 목록 (All stores ordered by name)."""
        result = await db.execute(select(Store).order_by(Store.name))
        return result.scalars().all()

    async def get_requirement(
        self,
        db: AsyncSession,
        store_id: UUID,
        day: str,
    ) -> StoreSkillRequirement | None:
        """매장의 특정 요일 구분 요건을 조회합니다.

        Retrieve the skill requirement of a store for one day-category.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            store_id: 매장 UUID (Store UUID)
            day: 요일 구분 (weekday | saturday | sunday | holiday)

        Returns:
            StoreSkillRequirement | None: 요건 또는 None (Requirement or None)
        """
        query: Select = (
            select(StoreSkillRequirement)
            .where(StoreSkillRequirement.store_id == store_id)
            .where(StoreSkillRequirement.day == day)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
store_repository: StoreRepository = StoreRepository()

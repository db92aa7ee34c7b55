"""직원 레포지토리 — 직원 프로필 조회 쿼리.

User Repository — Employee profile lookup queries.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.user import User
from shiftboard.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """직원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_ordered(
        self,
        db: AsyncSession,
        role: str | None = None,
        employment_type: str | None = None,
    ) -> Sequence[User]:
        """이름순 직원 목록을 조회합니다.

        Retrieve employees ordered by name, optionally filtered by role and employment type.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 역할 필터, 선택 (Optional role filter: admin | employee)
            employment_type: 고용 형태 필터, 선택 (Optional employment type filter)

        Returns:
            Sequence[User]: 직원 목록 (List of employees)
        """
        query: Select = select(User)
        if role is not None:
            query = query.where(User.role == role)
        if employment_type is not None:
            query = query.where(User.employment_type == employment_type)
        result = await db.execute(query.order_by(User.name))
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()

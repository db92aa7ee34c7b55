"""직원 서비스 — 직원 프로필 CRUD 비즈니스 로직.

User Service — Business logic for employee profile CRUD and
role/skill/employment-type lookups.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.user import User, default_skills
from shiftboard.repositories.user_repository import user_repository
from shiftboard.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from shiftboard.utils.exceptions import NotFoundError

# None으로 지울 수 있는 필드 — Fields that may be cleared to NULL
NULLABLE_FIELDS: frozenset[str] = frozenset({"join_date", "profile_image"})


class UserService:
    """직원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling employee business logic.
    """

    def to_response(self, user: User) -> EmployeeResponse:
        """직원 모델을 응답 스키마로 변환합니다 (Convert a User to an EmployeeResponse)."""
        return EmployeeResponse(
            id=str(user.id),
            name=user.name,
            nickname=user.nickname,
            email=user.email,
            phone=user.phone,
            address=user.address,
            position=user.position,
            employment_type=user.employment_type,
            join_date=user.join_date,
            desired_work_days=user.desired_work_days,
            skills={**default_skills(), **(user.skills or {})},
            special_notes=user.special_notes,
            profile_image=user.profile_image,
            role=user.role,
            created_at=user.created_at,
        )

    async def list_users(self, db: AsyncSession) -> Sequence[User]:
        return await user_repository.get_ordered(db)

    async def get_user(self, db: AsyncSession, user_id: UUID) -> User:
        """직원 단건을 조회합니다.

        Raises:
            NotFoundError: 직원이 없을 때 (Employee not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("직원을 찾을 수 없습니다 (Employee not found)")
        return user

    async def create_user(self, db: AsyncSession, data: EmployeeCreate) -> User:
        # 미입력 텍스트 필드는 컬럼 기본값("") 사용 — Omitted text fields fall back to column defaults
        return await user_repository.create(db, data.model_dump(exclude_none=True))

    async def update_user(self, db: AsyncSession, user_id: UUID, data: EmployeeUpdate) -> User:
        """직원 정보를 부분 수정합니다 (Partially update an employee profile).

        Raises:
            NotFoundError: 직원이 없을 때 (Employee not found)
        """
        user: User = await self.get_user(db, user_id)
        update_data: dict = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if "skills" in update_data:
            # 보낸 영역만 기존 등급에 덮어씀 — Only the sent skill areas overwrite the stored grades
            update_data["skills"] = {**default_skills(), **(user.skills or {}), **update_data["skills"]}

        updated: User | None = await user_repository.update(db, user_id, update_data)
        if updated is None:
            raise NotFoundError("직원을 찾을 수 없습니다 (Employee not found)")
        return updated

    async def delete_user(self, db: AsyncSession, user_id: UUID) -> None:
        if not await user_repository.delete(db, user_id):
            raise NotFoundError("직원을 찾을 수 없습니다 (Employee not found)")

    async def get_users_by_role(self, db: AsyncSession, role: str) -> Sequence[User]:
        return await user_repository.get_ordered(db, role=role)

    async def get_users_by_employment_type(self, db: AsyncSession, employment_type: str) -> Sequence[User]:
        return await user_repository.get_ordered(db, employment_type=employment_type)

    async def get_users_by_skill(
        self,
        db: AsyncSession,
        skill: str,
        level: str,
    ) -> list[User]:
        """특정 스킬 등급의 직원 목록을 조회합니다.

        List employees whose grade in `skill` equals `level`.
        Skills live in a JSON column, so the match is done in memory.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            skill: 스킬 영역 (kitchen | hall | sales | overall)
            level: 등급 (A | B | C)

        Returns:
            list[User]: 해당 직원 목록 (Matching employees)
        """
        users: Sequence[User] = await user_repository.get_ordered(db)
        return [u for u in users if {**default_skills(), **(u.skills or {})}.get(skill) == level]


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()

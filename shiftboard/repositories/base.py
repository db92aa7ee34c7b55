"""기본 레포지토리 — 도메인 레포지토리 공통 부모 클래스.

Base Repository — Shared parent of the domain repositories (employees,
stores, shifts, preferences, attendances, events, seasonal info).
Covers lookup by id, ordered listing, single and batch inserts, partial
updates and deletes. Range queries live in the domain subclasses.

Every write flushes but never commits; the router owns the transaction.

Usage:
    class EventRepository(BaseRepository[Event]):
        def __init__(self) -> None:
            super().__init__(Event)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.database import Base

# 도메인 모델 타입 — Domain model type handled by a repository
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """도메인 모델 하나를 다루는 제네릭 레포지토리.

    Generic repository bound to one domain model.

    Attributes:
        model: 대상 ORM 모델 클래스 (ORM model class this repository serves)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """ID로 레코드를 조회합니다. 없으면 None (Record by UUID, or None)."""
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """전체 레코드를 조회합니다.

        List every record of the model.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            order_by: 정렬 컬럼 또는 컬럼 목록, 선택 (Optional column or list of columns)

        Returns:
            Sequence[ModelType]: 레코드 목록 (Records)
        """
        query: Select = select(self.model)
        if isinstance(order_by, (list, tuple)):
            query = query.order_by(*order_by)
        elif order_by is not None:
            query = query.order_by(order_by)

        result = await db.execute(query)
        return result.scalars().all()

    async def create(
        self,
        db: AsyncSession,
        values: dict[str, Any],
    ) -> ModelType:
        """레코드를 생성하고 DB 기본값이 채워진 상태로 반환합니다.

        Insert one record and return it refreshed with server-side defaults
        (id, created_at).

        Raises:
            IntegrityError: 유니크 제약 위반 시 (Unique constraint violated, e.g. a
                            second attendance for the same employee-day)
        """
        record: ModelType = self.model(**values)
        db.add(record)
        await db.flush()
        await db.refresh(record)
        return record

    async def create_many(
        self,
        db: AsyncSession,
        rows: list[dict[str, Any]],
    ) -> list[ModelType]:
        """여러 레코드를 한 번의 flush로 생성합니다.

        Insert several records with a single flush. A failing row fails the
        flush, and the caller's rollback discards every row of the batch.

        Returns:
            list[ModelType]: 생성된 레코드, 입력 순서 (Created records in input order)
        """
        records: list[ModelType] = [self.model(**row) for row in rows]
        db.add_all(records)
        await db.flush()
        return records

    async def update(
        self,
        db: AsyncSession,
        record_id: UUID,
        values: dict[str, Any],
    ) -> ModelType | None:
        """레코드의 주어진 필드만 수정합니다.

        Set only the given fields; unknown keys are ignored and None values
        are written as-is.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 수정할 레코드 UUID (Record UUID)
            values: 필드별 새 값 (New value per field)

        Returns:
            ModelType | None: 수정된 레코드, 없으면 None (Updated record or None)
        """
        record: ModelType | None = await self.get_by_id(db, record_id)
        if record is None:
            return None

        for field, value in values.items():
            if hasattr(record, field):
                setattr(record, field, value)

        await db.flush()
        await db.refresh(record)
        return record

    async def delete(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> bool:
        """레코드를 삭제합니다. 없으면 False (Delete by UUID; False when absent)."""
        record: ModelType | None = await self.get_by_id(db, record_id)
        if record is None:
            return False

        await db.delete(record)
        await db.flush()
        return True

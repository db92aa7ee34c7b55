"""시프트 서비스 — 시프트 CRUD, 일괄 생성, 기간 통계.

Shift Service — Business logic for shift CRUD, the planned → completed
transition, all-or-nothing batch creation and period statistics.
Date ranges are closed intervals on the calendar date.
"""

import uuid
from datetime import date
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.shift import Shift
from shiftboard.repositories.shift_repository import shift_repository
from shiftboard.schemas.shift import ShiftCreate, ShiftResponse, ShiftUpdate
from shiftboard.utils.date_utils import calculate_duration_in_minutes, format_date
from shiftboard.utils.event_logger import log_event
from shiftboard.utils.exceptions import NotFoundError


def _spec_to_row(spec: ShiftCreate) -> dict[str, Any]:
    return {
        "user_id": spec.user_id,
        "store_id": spec.store_id,
        "date": spec.date,
        "start_time": spec.start_time,
        "end_time": spec.end_time,
        "status": spec.status,
        "note": spec.note,
    }


class ShiftService:
    """시프트 관련 비즈니스 로직을 처리하는 서비스.

    Service handling shift business logic.
    """

    def to_response(self, shift: Shift) -> ShiftResponse:
        """시프트 모델을 응답 스키마로 변환합니다.

        Convert a Shift (saved or not) to a ShiftResponse with its duration.
        """
        return ShiftResponse(
            id=str(shift.id) if shift.id is not None else None,
            user_id=str(shift.user_id),
            store_id=str(shift.store_id),
            date=shift.date,
            start_time=shift.start_time,
            end_time=shift.end_time,
            status=shift.status or "planned",
            note=shift.note,
            duration_minutes=calculate_duration_in_minutes(shift.start_time, shift.end_time),
        )

    async def get_shift(self, db: AsyncSession, shift_id: UUID) -> Shift:
        """시프트 단건을 조회합니다.

        Raises:
            NotFoundError: 시프트가 없을 때 (Shift not found)
        """
        shift: Shift | None = await shift_repository.get_by_id(db, shift_id)
        if shift is None:
            raise NotFoundError("시프트를 찾을 수 없습니다 (Shift not found)")
        return shift

    async def get_user_shifts(
        self,
        db: AsyncSession,
        user_id: UUID,
        start_date: date,
        end_date: date,
    ) -> Sequence[Shift]:
        return await shift_repository.get_in_range(db, start_date, end_date, user_id=user_id)

    async def get_store_shifts(
        self,
        db: AsyncSession,
        store_id: UUID,
        start_date: date,
        end_date: date,
    ) -> Sequence[Shift]:
        return await shift_repository.get_in_range(db, start_date, end_date, store_id=store_id)

    async def get_all_shifts(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
    ) -> Sequence[Shift]:
        return await shift_repository.get_in_range(db, start_date, end_date)

    async def save_shift(
        self,
        db: AsyncSession,
        data: ShiftCreate,
        shift_id: UUID | None = None,
    ) -> Shift:
        """시프트를 생성하거나 ID 기준으로 전체 교체합니다.

        Create a shift, or fully replace the shift with `shift_id` when it exists.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 시프트 데이터 (Shift data)
            shift_id: 교체할 시프트 UUID, 선택 (Optional id to create or replace)

        Returns:
            Shift: 저장된 시프트 (Saved shift)
        """
        row: dict[str, Any] = _spec_to_row(data)
        if shift_id is not None:
            existing: Shift | None = await shift_repository.update(db, shift_id, row)
            if existing is not None:
                return existing
            row["id"] = shift_id
        return await shift_repository.create(db, row)

    async def update_shift(self, db: AsyncSession, shift_id: UUID, data: ShiftUpdate) -> Shift:
        """시프트를 부분 수정합니다 (Partially update a shift).

        Raises:
            NotFoundError: 시프트가 없을 때 (Shift not found)
        """
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        shift: Shift | None = await shift_repository.update(db, shift_id, update_data)
        if shift is None:
            raise NotFoundError("시프트를 찾을 수 없습니다 (Shift not found)")
        return shift

    async def delete_shift(self, db: AsyncSession, shift_id: UUID) -> None:
        if not await shift_repository.delete(db, shift_id):
            raise NotFoundError("시프트를 찾을 수 없습니다 (Shift not found)")

    async def complete_shift(self, db: AsyncSession, shift_id: UUID) -> Shift:
        """시프트를 완료 처리합니다.

        The only status transition: planned → completed. No check that the
        shift date has passed; completing a completed shift is a no-op.

        Raises:
            NotFoundError: 시프트가 없을 때 (Shift not found)
        """
        shift: Shift = await self.get_shift(db, shift_id)
        shift.status = "completed"
        await db.flush()
        await db.refresh(shift)
        return shift

    async def create_shifts_in_batch(
        self,
        db: AsyncSession,
        specs: list[ShiftCreate],
    ) -> list[UUID]:
        """시프트를 일괄 생성합니다 (전부 또는 전무).

        Persist several shifts as one unit of work. Ids are generated before
        the flush so they are returned in input order; any failure rolls back
        the whole batch with the caller's transaction.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            specs: 시프트 명세 목록 (Shift specifications)

        Returns:
            list[UUID]: 생성된 시프트 ID 목록 (Ids of the created shifts, in input order)
        """
        rows: list[dict[str, Any]] = [{**_spec_to_row(spec), "id": uuid.uuid4()} for spec in specs]
        await shift_repository.create_many(db, rows)

        ids: list[UUID] = [row["id"] for row in rows]
        log_event("shifts.batch_created", count=len(ids), shift_ids=ids)
        return ids

    async def get_shift_statistics(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
    ) -> dict:
        """기간 내 시프트 통계를 계산합니다.

        Count shifts in [start_date, end_date] in total, per store id and per
        "YYYY-MM-DD" date. An empty range yields zeros and empty maps.

        Returns:
            dict: {total_shifts, shifts_per_store, shifts_per_day}
        """
        shifts: Sequence[Shift] = await self.get_all_shifts(db, start_date, end_date)

        per_store: dict[str, int] = {}
        per_day: dict[str, int] = {}
        for shift in shifts:
            store_key: str = str(shift.store_id)
            day_key: str = format_date(shift.date)
            per_store[store_key] = per_store.get(store_key, 0) + 1
            per_day[day_key] = per_day.get(day_key, 0) + 1

        return {
            "total_shifts": len(shifts),
            "shifts_per_store": per_store,
            "shifts_per_day": per_day,
        }


# 싱글턴 인스턴스 — Singleton instance
shift_service: ShiftService = ShiftService()

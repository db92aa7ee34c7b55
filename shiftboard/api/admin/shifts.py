"""관리자 시프트 라우터 — 시프트 관리 API.

Admin Shift Router — API endpoints for shift listing, CRUD, completion,
all-or-nothing batch creation and period statistics.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.shift import Shift
from shiftboard.models.user import User
from shiftboard.schemas.common import IdListResponse, MessageResponse
from shiftboard.schemas.shift import (
    ShiftBatchCreate,
    ShiftCreate,
    ShiftResponse,
    ShiftStatistics,
    ShiftUpdate,
)
from shiftboard.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftResponse])
async def list_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    start_date: Annotated[date, Query()],
    end_date: Annotated[date, Query()],
    user_id: Annotated[UUID | None, Query()] = None,
    store_id: Annotated[UUID | None, Query()] = None,
) -> list[ShiftResponse]:
    """기간 내 시프트 목록을 조회합니다.

    List shifts in [start_date, end_date], optionally for one employee or one store.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)
        start_date: 시작일, 포함 (Inclusive start date)
        end_date: 종료일, 포함 (Inclusive end date)
        user_id: 직원 필터, 선택 (Optional employee filter)
        store_id: 매장 필터, 선택 (Optional store filter)

    Returns:
        list[ShiftResponse]: 날짜순 시프트 목록 (Shifts ordered by date)
    """
    if user_id is not None:
        shifts = await shift_service.get_user_shifts(db, user_id, start_date, end_date)
    elif store_id is not None:
        shifts = await shift_service.get_store_shifts(db, store_id, start_date, end_date)
    else:
        shifts = await shift_service.get_all_shifts(db, start_date, end_date)
    return [shift_service.to_response(s) for s in shifts]


@router.get("/statistics", response_model=ShiftStatistics)
async def get_shift_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    start_date: Annotated[date, Query()],
    end_date: Annotated[date, Query()],
) -> dict:
    """기간 시프트 통계 — 전체, 매장별, 일자별 건수."""
    return await shift_service.get_shift_statistics(db, start_date, end_date)


@router.post("/batch", response_model=IdListResponse, status_code=status.HTTP_201_CREATED)
async def create_shifts_in_batch(
    data: ShiftBatchCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """시프트를 일괄 생성합니다 (전부 또는 전무).

    Create all shifts in one transaction and return their ids in input order.
    """
    ids: list[UUID] = await shift_service.create_shifts_in_batch(db, data.shifts)
    await db.commit()
    return {"ids": [str(i) for i in ids]}


@router.get("/{shift_id}", response_model=ShiftResponse)
async def get_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    shift: Shift = await shift_service.get_shift(db, shift_id)
    return shift_service.to_response(shift)


@router.post("", response_model=ShiftResponse, status_code=status.HTTP_201_CREATED)
async def create_shift(
    data: ShiftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    shift: Shift = await shift_service.save_shift(db, data)
    await db.commit()
    return shift_service.to_response(shift)


@router.put("/{shift_id}", response_model=ShiftResponse)
async def save_shift(
    shift_id: UUID,
    data: ShiftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    """시프트를 ID 기준으로 생성하거나 전체 교체합니다 (Create or fully replace by id)."""
    shift: Shift = await shift_service.save_shift(db, data, shift_id)
    await db.commit()
    return shift_service.to_response(shift)


@router.patch("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: UUID,
    data: ShiftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    shift: Shift = await shift_service.update_shift(db, shift_id, data)
    await db.commit()
    return shift_service.to_response(shift)


@router.post("/{shift_id}/complete", response_model=ShiftResponse)
async def complete_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    """시프트 완료 처리 (planned → completed)."""
    shift: Shift = await shift_service.complete_shift(db, shift_id)
    await db.commit()
    return shift_service.to_response(shift)


@router.delete("/{shift_id}", response_model=MessageResponse)
async def delete_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    await shift_service.delete_shift(db, shift_id)
    await db.commit()
    return {"message": "시프트가 삭제되었습니다 (Shift deleted)"}

"""관리자 시프트 희망 라우터 — 월별 시프트 희망 관리 API.

Admin Shift Preference Router — API endpoints for monthly shift preferences
and the per-month submission status report.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.shift import ShiftPreference
from shiftboard.models.user import User
from shiftboard.schemas.common import MessageResponse
from shiftboard.schemas.shift import (
    ShiftPreferenceResponse,
    ShiftPreferenceSave,
    ShiftPreferenceUpdate,
    SubmissionStatus,
    UnavailableDateRequest,
)
from shiftboard.services.shift_preference_service import shift_preference_service
from shiftboard.utils.exceptions import BadRequestError, NotFoundError

router: APIRouter = APIRouter()

Year = Annotated[int, Query(ge=2000, le=2100)]
Month = Annotated[int, Query(ge=1, le=12)]


@router.get("", response_model=list[ShiftPreferenceResponse])
async def list_preferences_for_month(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    year: Year,
    month: Month,
) -> list[ShiftPreferenceResponse]:
    """해당 월의 시프트 희망 목록 (제출 순) — Month's preferences ordered by submission."""
    preferences = await shift_preference_service.get_all_preferences_for_month(db, year, month)
    return [shift_preference_service.to_response(p) for p in preferences]


@router.get("/submission-status", response_model=SubmissionStatus)
async def get_submission_status(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    year: Year,
    month: Month,
) -> dict:
    """월별 제출 현황 — 직원별 제출 여부와 집계.

    Per-employee submitted flag and counts over the role=employee roster.
    """
    return await shift_preference_service.get_submission_status_for_month(db, year, month)


@router.get("/users/{user_id}", response_model=ShiftPreferenceResponse)
async def get_user_preference(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    year: Year,
    month: Month,
) -> ShiftPreferenceResponse:
    preference: ShiftPreference | None = await shift_preference_service.get_user_preference(db, user_id, year, month)
    if preference is None:
        raise NotFoundError("시프트 희망을 찾을 수 없습니다 (Shift preference not found)")
    return shift_preference_service.to_response(preference)


@router.post("/users/{user_id}/empty", response_model=ShiftPreferenceResponse, status_code=status.HTTP_201_CREATED)
async def create_empty_preference(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    year: Year,
    month: Month,
) -> ShiftPreferenceResponse:
    """기본값 희망 생성 (5일/주, 월~금) — Create the default preference for the month."""
    preference: ShiftPreference = await shift_preference_service.create_empty_preference(db, user_id, year, month)
    await db.commit()
    return shift_preference_service.to_response(preference)


@router.get("/{preference_id}", response_model=ShiftPreferenceResponse)
async def get_preference(
    preference_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftPreferenceResponse:
    preference: ShiftPreference = await shift_preference_service.get_preference(db, preference_id)
    return shift_preference_service.to_response(preference)


@router.put("", response_model=ShiftPreferenceResponse)
async def save_preference(
    data: ShiftPreferenceSave,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftPreferenceResponse:
    """직원의 월 희망을 저장합니다 — (직원, 연, 월) 기준 upsert.

    Save a preference on behalf of data.user_id; upserts on (user, year, month).
    """
    if data.user_id is None:
        raise BadRequestError("user_id가 필요합니다 (user_id is required)")
    try:
        user_id: UUID = UUID(data.user_id)
    except ValueError:
        raise BadRequestError("잘못된 user_id 형식입니다 (Invalid user_id)")

    preference: ShiftPreference = await shift_preference_service.save_preference(db, user_id, data)
    await db.commit()
    return shift_preference_service.to_response(preference)


@router.patch("/{preference_id}", response_model=ShiftPreferenceResponse)
async def update_preference(
    preference_id: UUID,
    data: ShiftPreferenceUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftPreferenceResponse:
    preference: ShiftPreference = await shift_preference_service.update_preference(db, preference_id, data)
    await db.commit()
    return shift_preference_service.to_response(preference)


@router.delete("/{preference_id}", response_model=MessageResponse)
async def delete_preference(
    preference_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    await shift_preference_service.delete_preference(db, preference_id)
    await db.commit()
    return {"message": "시프트 희망이 삭제되었습니다 (Shift preference deleted)"}


@router.post("/{preference_id}/unavailable-dates", response_model=ShiftPreferenceResponse)
async def add_unavailable_date(
    preference_id: UUID,
    data: UnavailableDateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftPreferenceResponse:
    preference: ShiftPreference = await shift_preference_service.add_unavailable_date(db, preference_id, data.date)
    await db.commit()
    return shift_preference_service.to_response(preference)


@router.delete("/{preference_id}/unavailable-dates/{day}", response_model=ShiftPreferenceResponse)
async def remove_unavailable_date(
    preference_id: UUID,
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ShiftPreferenceResponse:
    preference: ShiftPreference = await shift_preference_service.remove_unavailable_date(db, preference_id, day)
    await db.commit()
    return shift_preference_service.to_response(preference)

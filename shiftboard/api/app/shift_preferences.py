"""앱 시프트 희망 라우터 — 내 월별 시프트 희망 API.

App Shift Preference Router — Read and submit the employee's own monthly
shift preference, and edit its unavailable dates.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import get_current_user
from shiftboard.database import get_db
from shiftboard.models.shift import ShiftPreference
from shiftboard.models.user import User
from shiftboard.schemas.shift import ShiftPreferenceResponse, ShiftPreferenceSave, UnavailableDateRequest
from shiftboard.services.shift_preference_service import shift_preference_service
from shiftboard.utils.exceptions import ForbiddenError, NotFoundError

router: APIRouter = APIRouter()


async def _get_own_preference(db: AsyncSession, preference_id: UUID, user: User) -> ShiftPreference:
    preference: ShiftPreference = await shift_preference_service.get_preference(db, preference_id)
    if preference.user_id != user.id:
        raise ForbiddenError("본인의 시프트 희망만 변경할 수 있습니다 (Not your shift preference)")
    return preference


@router.get("", response_model=ShiftPreferenceResponse)
async def get_my_preference(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    year: Annotated[int, Query(ge=2000, le=2100)],
    month: Annotated[int, Query(ge=1, le=12)],
) -> ShiftPreferenceResponse:
    preference: ShiftPreference | None = await shift_preference_service.get_user_preference(
        db, current_user.id, year, month
    )
    if preference is None:
        raise NotFoundError("시프트 희망을 찾을 수 없습니다 (Shift preference not found)")
    return shift_preference_service.to_response(preference)


@router.put("", response_model=ShiftPreferenceResponse)
async def save_my_preference(
    data: ShiftPreferenceSave,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ShiftPreferenceResponse:
    """내 월 시프트 희망을 제출합니다.

    Submit (or resubmit) the current employee's preference for data.year /
    data.month. data.user_id is ignored.
    """
    preference: ShiftPreference = await shift_preference_service.save_preference(db, current_user.id, data)
    await db.commit()
    return shift_preference_service.to_response(preference)


@router.post("/{preference_id}/unavailable-dates", response_model=ShiftPreferenceResponse)
async def add_my_unavailable_date(
    preference_id: UUID,
    data: UnavailableDateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ShiftPreferenceResponse:
    await _get_own_preference(db, preference_id, current_user)
    preference: ShiftPreference = await shift_preference_service.add_unavailable_date(db, preference_id, data.date)
    await db.commit()
    return shift_preference_service.to_response(preference)


@router.delete("/{preference_id}/unavailable-dates/{day}", response_model=ShiftPreferenceResponse)
async def remove_my_unavailable_date(
    preference_id: UUID,
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ShiftPreferenceResponse:
    await _get_own_preference(db, preference_id, current_user)
    preference: ShiftPreference = await shift_preference_service.remove_unavailable_date(db, preference_id, day)
    await db.commit()
    return shift_preference_service.to_response(preference)

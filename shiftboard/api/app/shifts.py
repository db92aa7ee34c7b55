"""앱 시프트 라우터 — 내 시프트 조회 API.

App Shift Router — The employee's own shifts over a date range.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import get_current_user
from shiftboard.database import get_db
from shiftboard.models.user import User
from shiftboard.schemas.shift import ShiftResponse
from shiftboard.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftResponse])
async def list_my_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: Annotated[date, Query()],
    end_date: Annotated[date, Query()],
) -> list[ShiftResponse]:
    """내 시프트 목록 (My shifts in [start_date, end_date], ordered by date)."""
    shifts = await shift_service.get_user_shifts(db, current_user.id, start_date, end_date)
    return [shift_service.to_response(s) for s in shifts]

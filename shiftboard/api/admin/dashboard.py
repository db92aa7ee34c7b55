"""관리자 대시보드 라우터 — 대시보드 집계 API.

Admin Dashboard Router — Summary, attendance overview and shift overview.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.user import User
from shiftboard.schemas.dashboard import AttendanceOverview, DashboardSummary, ShiftOverview
from shiftboard.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """대시보드 요약 — 다가오는 이벤트와 계절 하이라이트.

    Upcoming events and the latest sakura/azalea/other highlights.
    """
    return await dashboard_service.get_dashboard_summary(db)


@router.get("/attendance-overview", response_model=AttendanceOverview)
async def get_attendance_overview(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
) -> dict:
    """근태 개요 — 기본 최근 7일 (Per-store attendance overview, last 7 days by default)."""
    return await dashboard_service.get_attendance_overview(db, date_from, date_to)


@router.get("/shift-overview", response_model=ShiftOverview)
async def get_shift_overview(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
) -> dict:
    """시프트 개요 — 기본 향후 7일 (Shift overview with events, next 7 days by default)."""
    return await dashboard_service.get_shift_overview(db, date_from, date_to)

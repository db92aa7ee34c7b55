"""관리자 이벤트 라우터 — 지역 이벤트 관리 API.

Admin Event Router — API endpoints for local events that affect store demand.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.event import Event
from shiftboard.models.user import User
from shiftboard.schemas.common import MessageResponse
from shiftboard.schemas.event import EventCreate, EventResponse, EventUpdate
from shiftboard.services.event_service import event_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[EventResponse])
async def list_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    start_date: Annotated[date | None, Query()] = None,
    end_date: Annotated[date | None, Query()] = None,
) -> list[EventResponse]:
    """이벤트 목록 — 기간을 주면 겹치는 이벤트만 (Overlapping events when a range is given)."""
    if start_date is not None and end_date is not None:
        events = await event_service.get_events_by_date_range(db, start_date, end_date)
    else:
        events = await event_service.get_all_events(db)
    return [event_service.event_to_response(e) for e in events]


@router.get("/upcoming", response_model=list[EventResponse])
async def list_upcoming_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    days: Annotated[int | None, Query(ge=0, le=365)] = None,
) -> list[EventResponse]:
    events = await event_service.get_upcoming_events(db, days=days)
    return [event_service.event_to_response(e) for e in events]


@router.get("/stores/{store_id}", response_model=list[EventResponse])
async def list_events_by_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[EventResponse]:
    events = await event_service.get_events_by_store(db, store_id)
    return [event_service.event_to_response(e) for e in events]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    event: Event = await event_service.get_event(db, event_id)
    return event_service.event_to_response(event)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    event: Event = await event_service.save_event(db, data)
    await db.commit()
    return event_service.event_to_response(event)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    data: EventUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EventResponse:
    event: Event = await event_service.update_event(db, event_id, data)
    await db.commit()
    return event_service.event_to_response(event)


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    await event_service.delete_event(db, event_id)
    await db.commit()
    return {"message": "이벤트가 삭제되었습니다 (Event deleted)"}

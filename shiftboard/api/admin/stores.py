"""관리자 매장 라우터 — 매장 및 스킬 요건 관리 API.

Admin Store Router — API endpoints for store management and per-day-category
skill requirements.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.store import Store
from shiftboard.models.user import User
from shiftboard.schemas.common import MessageResponse
from shiftboard.schemas.store import (
    DayCategory,
    SkillRequirement,
    SkillType,
    StoreCreate,
    StoreResponse,
    StoresSummary,
    StoreUpdate,
)
from shiftboard.schemas.employee import SkillLevel
from shiftboard.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[StoreResponse])
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[StoreResponse]:
    stores = await store_service.list_stores(db)
    return [store_service.to_response(s) for s in stores]


@router.get("/summary", response_model=StoresSummary)
async def get_stores_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """매장 요약 — 매장 수, 구별 매장 수, 평일 필요 인원 합계.

    Store summary: count, stores per ward and total weekday headcount.
    """
    return await store_service.get_stores_summary(db)


@router.get("/search", response_model=list[StoreResponse])
async def search_stores_by_requirement(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    day: Annotated[DayCategory, Query()],
    skill: Annotated[SkillType, Query()],
    level: Annotated[SkillLevel, Query()],
    min_count: Annotated[int, Query(ge=0)] = 1,
) -> list[StoreResponse]:
    """요건으로 매장을 검색합니다 (Stores needing at least min_count staff of skill/level on day)."""
    stores = await store_service.get_stores_by_skill_requirement(db, day, skill, level, min_count)
    return [store_service.to_response(s) for s in stores]


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    store: Store = await store_service.get_store(db, store_id)
    return store_service.to_response(store)


@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(
    data: StoreCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    """매장을 생성합니다. 요건을 생략하면 기본 요건 세트가 적용됩니다.

    Create a store. Omitting skill_requirements applies the default set.
    """
    store: Store = await store_service.create_store(db, data)
    await db.commit()
    return store_service.to_response(store)


@router.patch("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: UUID,
    data: StoreUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    store: Store = await store_service.update_store(db, store_id, data)
    await db.commit()
    return store_service.to_response(store)


@router.delete("/{store_id}", response_model=MessageResponse)
async def delete_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    await store_service.delete_store(db, store_id)
    await db.commit()
    return {"message": "매장이 삭제되었습니다 (Store deleted)"}


@router.put("/{store_id}/skill-requirements", response_model=StoreResponse)
async def upsert_skill_requirement(
    store_id: UUID,
    data: SkillRequirement,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    """요일 구분 요건을 교체하거나 추가합니다 (Replace or append the requirement for data.day)."""
    store: Store = await store_service.update_skill_requirement(db, store_id, data)
    await db.commit()
    return store_service.to_response(store)


@router.delete("/{store_id}/skill-requirements/{day}", response_model=StoreResponse)
async def remove_skill_requirement(
    store_id: UUID,
    day: DayCategory,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> StoreResponse:
    store: Store = await store_service.remove_skill_requirement(db, store_id, day)
    await db.commit()
    return store_service.to_response(store)

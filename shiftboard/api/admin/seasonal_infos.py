"""관리자 계절 정보 라우터 — 벚꽃/철쭉 등 계절 정보 관리 API.

Admin Seasonal Info Router — API endpoints for seasonal viewing information.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.event import SeasonalInfo
from shiftboard.models.user import User
from shiftboard.schemas.common import MessageResponse
from shiftboard.schemas.event import (
    AreaInBestViewing,
    SeasonalInfoCreate,
    SeasonalInfoResponse,
    SeasonalInfoUpdate,
    SeasonalType,
)
from shiftboard.services.event_service import event_service
from shiftboard.utils.exceptions import NotFoundError

router: APIRouter = APIRouter()


@router.get("", response_model=list[SeasonalInfoResponse])
async def list_seasonal_infos(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[SeasonalInfoResponse]:
    infos = await event_service.get_all_seasonal_infos(db)
    return [event_service.seasonal_to_response(i) for i in infos]


@router.get("/best-viewing", response_model=list[AreaInBestViewing])
async def list_areas_in_best_viewing(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[dict]:
    """오늘이 최적 관람 기간인 지역 (Areas whose best-viewing period contains today)."""
    return await event_service.get_areas_in_best_viewing_period(db)


@router.get("/latest/{info_type}", response_model=SeasonalInfoResponse)
async def get_latest_seasonal_info(
    info_type: SeasonalType,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SeasonalInfoResponse:
    info: SeasonalInfo | None = await event_service.get_latest_seasonal_info_by_type(db, info_type)
    if info is None:
        raise NotFoundError("계절 정보를 찾을 수 없습니다 (Seasonal info not found)")
    return event_service.seasonal_to_response(info)


@router.post("/external-update", response_model=SeasonalInfoResponse)
async def update_from_external_source(
    data: SeasonalInfoCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SeasonalInfoResponse:
    """외부 소스 데이터로 유형별 최신 정보를 갱신합니다.

    Overwrite the latest record of data.type with externally sourced data,
    creating one if none exists.
    """
    info: SeasonalInfo = await event_service.update_seasonal_info_from_external_source(
        db, data.type, data.name, data.progress, data.areas
    )
    await db.commit()
    return event_service.seasonal_to_response(info)


@router.get("/{info_id}", response_model=SeasonalInfoResponse)
async def get_seasonal_info(
    info_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SeasonalInfoResponse:
    info: SeasonalInfo = await event_service.get_seasonal_info(db, info_id)
    return event_service.seasonal_to_response(info)


@router.post("", response_model=SeasonalInfoResponse, status_code=status.HTTP_201_CREATED)
async def create_seasonal_info(
    data: SeasonalInfoCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SeasonalInfoResponse:
    info: SeasonalInfo = await event_service.save_seasonal_info(db, data)
    await db.commit()
    return event_service.seasonal_to_response(info)


@router.put("/{info_id}", response_model=SeasonalInfoResponse)
async def save_seasonal_info(
    info_id: UUID,
    data: SeasonalInfoCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SeasonalInfoResponse:
    """ID 기준 생성 또는 전체 교체 (Create or fully replace by id)."""
    info: SeasonalInfo = await event_service.save_seasonal_info(db, data, info_id)
    await db.commit()
    return event_service.seasonal_to_response(info)


@router.patch("/{info_id}", response_model=SeasonalInfoResponse)
async def update_seasonal_info(
    info_id: UUID,
    data: SeasonalInfoUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SeasonalInfoResponse:
    info: SeasonalInfo = await event_service.update_seasonal_info(db, info_id, data)
    await db.commit()
    return event_service.seasonal_to_response(info)


@router.delete("/{info_id}", response_model=MessageResponse)
async def delete_seasonal_info(
    info_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    await event_service.delete_seasonal_info(db, info_id)
    await db.commit()
    return {"message": "계절 정보가 삭제되었습니다 (Seasonal info deleted)"}

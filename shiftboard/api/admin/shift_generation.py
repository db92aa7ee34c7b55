"""관리자 시프트 자동 생성 라우터.

Admin Shift Generation Router — Preview the constraint package for a period
and run the external shift generator, optionally saving the result.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.shift import Shift
from shiftboard.models.user import User
from shiftboard.schemas.generation import ConstraintPackage, GenerationRequest, GenerationResponse
from shiftboard.services.shift_generation_service import shift_generation_service
from shiftboard.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.post("/constraints", response_model=ConstraintPackage)
async def preview_constraint_package(
    data: GenerationRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ConstraintPackage:
    """생성기에 전달될 제약 패키지 미리보기 (Constraint package the generator would receive)."""
    return await shift_generation_service.build_constraint_package(
        db, data.start_date, data.end_date, data.options
    )


@router.post("", response_model=GenerationResponse)
async def generate_shifts(
    data: GenerationRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """시프트를 자동 생성합니다.

    Generate planned shifts for [start_date, end_date]. With save=true the
    result is persisted in one batch and the new ids are returned.

    Args:
        data: 생성 요청 (Generation request)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)

    Returns:
        dict: {shifts, ids}

    Raises:
        InvalidGenerationResultError: 생성기 실패 또는 잘못된 출력 (502)
    """
    shifts: list[Shift] = await shift_generation_service.generate_shifts(
        db, data.start_date, data.end_date, data.options
    )
    ids: list[UUID] = []
    if data.save:
        ids = await shift_generation_service.save_generated(db, shifts)
        await db.commit()

    return {
        "shifts": [shift_service.to_response(s) for s in shifts],
        "ids": [str(i) for i in ids],
    }

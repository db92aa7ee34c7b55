"""관리자 직원 라우터 — 직원 프로필 관리 API.

Admin Employee Router — API endpoints for employee profile management.
"""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.api.deps import require_admin
from shiftboard.database import get_db
from shiftboard.models.user import User
from shiftboard.schemas.common import MessageResponse
from shiftboard.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from shiftboard.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    role: Annotated[Literal["admin", "employee"] | None, Query()] = None,
    employment_type: Annotated[Literal["fulltime", "parttime", "temporary"] | None, Query()] = None,
    skill: Annotated[Literal["kitchen", "hall", "sales", "overall"] | None, Query()] = None,
    level: Annotated[Literal["A", "B", "C"] | None, Query()] = None,
) -> list[EmployeeResponse]:
    """직원 목록을 조회합니다.

    List employees ordered by name. Filters: role, employment type, or a
    skill together with its level.
    """
    if skill is not None and level is not None:
        users = await user_service.get_users_by_skill(db, skill, level)
    elif role is not None:
        users = await user_service.get_users_by_role(db, role)
    elif employment_type is not None:
        users = await user_service.get_users_by_employment_type(db, employment_type)
    else:
        users = await user_service.list_users(db)
    return [user_service.to_response(u) for u in users]


@router.get("/{user_id}", response_model=EmployeeResponse)
async def get_employee(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeResponse:
    user: User = await user_service.get_user(db, user_id)
    return user_service.to_response(user)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: EmployeeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeResponse:
    """직원을 등록합니다 (Register an employee profile)."""
    user: User = await user_service.create_user(db, data)
    await db.commit()
    return user_service.to_response(user)


@router.patch("/{user_id}", response_model=EmployeeResponse)
async def update_employee(
    user_id: UUID,
    data: EmployeeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> EmployeeResponse:
    user: User = await user_service.update_user(db, user_id, data)
    await db.commit()
    return user_service.to_response(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_employee(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    await user_service.delete_user(db, user_id)
    await db.commit()
    return {"message": "직원이 삭제되었습니다 (Employee deleted)"}

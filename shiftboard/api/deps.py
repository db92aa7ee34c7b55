"""FastAPI 의존성 주입 모듈 — 인증 및 권한 검사.

FastAPI dependency injection module — Authentication and authorization.
Identity comes from an external auth provider as a bearer JWT; this module
verifies it, loads the employee it names and enforces the admin role.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    3. 페이로드의 "sub" 필드로 DB에서 직원을 조회
       (Employee is fetched from DB using payload "sub" field)

Authorization:
    require_admin — role이 "admin"이 아니면 403 (403 unless role == "admin")
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.database import get_db
from shiftboard.models.user import User
from shiftboard.repositories.user_repository import user_repository
from shiftboard.utils.exceptions import ForbiddenError, UnauthorizedError
from shiftboard.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — Authorization 헤더에서 JWT 토큰 추출
# (Extracts JWT token from Authorization: Bearer <token> header)
security: HTTPBearer = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 직원을 추출합니다.

    Decode JWT from the Authorization header and return the authenticated employee.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        User: 인증된 직원 ORM 인스턴스 (Authenticated employee ORM instance)

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 직원이 없음 (Invalid token or unknown employee)
    """
    try:
        payload: dict = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type")
        user_id: UUID = UUID(payload["sub"])
    except UnauthorizedError:
        raise
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise UnauthorizedError("Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """관리자 권한 검사 의존성 (Allow only employees whose role is "admin")."""
    if current_user.role != "admin":
        raise ForbiddenError()
    return current_user

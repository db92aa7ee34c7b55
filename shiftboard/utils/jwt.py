"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.
Identity and role come from the external auth provider as a bearer token;
this service verifies it and reads the current user from the payload.

JWT Payload Structure:
    {
        "sub": "user_uuid",         # 사용자 ID (User identifier)
        "role": "admin",            # 역할 — "admin" | "employee" (Role name)
        "exp": 1234567890,          # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"            # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from shiftboard.config import settings


def create_access_token(data: dict[str, Any]) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Generate a JWT access token with the given payload data.
    Used by local tooling and tests; production tokens come from the auth provider.

    Args:
        data: JWT 페이로드 데이터, 예: {"sub": user_id, "role": "admin"}
              (JWT payload data)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify a JWT token string.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])

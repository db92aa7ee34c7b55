"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions shared across API domains.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """단순 메시지 응답 스키마 (Simple message response, e.g. after delete)."""

    message: str


class IdListResponse(BaseModel):
    """생성된 ID 목록 응답 (Ids of records created in one batch, in input order)."""

    ids: list[str]

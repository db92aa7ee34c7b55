"""매장 Pydantic 스키마.

Store and skill requirement request/response schemas.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

DayCategory = Literal["weekday", "saturday", "sunday", "holiday"]
SkillType = Literal["kitchen", "hall", "sales"]


class LevelCounts(BaseModel):
    """등급별 필요 인원 (Required headcount per skill level)."""

    A: int = Field(0, ge=0)
    B: int = Field(0, ge=0)
    C: int = Field(0, ge=0)


class SkillRequirement(BaseModel):
    """요일 구분별 스킬 요건.

    Skill requirement for one day-category.

    Attributes:
        day: 요일 구분 (weekday | saturday | sunday | holiday)
        kitchen: 주방 인원 (Kitchen headcount by level)
        hall: 홀 인원 (Hall headcount by level)
        sales: 판매 인원 (Sales headcount by level)
    """

    day: DayCategory
    kitchen: LevelCounts = Field(default_factory=LevelCounts)
    hall: LevelCounts = Field(default_factory=LevelCounts)
    sales: LevelCounts = Field(default_factory=LevelCounts)


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = ""
    phone: str = ""
    # None이면 기본 요건 세트 사용 — None falls back to the default requirement set
    skill_requirements: list[SkillRequirement] | None = None


class StoreUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = None
    phone: str | None = None
    skill_requirements: list[SkillRequirement] | None = None


class StoreResponse(BaseModel):
    id: str
    name: str
    address: str
    phone: str
    skill_requirements: list[SkillRequirement]
    created_at: datetime


class StoresSummary(BaseModel):
    """매장 요약 (Store count, stores per ward and total weekday headcount)."""

    total_stores: int
    stores_by_region: dict[str, int]
    total_weekday_staff_required: int

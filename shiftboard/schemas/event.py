"""이벤트 및 계절 정보 Pydantic 스키마.

Event and seasonal information request/response schemas.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

SeasonalType = Literal["sakura", "azalea", "other"]


# === 이벤트 (Event) ===

class EventCreate(BaseModel):
    """이벤트 생성 요청 스키마 (Event creation; the date range is inclusive)."""

    name: str = Field(..., min_length=1, max_length=255)
    start_date: date
    end_date: date
    affected_stores: list[str] = Field(default_factory=list)
    customer_prediction: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_range(self) -> "EventCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    affected_stores: list[str] | None = None
    customer_prediction: int | None = Field(None, ge=0)


class EventResponse(BaseModel):
    id: str
    name: str
    start_date: date
    end_date: date
    affected_stores: list[str]
    customer_prediction: int


# === 계절 정보 (Seasonal Info) ===

class BestViewingPeriod(BaseModel):
    start: date
    end: date


class SeasonalArea(BaseModel):
    """지역별 계절 상태.

    Per-area seasonal status with an optional best-viewing period.

    Attributes:
        name: 지역 이름 (Area name)
        status: 상태 (e.g. "budding", "blooming", "full bloom")
        best_viewing_period: 최적 관람 기간, 선택 (Optional inclusive best-viewing period)
    """

    name: str
    status: str
    best_viewing_period: BestViewingPeriod | None = None


class SeasonalInfoCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: SeasonalType
    progress: float = Field(0, ge=0)
    areas: list[SeasonalArea] = Field(default_factory=list)


class SeasonalInfoUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    type: SeasonalType | None = None
    progress: float | None = Field(None, ge=0)
    areas: list[SeasonalArea] | None = None


class SeasonalInfoResponse(BaseModel):
    id: str
    name: str
    type: str
    progress: float
    areas: list[SeasonalArea]
    last_updated: datetime


class AreaInBestViewing(BaseModel):
    """최적 관람 기간인 지역 (Area currently in its best-viewing period)."""

    info_id: str
    info_name: str
    type: str
    area: SeasonalArea

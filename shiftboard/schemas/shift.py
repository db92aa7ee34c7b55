"""시프트 및 시프트 희망 Pydantic 스키마.

Shift and shift preference request/response schemas.
Times are "HH:MM" wall-clock strings; dates are ISO calendar dates.
"""

import datetime as dt
from uuid import UUID
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TIME_PATTERN: str = r"^([01]?\d|2[0-3]):[0-5]\d$"

Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


# === 시프트 (Shift) ===

class ShiftCreate(BaseModel):
    """시프트 생성 요청 스키마.

    Shift creation request schema. An end time earlier than the start time
    means the shift crosses midnight.

    Attributes:
        user_id: 직원 UUID (Employee identifier)
        store_id: 매장 UUID (Store identifier)
        date: 근무 날짜 (Calendar date)
        start_time: 시작 시각 "HH:MM" (Start time)
        end_time: 종료 시각 "HH:MM" (End time)
    """

    user_id: UUID
    store_id: UUID
    date: dt.date
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    status: Literal["planned", "completed"] = "planned"
    note: str | None = None


class ShiftUpdate(BaseModel):
    """시프트 수정 요청 스키마 (부분 업데이트 — Partial update)."""

    user_id: UUID | None = None
    store_id: UUID | None = None
    date: dt.date | None = None
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    note: str | None = None


class ShiftBatchCreate(BaseModel):
    """시프트 일괄 생성 요청 (All-or-nothing batch of shift specs)."""

    shifts: list[ShiftCreate] = Field(..., min_length=1)


class ShiftResponse(BaseModel):
    id: str | None  # 미저장 생성 결과는 id 없음 (Unsaved generated shifts have no id)
    user_id: str
    store_id: str
    date: dt.date
    start_time: str
    end_time: str
    status: str
    note: str | None = None
    duration_minutes: int


class ShiftStatistics(BaseModel):
    """기간 내 시프트 통계 (Shift counts per store and per day over a range)."""

    total_shifts: int
    shifts_per_store: dict[str, int]
    shifts_per_day: dict[str, int]


# === 시프트 희망 (Shift Preference) ===

class ShiftPreferenceSave(BaseModel):
    """시프트 희망 저장 요청 스키마 — (직원, 연, 월) 기준 upsert.

    Shift preference save request; upserts on (user, year, month).

    Attributes:
        user_id: 직원 UUID (Employee, admin-side only; employees save their own)
        year: 연도 (Year)
        month: 월 1~12 (Month, 1-based)
        desired_days_per_week: 주당 희망 근무일수 (Desired days per week)
        preferred_weekdays: 희망 요일 (Preferred weekday names)
        unavailable_dates: 근무 불가일 (Unavailable calendar dates)
        notes: 메모 (Free-text notes)
    """

    user_id: str | None = None
    year: int = Field(..., ge=2000, le=2100)
    month: int = Field(..., ge=1, le=12)
    desired_days_per_week: int = Field(5, ge=0, le=7)
    preferred_weekdays: list[Weekday] = Field(default_factory=list)
    unavailable_dates: list[dt.date] = Field(default_factory=list)
    notes: str = ""

    @field_validator("unavailable_dates")
    @classmethod
    def dedupe_dates(cls, value: list[dt.date]) -> list[dt.date]:
        # 날짜 단위 중복 제거, 순서 유지 — Deduplicate by calendar day, keeping order
        return list(dict.fromkeys(value))


class ShiftPreferenceUpdate(BaseModel):
    """시프트 희망 수정 요청 스키마 (부분 업데이트 — Partial update)."""

    desired_days_per_week: int | None = Field(None, ge=0, le=7)
    preferred_weekdays: list[Weekday] | None = None
    unavailable_dates: list[dt.date] | None = None
    notes: str | None = None

    @field_validator("unavailable_dates")
    @classmethod
    def dedupe_dates(cls, value: list[dt.date] | None) -> list[dt.date] | None:
        return None if value is None else list(dict.fromkeys(value))


class UnavailableDateRequest(BaseModel):
    date: dt.date


class ShiftPreferenceResponse(BaseModel):
    id: str
    user_id: str
    year: int
    month: int
    desired_days_per_week: int
    preferred_weekdays: list[str]
    unavailable_dates: list[str]
    notes: str
    submitted_at: dt.datetime


class UserSubmission(BaseModel):
    user_id: str
    submitted: bool


class SubmissionStatus(BaseModel):
    """월별 희망 제출 현황 (Submission status of employees for a month)."""

    total_users: int
    submitted_users: int
    user_status: list[UserSubmission]

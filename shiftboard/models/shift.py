"""시프트 및 시프트 희망 SQLAlchemy ORM 모델 정의.

Shift and shift preference SQLAlchemy ORM model definitions.

Tables:
    - shifts: 근무 시프트 (One employee at one store on one calendar date)
    - shift_preferences: 월별 시프트 희망 (One record per employee per year/month)
"""

import uuid
import datetime as dt

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.database import Base


class Shift(Base):
    """시프트 모델.

    Shift model — One employee, one store, one calendar date.
    start_time/end_time are wall-clock "HH:MM" strings; they are combined
    with `date` for duration math, and end < start means the shift crosses midnight.

    Status Flow:
        planned → completed (explicit completion only)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 직원 FK (Assigned employee)
        store_id: 매장 FK (Store)
        date: 근무 날짜 (Calendar date)
        start_time: 시작 시각 "HH:MM" (Start wall-clock time)
        end_time: 종료 시각 "HH:MM" (End wall-clock time)
        status: 상태 (planned | completed)
        note: 메모 (Optional note)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "shifts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    # 상태 — "planned" → "completed"
    status: Mapped[str] = mapped_column(String(20), default="planned")
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc), onupdate=lambda: dt.datetime.now(dt.timezone.utc))

    __table_args__ = (
        Index("ix_shifts_date_store", "date", "store_id"),
        Index("ix_shifts_user_date", "user_id", "date"),
    )


class ShiftPreference(Base):
    """시프트 희망 모델 — 직원별 월 1건.

    Shift preference model — One record per (employee, year, month).
    submitted_at is refreshed on every mutation.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 직원 FK (Employee)
        year: 연도 (Year)
        month: 월, 1부터 시작 (Month, 1-based)
        desired_days_per_week: 주당 희망 근무일수 (Desired days per week)
        preferred_weekdays: 희망 요일 목록 (Preferred weekday names, e.g. ["monday", "friday"])
        unavailable_dates: 근무 불가일 목록 (ISO calendar dates, unique by day)
        notes: 메모 (Free-text notes)
        submitted_at: 제출 일시 (Submission timestamp, refreshed on each mutation)

    Constraints:
        uq_shift_preference_user_period: 직원+연+월 중복 불가
            (One preference per employee per month)
    """

    __tablename__ = "shift_preferences"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    desired_days_per_week: Mapped[int] = mapped_column(Integer, default=5)
    preferred_weekdays: Mapped[list[str]] = mapped_column(JSON, default=list)
    unavailable_dates: Mapped[list[str]] = mapped_column(JSON, default=list)
    notes: Mapped[str] = mapped_column(Text, default="")
    submitted_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "year", "month", name="uq_shift_preference_user_period"),
    )

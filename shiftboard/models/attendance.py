"""근태 관리 SQLAlchemy ORM 모델 정의.

Attendance management SQLAlchemy ORM model definitions.

Tables:
    - attendances: 근태 기록 (One record per employee per calendar date)
"""

import uuid
import datetime as dt
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.database import Base


class Attendance(Base):
    """근태 기록 모델 — 일별 직원 출퇴근 기록.

    Attendance record model — Daily employee clock-in/out record.
    Clock and break instants are naive wall-clock datetimes in the business
    timezone; `date` is the clock-in instant truncated to the day.

    State flow (derived from the fields, not stored):
        clocked_in → on_break ⇄ clocked_in → clocked_out (terminal)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 직원 FK (Employee who clocked in)
        store_id: 매장 FK (Store where the employee clocked in)
        date: 근무 날짜 (Calendar date of the clock-in)
        clock_in_time: 출근 시각 (Clock-in instant)
        clock_out_time: 퇴근 시각 (Clock-out instant, optional)
        break_times: 휴식 목록 (Ordered breaks: [{"start_time": iso, "end_time": iso | None}])
        total_work_hours: 총 근무 시간 (Worked hours net of breaks, set on clock-out)
        status: 판정 (normal | late | early)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Constraints:
        uq_attendance_user_date: 동일 직원+날짜 중복 불가
            (One attendance record per employee per day)
    """

    __tablename__ = "attendances"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    # 현지 벽시계 시각 (타임존 없음) — Business-local wall clock, stored without tz
    clock_in_time: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)
    clock_out_time: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    break_times: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    total_work_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    # 판정 — "normal" | "late" | "early"
    status: Mapped[str] = mapped_column(String(20), default="normal")
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc), onupdate=lambda: dt.datetime.now(dt.timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
    )

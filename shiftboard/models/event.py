"""이벤트 및 계절 정보 SQLAlchemy ORM 모델 정의.

Event and seasonal marketing information SQLAlchemy ORM model definitions.
Both are read-only demand signals for scheduling and dashboard content.

Tables:
    - events: 이벤트 (Local events with an inclusive date range)
    - seasonal_infos: 계절 정보 (Seasonal viewing information: sakura, azalea, other)
"""

import uuid
import datetime as dt
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.database import Base


class Event(Base):
    """이벤트 모델.

    Event model — Name, inclusive date range, affected store ids and a
    numeric customer prediction.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 이벤트 이름 (Event name)
        start_date: 시작일 (Inclusive start date)
        end_date: 종료일 (Inclusive end date)
        affected_stores: 영향 매장 ID 목록 (Affected store ids as strings)
        customer_prediction: 예상 고객 수 (Predicted customers)
    """

    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    affected_stores: Mapped[list[str]] = mapped_column(JSON, default=list)
    customer_prediction: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))


class SeasonalInfo(Base):
    """계절 정보 모델.

    Seasonal information model — Progress metric and per-area status with an
    optional best-viewing period. last_updated is refreshed on every save.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 이름 (Display name)
        type: 유형 (sakura | azalea | other)
        progress: 진행도 (Progress metric, e.g. bloom percentage)
        areas: 지역 목록 ([{"name", "status", "best_viewing_period": {"start", "end"} | None}])
        last_updated: 최종 갱신 일시 (Last update timestamp)
    """

    __tablename__ = "seasonal_infos"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 유형 — "sakura" | "azalea" | "other"
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    progress: Mapped[float] = mapped_column(Float, default=0)
    areas: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    last_updated: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))

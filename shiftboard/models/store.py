"""매장 관련 SQLAlchemy ORM 모델 정의.

Store-related SQLAlchemy ORM model definitions.

Tables:
    - stores: 매장 (Stores)
    - store_skill_requirements: 요일 구분별 스킬 인원 요건
      (Required headcount per skill type and level, per day-category)
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftboard.database import Base


class Store(Base):
    """매장 모델.

    Store model — Identity, address, contact, and a set of skill requirements
    keyed by day-category.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 매장 이름 (Store name)
        address: 주소 (Address)
        phone: 전화번호 (Contact phone)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        skill_requirements: 요일 구분별 스킬 요건 (Skill requirements, eager-loaded)
    """

    __tablename__ = "stores"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), default="")
    phone: Mapped[str] = mapped_column(String(50), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 비동기 세션에서 지연 로딩 불가 — selectin으로 항상 함께 로드
    # Lazy loading is unavailable under AsyncSession, so always load with selectin
    skill_requirements = relationship(
        "StoreSkillRequirement",
        back_populates="store",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="StoreSkillRequirement.day",
    )


class StoreSkillRequirement(Base):
    """요일 구분별 스킬 요건 모델.

    Skill requirement for one store and one day-category.
    Each skill type maps level → required headcount, e.g. {"A": 1, "B": 2, "C": 0}.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        store_id: 매장 FK (Owning store)
        day: 요일 구분 (weekday | saturday | sunday | holiday)
        kitchen: 주방 인원 요건 (Kitchen headcount by level)
        hall: 홀 인원 요건 (Hall headcount by level)
        sales: 판매 인원 요건 (Sales headcount by level)

    Constraints:
        uq_skill_requirement_store_day: 매장당 요일 구분별 1건
            (At most one requirement per day-category per store)
    """

    __tablename__ = "store_skill_requirements"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    day: Mapped[str] = mapped_column(String(20), nullable=False)
    kitchen: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    hall: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    sales: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    __table_args__ = (
        UniqueConstraint("store_id", "day", name="uq_skill_requirement_store_day"),
    )

    store = relationship("Store", back_populates="skill_requirements")

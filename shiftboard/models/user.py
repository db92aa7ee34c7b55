"""직원(사용자) SQLAlchemy ORM 모델 정의.

Employee (user) SQLAlchemy ORM model definition.
Identity and role are owned by the external auth provider; this table keeps
the scheduling profile: employment type, per-category skill levels and
desired work days.

Tables:
    - users: 직원 프로필 (Employee profiles, role = "admin" | "employee")
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from shiftboard.database import Base


def default_skills() -> dict[str, str]:
    """기본 스킬 — 모든 분야 C (Default skills: every category at level C)."""
    return {"kitchen": "C", "hall": "C", "sales": "C", "overall": "C"}


class User(Base):
    """직원 모델 — 스케줄링에 필요한 직원 프로필.

    Employee model — Scheduling profile for one employee.
    Created at onboarding, mutated by profile edits. Deletion removes the
    record (no soft-delete state is modelled).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 이름 (Full name)
        nickname: 별명 (Display nickname)
        email: 이메일 (Email address)
        phone: 전화번호 (Phone number)
        address: 주소 (Home address)
        position: 직책 (Job title)
        employment_type: 고용 형태 (fulltime | parttime | temporary)
        join_date: 입사일 (Join date)
        desired_work_days: 주당 희망 근무일수 (Desired work days per week)
        skills: 분야별 스킬 레벨 (Skill level per category: kitchen/hall/sales/overall → A/B/C)
        special_notes: 특이사항 (Free-text notes)
        profile_image: 프로필 이미지 URL (Profile image URL, optional)
        role: 역할 (admin | employee)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 직원 고유 식별자 — Employee unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    nickname: Mapped[str] = mapped_column(String(100), default="")
    email: Mapped[str] = mapped_column(String(255), default="")
    phone: Mapped[str] = mapped_column(String(50), default="")
    address: Mapped[str] = mapped_column(String(500), default="")
    position: Mapped[str] = mapped_column(String(100), default="")
    # 고용 형태 — "fulltime" | "parttime" | "temporary"
    employment_type: Mapped[str] = mapped_column(String(20), default="parttime")
    join_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    # 주당 희망 근무일수 — Desired work days per week (0..7)
    desired_work_days: Mapped[int] = mapped_column(Integer, default=0)
    # 스킬 레벨 — {"kitchen": "A", "hall": "B", "sales": "C", "overall": "B"}
    skills: Mapped[dict[str, Any]] = mapped_column(JSON, default=default_skills)
    special_notes: Mapped[str] = mapped_column(Text, default="")
    profile_image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    # 역할 — "admin" | "employee"
    role: Mapped[str] = mapped_column(String(20), default="employee", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

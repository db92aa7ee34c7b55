"""직원 Pydantic 스키마.

Employee request/response schemas.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

SkillLevel = Literal["A", "B", "C"]
EmploymentType = Literal["fulltime", "parttime", "temporary"]


class EmployeeSkills(BaseModel):
    """직원 스킬 등급 (Skill grade per area; A is highest)."""

    kitchen: SkillLevel = "C"
    hall: SkillLevel = "C"
    sales: SkillLevel = "C"
    overall: SkillLevel = "C"


class EmployeeCreate(BaseModel):
    """직원 생성 요청 스키마.

    Employee creation request schema.

    Attributes:
        name: 이름 (Full name)
        employment_type: 고용 형태 (fulltime | parttime | temporary)
        desired_work_days: 주당 희망 근무일수 (Desired work days per week)
        skills: 스킬 등급 (Skill grades)
        role: 역할 (admin | employee)
    """

    name: str = Field(..., min_length=1, max_length=255)
    nickname: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    position: str | None = None
    employment_type: EmploymentType = "parttime"
    join_date: date | None = None
    desired_work_days: int = Field(5, ge=0, le=7)
    skills: EmployeeSkills = Field(default_factory=EmployeeSkills)
    special_notes: str | None = None
    profile_image: str | None = None
    role: Literal["admin", "employee"] = "employee"


class EmployeeUpdate(BaseModel):
    """직원 수정 요청 스키마 (부분 업데이트 — Partial update)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    nickname: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    position: str | None = None
    employment_type: EmploymentType | None = None
    join_date: date | None = None
    desired_work_days: int | None = Field(None, ge=0, le=7)
    skills: EmployeeSkills | None = None
    special_notes: str | None = None
    profile_image: str | None = None
    role: Literal["admin", "employee"] | None = None


class EmployeeResponse(BaseModel):
    id: str
    name: str
    nickname: str | None
    email: str | None
    phone: str | None
    address: str | None
    position: str | None
    employment_type: str
    join_date: date | None
    desired_work_days: int
    skills: dict[str, str]
    special_notes: str | None
    profile_image: str | None
    role: str
    created_at: datetime

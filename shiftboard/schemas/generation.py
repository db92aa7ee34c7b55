"""시프트 자동 생성 Pydantic 스키마.

Shift generation schemas: the request options, the constraint package sent
to the external generator, and the validated generator result.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from shiftboard.schemas.shift import TIME_PATTERN, ShiftResponse


class GenerationOptions(BaseModel):
    """생성 옵션 (Generation toggles forwarded to the generator as-is)."""

    prioritize_employee_preferences: bool = True
    distribute_shifts_evenly: bool = True
    consider_skill_requirements: bool = True


class GenerationRequest(BaseModel):
    """시프트 생성 요청 스키마.

    Attributes:
        start_date: 시작일, 포함 (Inclusive start date)
        end_date: 종료일, 포함 (Inclusive end date)
        options: 생성 옵션 (Generation options)
        save: True이면 생성 결과를 일괄 저장 (Persist the result in one batch)
    """

    start_date: date
    end_date: date
    options: GenerationOptions = Field(default_factory=GenerationOptions)
    save: bool = False

    @model_validator(mode="after")
    def check_range(self) -> "GenerationRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class RelationshipConstraint(BaseModel):
    """직원 간 관계 제약 (Pair of employees that should not share a shift, with a reason)."""

    employee1_id: str
    employee2_id: str
    reason: str = ""


class ConstraintPackage(BaseModel):
    """생성기에 전달되는 제약 패키지.

    Constraint package handed to the shift generator. Dates are "YYYY-MM-DD".
    """

    period: dict[str, str]
    employees: list[dict]
    stores: list[dict]
    preferences: list[dict]
    events: list[dict]
    relationship_constraints: list[RelationshipConstraint]
    options: GenerationOptions


class GeneratedShift(BaseModel):
    user_id: UUID
    store_id: UUID
    date: date
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)


class GenerationResult(BaseModel):
    """생성기 결과 — {"shifts": [...]} 형식 (Generator output shape)."""

    shifts: list[GeneratedShift]


class GenerationResponse(BaseModel):
    """시프트 생성 응답 — 저장하지 않은 경우 ids는 비어 있음.

    Generated shifts; `ids` is filled only when the request asked to save.
    """

    shifts: list[ShiftResponse]
    ids: list[str] = Field(default_factory=list)

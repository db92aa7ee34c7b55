"""시프트 희망 서비스 — 직원별 월간 시프트 희망 관리.

Shift Preference Service — Monthly shift preferences per employee, one record
per (employee, year, month). Saving upserts on that key and every mutation
refreshes submitted_at. Unavailable dates are compared by calendar day.
"""

from datetime import date, datetime, timezone
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.shift import ShiftPreference
from shiftboard.models.user import User
from shiftboard.repositories.shift_preference_repository import shift_preference_repository
from shiftboard.repositories.user_repository import user_repository
from shiftboard.schemas.shift import ShiftPreferenceResponse, ShiftPreferenceSave, ShiftPreferenceUpdate
from shiftboard.utils.date_utils import format_date
from shiftboard.utils.exceptions import DuplicateError, NotFoundError

# 빈 희망의 기본 요일 — Default weekdays for an empty preference
DEFAULT_PREFERRED_WEEKDAYS: tuple[str, ...] = ("monday", "tuesday", "wednesday", "thursday", "friday")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ShiftPreferenceService:
    """시프트 희망 관련 비즈니스 로직을 처리하는 서비스.

    Service handling shift preference business logic.
    """

    def to_response(self, preference: ShiftPreference) -> ShiftPreferenceResponse:
        return ShiftPreferenceResponse(
            id=str(preference.id),
            user_id=str(preference.user_id),
            year=preference.year,
            month=preference.month,
            desired_days_per_week=preference.desired_days_per_week,
            preferred_weekdays=list(preference.preferred_weekdays or []),
            unavailable_dates=list(preference.unavailable_dates or []),
            notes=preference.notes or "",
            submitted_at=preference.submitted_at,
        )

    async def get_preference(self, db: AsyncSession, preference_id: UUID) -> ShiftPreference:
        """시프트 희망 단건을 조회합니다.

        Raises:
            NotFoundError: 희망이 없을 때 (Preference not found)
        """
        preference: ShiftPreference | None = await shift_preference_repository.get_by_id(db, preference_id)
        if preference is None:
            raise NotFoundError("시프트 희망을 찾을 수 없습니다 (Shift preference not found)")
        return preference

    async def get_user_preference(
        self,
        db: AsyncSession,
        user_id: UUID,
        year: int,
        month: int,
    ) -> ShiftPreference | None:
        return await shift_preference_repository.get_for_user_period(db, user_id, year, month)

    async def get_all_preferences_for_month(
        self,
        db: AsyncSession,
        year: int,
        month: int,
    ) -> Sequence[ShiftPreference]:
        return await shift_preference_repository.get_for_month(db, year, month)

    async def save_preference(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: ShiftPreferenceSave,
    ) -> ShiftPreference:
        """시프트 희망을 저장합니다 — (직원, 연, 월) 기준 upsert.

        Query-then-upsert on (user, year, month): an existing record for the
        period is overwritten, otherwise a new one is created. submitted_at is
        refreshed either way.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 직원 UUID (Employee UUID)
            data: 희망 데이터 (Preference data)

        Returns:
            ShiftPreference: 저장된 희망 (Saved preference)

        Raises:
            NotFoundError: 직원이 없을 때 (Employee not found)
            DuplicateError: 동시 저장으로 고유 제약 위반 시 (Lost a concurrent insert race)
        """
        if await user_repository.get_by_id(db, user_id) is None:
            raise NotFoundError("직원을 찾을 수 없습니다 (Employee not found)")

        values: dict[str, Any] = {
            "desired_days_per_week": data.desired_days_per_week,
            "preferred_weekdays": list(data.preferred_weekdays),
            "unavailable_dates": [format_date(d) for d in data.unavailable_dates],
            "notes": data.notes,
            "submitted_at": _now(),
        }

        existing: ShiftPreference | None = await shift_preference_repository.get_for_user_period(
            db, user_id, data.year, data.month
        )
        if existing is not None:
            return await shift_preference_repository.update(db, existing.id, values)

        try:
            return await shift_preference_repository.create(
                db, {"user_id": user_id, "year": data.year, "month": data.month, **values}
            )
        except IntegrityError as exc:
            await db.rollback()
            raise DuplicateError(
                "해당 월의 시프트 희망이 이미 있습니다 (Shift preference already exists for this month)"
            ) from exc

    async def update_preference(
        self,
        db: AsyncSession,
        preference_id: UUID,
        data: ShiftPreferenceUpdate,
    ) -> ShiftPreference:
        """시프트 희망을 부분 수정합니다 (Partial update; submitted_at is refreshed).

        Raises:
            NotFoundError: 희망이 없을 때 (Preference not found)
        """
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        if update_data.get("unavailable_dates") is not None:
            update_data["unavailable_dates"] = [format_date(d) for d in update_data["unavailable_dates"]]
        update_data["submitted_at"] = _now()

        preference: ShiftPreference | None = await shift_preference_repository.update(db, preference_id, update_data)
        if preference is None:
            raise NotFoundError("시프트 희망을 찾을 수 없습니다 (Shift preference not found)")
        return preference

    async def delete_preference(self, db: AsyncSession, preference_id: UUID) -> None:
        if not await shift_preference_repository.delete(db, preference_id):
            raise NotFoundError("시프트 희망을 찾을 수 없습니다 (Shift preference not found)")

    async def create_empty_preference(
        self,
        db: AsyncSession,
        user_id: UUID,
        year: int,
        month: int,
    ) -> ShiftPreference:
        """기본값으로 빈 시프트 희망을 생성합니다.

        Create (or reset) the period's preference with the defaults:
        5 days per week, monday–friday, no unavailable dates, empty notes.
        """
        return await self.save_preference(
            db,
            user_id,
            ShiftPreferenceSave(
                year=year,
                month=month,
                desired_days_per_week=5,
                preferred_weekdays=list(DEFAULT_PREFERRED_WEEKDAYS),
            ),
        )

    async def add_unavailable_date(
        self,
        db: AsyncSession,
        preference_id: UUID,
        day: date,
    ) -> ShiftPreference:
        """근무 불가일을 추가합니다. 같은 날짜가 있으면 변경하지 않습니다.

        Add an unavailable calendar date. A no-op (submitted_at untouched)
        when that day is already present.

        Raises:
            NotFoundError: 희망이 없을 때 (Preference not found)
        """
        preference: ShiftPreference = await self.get_preference(db, preference_id)
        dates: list[str] = list(preference.unavailable_dates or [])
        day_str: str = format_date(day)
        if day_str in dates:
            return preference

        dates.append(day_str)
        preference.unavailable_dates = dates
        preference.submitted_at = _now()
        await db.flush()
        await db.refresh(preference)
        return preference

    async def remove_unavailable_date(
        self,
        db: AsyncSession,
        preference_id: UUID,
        day: date,
    ) -> ShiftPreference:
        """근무 불가일을 삭제합니다 (Remove every entry on that calendar day; submitted_at is refreshed).

        Raises:
            NotFoundError: 희망이 없을 때 (Preference not found)
        """
        preference: ShiftPreference = await self.get_preference(db, preference_id)
        day_str: str = format_date(day)
        preference.unavailable_dates = [d for d in preference.unavailable_dates or [] if d != day_str]
        preference.submitted_at = _now()
        await db.flush()
        await db.refresh(preference)
        return preference

    async def get_submission_status_for_month(
        self,
        db: AsyncSession,
        year: int,
        month: int,
    ) -> dict:
        """월별 희망 제출 현황을 계산합니다.

        Cross-reference the employee roster (role = "employee") with the
        month's preference records.

        Returns:
            dict: {total_users, submitted_users, user_status: [{user_id, submitted}]}
        """
        employees: Sequence[User] = await user_repository.get_ordered(db, role="employee")
        preferences: Sequence[ShiftPreference] = await shift_preference_repository.get_for_month(db, year, month)
        submitted_ids: set[UUID] = {p.user_id for p in preferences}

        user_status: list[dict[str, Any]] = [
            {"user_id": str(u.id), "submitted": u.id in submitted_ids} for u in employees
        ]
        return {
            "total_users": len(employees),
            "submitted_users": sum(1 for s in user_status if s["submitted"]),
            "user_status": user_status,
        }


# 싱글턴 인스턴스 — Singleton instance
shift_preference_service: ShiftPreferenceService = ShiftPreferenceService()

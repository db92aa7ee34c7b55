"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for schema creation and
relationship resolution.

Modules:
    user: 직원 프로필 (Employee profiles)
    store: 매장 및 스킬 요건 (Stores and skill requirements)
    shift: 시프트 및 시프트 희망 (Shifts and shift preferences)
    attendance: 근태 기록 (Attendance records with breaks)
    event: 이벤트 및 계절 정보 (Events and seasonal information)
"""

from shiftboard.models.user import User
from shiftboard.models.store import Store, StoreSkillRequirement
from shiftboard.models.shift import Shift, ShiftPreference
from shiftboard.models.attendance import Attendance
from shiftboard.models.event import Event, SeasonalInfo

__all__ = [
    "User",
    "Store", "StoreSkillRequirement",
    "Shift", "ShiftPreference",
    "Attendance",
    "Event", "SeasonalInfo",
]

"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers (Master data):
    - employees: 직원 관리 (Employee management)
    - stores: 매장 및 스킬 요건 관리 (Store & skill requirement management)

Included routers (Scheduling):
    - shifts: 시프트 관리 (Shift management)
    - shift_preferences: 월별 시프트 희망 관리 (Monthly shift preferences)
    - shift_generation: 시프트 자동 생성 (Shift generation)

Included routers (Attendance):
    - attendances: 근태 기록 관리 (Attendance record management)

Included routers (Events & Dashboard):
    - events: 지역 이벤트 관리 (Local event management)
    - seasonal_infos: 계절 정보 관리 (Seasonal info management)
    - dashboard: 대시보드 집계 (Dashboard aggregation)
"""

from fastapi import APIRouter

# Master data 라우터 임포트
from shiftboard.api.admin.employees import router as employees_router
from shiftboard.api.admin.stores import router as stores_router

# Scheduling 라우터 임포트
from shiftboard.api.admin.shifts import router as shifts_router
from shiftboard.api.admin.shift_preferences import router as shift_preferences_router
from shiftboard.api.admin.shift_generation import router as shift_generation_router

# Attendance 라우터 임포트
from shiftboard.api.admin.attendances import router as attendances_router

# Events & Dashboard 라우터 임포트
from shiftboard.api.admin.events import router as events_router
from shiftboard.api.admin.seasonal_infos import router as seasonal_infos_router
from shiftboard.api.admin.dashboard import router as dashboard_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# Master data 라우터 등록 — Register master data routers
# ---------------------------------------------------------------------------
admin_router.include_router(employees_router, prefix="/employees", tags=["Employees"])
admin_router.include_router(stores_router, prefix="/stores", tags=["Stores"])

# ---------------------------------------------------------------------------
# Scheduling 라우터 등록 — Register scheduling routers
# ---------------------------------------------------------------------------
admin_router.include_router(shifts_router, prefix="/shifts", tags=["Shifts"])
admin_router.include_router(shift_preferences_router, prefix="/shift-preferences", tags=["Shift Preferences"])
admin_router.include_router(shift_generation_router, prefix="/shift-generation", tags=["Shift Generation"])

# ---------------------------------------------------------------------------
# Attendance 라우터 등록 — Register attendance routers
# ---------------------------------------------------------------------------
admin_router.include_router(attendances_router, prefix="/attendances", tags=["Attendances"])

# ---------------------------------------------------------------------------
# Events & Dashboard 라우터 등록 — Register event and dashboard routers
# ---------------------------------------------------------------------------
admin_router.include_router(events_router, prefix="/events", tags=["Events"])
admin_router.include_router(seasonal_infos_router, prefix="/seasonal-infos", tags=["Seasonal Info"])
admin_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])

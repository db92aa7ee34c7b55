"""앱 API 라우터 패키지 — 모든 앱(직원용) 엔드포인트 통합.

App API Router package — Aggregates all app-facing (employee) endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - attendances: 내 근태 (My attendance: clock-in/out, breaks, today, history)
    - shifts: 내 시프트 (My shifts)
    - shift_preferences: 내 시프트 희망 (My monthly shift preference)
"""

from fastapi import APIRouter

from shiftboard.api.app.attendances import router as attendance_router
from shiftboard.api.app.shifts import router as shifts_router
from shiftboard.api.app.shift_preferences import router as shift_preferences_router

app_router: APIRouter = APIRouter()

# 내 근태: /my/attendance 하위 (My attendance)
app_router.include_router(attendance_router, prefix="/my/attendance", tags=["My Attendance"])
# 내 시프트: /my/shifts 하위 (My shifts)
app_router.include_router(shifts_router, prefix="/my/shifts", tags=["My Shifts"])
# 내 시프트 희망: /my/shift-preferences 하위 (My shift preference)
app_router.include_router(shift_preferences_router, prefix="/my/shift-preferences", tags=["My Shift Preferences"])

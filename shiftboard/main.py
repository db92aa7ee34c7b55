"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and router
registration for the shift scheduling and attendance service.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shiftboard.config import settings
from shiftboard.middleware.axiom_logging import AxiomLoggingMiddleware
from shiftboard.utils.event_logger import log_event
from shiftboard.utils.exceptions import StoreFailureError

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def store_failure_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """저장소 오류를 503으로 변환합니다.

    Map any unhandled database error to StoreFailureError (503). The
    operation is not retried.
    """
    error: StoreFailureError = StoreFailureError()
    log_event("store.failure", path=request.url.path, method=request.method, error=type(exc).__name__)
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
# admin_router: 직원/매장/시프트/희망/생성/근태/이벤트/대시보드
# app_router: 내 근태, 내 시프트, 내 시프트 희망
from shiftboard.api.admin import admin_router  # noqa: E402
from shiftboard.api.app import app_router  # noqa: E402

app.include_router(admin_router, prefix="/api/v1/admin")
app.include_router(app_router, prefix="/api/v1/app")

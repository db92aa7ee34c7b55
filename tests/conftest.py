"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory aiosqlite DB, session, and httpx client fixtures.
Each test gets a fresh schema on a single shared connection (StaticPool).
"""

import datetime as dt
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from shiftboard.database import Base, get_db
from shiftboard.main import app
from shiftboard.models import *  # noqa: F401,F403 — register all models with metadata
from shiftboard.utils.jwt import create_access_token

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 새로 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def admin_user(db: AsyncSession):
    """관리자를 생성합니다."""
    from shiftboard.models.user import User
    user = User(name="Admin Tanaka", role="admin", employment_type="fulltime", desired_work_days=5)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def employee(db: AsyncSession):
    """직원을 생성합니다."""
    from shiftboard.models.user import User
    user = User(
        name="Sato Hanako",
        role="employee",
        employment_type="parttime",
        desired_work_days=4,
        skills={"kitchen": "A", "hall": "B", "sales": "C", "overall": "B"},
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def other_employee(db: AsyncSession):
    """두 번째 직원을 생성합니다."""
    from shiftboard.models.user import User
    user = User(name="Suzuki Ichiro", role="employee", employment_type="fulltime", desired_work_days=5)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def store(db: AsyncSession):
    """테스트 매장을 생성합니다 (기본 요건 포함)."""
    from shiftboard.schemas.store import StoreCreate
    from shiftboard.services.store_service import store_service
    s = await store_service.create_store(
        db, StoreCreate(name="Kyoto Sanjo", address="京都府京都市中京区三条通1-1", phone="075-000-0000")
    )
    await db.commit()
    return s


class FixedClock:
    """고정 시각 시계 — 테스트에서 현재 시각을 제어합니다."""

    def __init__(self, now: dt.datetime) -> None:
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now


def make_token(user) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id), "role": user.role})


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


@pytest.fixture
def employee_token(employee) -> str:
    return make_token(employee)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}

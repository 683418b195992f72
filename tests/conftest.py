"""테스트 인프라 — 테스트 DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Test database, session, and httpx client fixtures.
The database URL comes from TEST_DATABASE_URL and defaults to an in-memory
SQLite database (aiosqlite). The schema is created and dropped per test.
"""

import os
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

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.policies.role_authority import CASA_ADMIN, SUPERVISOR, VOLUNTEER
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL: str = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 생성/삭제합니다."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # 인메모리 DB는 단일 커넥션을 공유해야 유지됨
        eng = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        eng = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


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


@pytest.fixture(autouse=True)
def local_storage(tmp_path, monkeypatch):
    """첨부파일을 임시 디렉토리의 로컬 스토리지에 저장합니다."""
    monkeypatch.setattr(settings, "LOCAL_UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "AWS_ACCESS_KEY_ID", "")
    monkeypatch.setattr(settings, "AWS_S3_BUCKET", "")
    return tmp_path / "uploads"


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def org(db: AsyncSession):
    """테스트 조직을 생성합니다."""
    from app.models.organization import Organization
    o = Organization(name="Prince George CASA", slug="prince-george-casa")
    db.add(o)
    await db.flush()
    await db.refresh(o)
    return o


async def _make_user(db: AsyncSession, org, role: str, email: str, password: str):
    from app.models.user import User
    user = User(
        organization_id=org.id,
        email=email,
        display_name=email.split("@")[0].title(),
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession, org):
    """CASA 관리자 사용자를 생성합니다."""
    return await _make_user(db, org, CASA_ADMIN, "admin@example.com", "admin123!")


@pytest_asyncio.fixture
async def supervisor_user(db: AsyncSession, org):
    """감독자 사용자를 생성합니다."""
    return await _make_user(db, org, SUPERVISOR, "supervisor@example.com", "supervisor123!")


@pytest_asyncio.fixture
async def volunteer_user(db: AsyncSession, org):
    """자원봉사자 사용자를 생성합니다."""
    return await _make_user(db, org, VOLUNTEER, "volunteer@example.com", "volunteer123!")


def make_token(user) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "org": str(user.organization_id),
        "role": user.role,
    })


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


@pytest.fixture
def supervisor_token(supervisor_user) -> str:
    return make_token(supervisor_user)


@pytest.fixture
def volunteer_token(volunteer_user) -> str:
    return make_token(volunteer_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}

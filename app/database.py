"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Builds the async SQLAlchemy engine from ``DATABASE_URL`` (asyncpg in
production, aiosqlite for local runs), the session factory and the ORM base
class shared by every CASA model.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션을 반환합니다.

    Pool sizing and the prepared statement cache switch only apply to
    asyncpg; SQLite gets the engine defaults.
    """
    options: dict[str, Any] = {"echo": settings.DEBUG}
    if make_url(url).get_backend_name() == "postgresql":
        options.update(
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            # PgBouncer 트랜잭션 모드 — No prepared statements behind a transaction pooler
            connect_args={"statement_cache_size": 0},
        )
    return options


# 비동기 데이터베이스 엔진 — Async database engine
engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# 비동기 세션 팩토리 — Async session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Attributes stay loaded after commit)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """모든 ORM 모델의 선언적 베이스 (Declarative base for all ORM models)."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 비동기 세션을 제공합니다.

    FastAPI dependency yielding one session per request. Work left
    uncommitted when the handler raises is rolled back before the session
    is closed.

    Yields:
        AsyncSession: 비동기 세션 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

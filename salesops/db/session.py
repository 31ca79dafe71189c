"""SQLAlchemy async session setup for SalesOps.

Provides:
- Base: DeclarativeBase for all ORM models
- get_engine: async engine built from settings on first use
- get_session_factory: session maker bound to that engine
- get_async_session: FastAPI dependency with Unit-of-Work commit/rollback

The engine is created lazily so that importing the ORM tables (alembic,
tests, the seed script) never opens a connection pool.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from salesops.config.settings import Environment, get_settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.ENVIRONMENT == Environment.DEV,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; commit once on success, roll back on any exception.

    Repositories only call add()/flush()/refresh(), so a request that
    fails halfway leaves nothing behind.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

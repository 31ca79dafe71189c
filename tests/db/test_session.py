"""Tests for the lazily built engine and session factory."""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db.session import get_engine, get_session_factory


@pytest.fixture
def sqlite_url(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    get_session_factory.cache_clear()
    get_engine.cache_clear()
    yield
    get_session_factory.cache_clear()
    get_engine.cache_clear()


class TestEngine:
    def test_built_from_settings_on_first_use(self, sqlite_url) -> None:
        assert get_engine.cache_info().currsize == 0
        engine = get_engine()
        assert engine.url.drivername == "sqlite+aiosqlite"
        assert get_engine() is engine

    def test_factory_bound_to_engine(self, sqlite_url) -> None:
        factory = get_session_factory()
        assert factory is get_session_factory()
        assert factory.kw["bind"] is get_engine()
        assert factory.class_ is AsyncSession


class TestSession:
    @pytest.mark.anyio
    async def test_session_opens(self, sqlite_url) -> None:
        async with get_session_factory()() as session:
            assert await session.scalar(text("SELECT 1")) == 1

"""Unit tests for database module."""

from unittest.mock import AsyncMock, patch

import pytest

from app.core.config import DatabaseConfig
from app.core.database import (
    create_async_engine,
    create_session_factory,
    reset_engine,
)


def _config(**overrides) -> DatabaseConfig:
    values = {"host": "localhost", "port": 5432, "name": "test_db", "user": "test_user"}
    values.update(overrides)
    return DatabaseConfig(**values)


def test_create_async_engine():
    engine = create_async_engine(_config())
    assert engine is not None
    assert engine.url.host == "localhost"
    assert engine.url.database == "test_db"


def test_create_read_only_engine_uses_replica_url():
    config = _config(database_url_read_only="postgresql://reader:pw@replica:5432/test_db")
    engine = create_async_engine(config, read_only=True)
    assert engine.url.host == "replica"
    assert engine.url.drivername == "postgresql+asyncpg"


def test_create_session_factory():
    engine = create_async_engine(_config())
    factory = create_session_factory(engine)
    assert factory is not None


@pytest.mark.asyncio
async def test_session_factories_are_cached_per_engine():
    from app.core.database import get_read_only_session_factory, get_session_factory

    try:
        assert get_session_factory() is get_session_factory()
        assert get_read_only_session_factory() is get_read_only_session_factory()
        assert get_session_factory() is not get_read_only_session_factory()
    finally:
        await reset_engine()


@pytest.mark.asyncio
async def test_reset_engine():
    with patch("app.core.database._engine") as mock_engine:
        with patch("app.core.database._read_only_engine") as mock_read_only:
            with patch("app.core.database._session_factory"):
                mock_engine.dispose = AsyncMock()
                mock_read_only.dispose = AsyncMock()
                await reset_engine()
                mock_engine.dispose.assert_called_once()
                mock_read_only.dispose.assert_called_once()

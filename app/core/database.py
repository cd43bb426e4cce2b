"""Async engine and session management.

Two engines are kept: the primary one for writes and a read-only one used by
the data item queries. Both are created lazily and shared process-wide.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine as _create_async_engine

from app.core.config import DatabaseConfig, get_settings

_engine: AsyncEngine | None = None
_read_only_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None
_read_only_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_async_engine(config: DatabaseConfig, read_only: bool = False) -> AsyncEngine:
    """Create an async engine from database config."""
    url = config.read_only_async_url if read_only else config.async_url
    return _create_async_engine(
        url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_recycle=config.pool_recycle,
        pool_pre_ping=True,
        echo=config.echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_async_engine(get_settings().database)
    return _engine


def get_read_only_engine() -> AsyncEngine:
    global _read_only_engine
    if _read_only_engine is None:
        _read_only_engine = create_async_engine(get_settings().database, read_only=True)
    return _read_only_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


def get_read_only_session_factory() -> async_sessionmaker[AsyncSession]:
    global _read_only_session_factory
    if _read_only_session_factory is None:
        _read_only_session_factory = create_session_factory(get_read_only_engine())
    return _read_only_session_factory


async def reset_engine() -> None:
    """Dispose engines and forget cached session factories."""
    global _engine, _read_only_engine, _session_factory, _read_only_session_factory
    if _engine is not None:
        await _engine.dispose()
    if _read_only_engine is not None:
        await _read_only_engine.dispose()
    _engine = None
    _read_only_engine = None
    _session_factory = None
    _read_only_session_factory = None

"""Async SQLAlchemy engine and session factory.

Both are created on first use and shared for the lifetime of the process;
the server calls ``dispose_engine()`` from its shutdown hook.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from wellness_db.config import get_async_url, get_pool_settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return the process-wide async engine, creating it if needed."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(get_async_url(), echo=False, **get_pool_settings())
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to :func:`get_engine`."""
    global _session_factory
    if _session_factory is None:
        # Reports are read back after commit, so keep attributes loaded
        _session_factory = async_sessionmaker(
            bind=get_engine(), class_=AsyncSession, expire_on_commit=False,
        )
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections; safe to call when no engine was created."""
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None

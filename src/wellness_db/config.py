"""Database configuration — connection URL and pool sizing from environment.

The URL comes from ``DATABASE_URL`` when set, otherwise it is assembled
from ``PG_HOST`` / ``PG_PORT`` / ``PG_USER`` / ``PG_PASSWORD`` /
``PG_DATABASE``.  The runtime engine needs the asyncpg driver while
Alembic runs migrations through the default synchronous driver, so the
same URL is exposed in both spellings.
"""

import os

_SYNC_PREFIX = "postgresql://"
_ASYNC_PREFIX = "postgresql+asyncpg://"


def _base_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return "{prefix}{user}:{password}@{host}:{port}/{database}".format(
        prefix=_SYNC_PREFIX,
        user=os.getenv("PG_USER", "wellness"),
        password=os.getenv("PG_PASSWORD", "wellness"),
        host=os.getenv("PG_HOST", "localhost"),
        port=os.getenv("PG_PORT", "5432"),
        database=os.getenv("PG_DATABASE", "wellness"),
    )


def get_sync_url() -> str:
    """URL for Alembic (plain ``postgresql://``)."""
    return _base_url().replace(_ASYNC_PREFIX, _SYNC_PREFIX, 1)


def get_async_url() -> str:
    """URL for the runtime engine (``postgresql+asyncpg://``)."""
    url = _base_url()
    if url.startswith(_SYNC_PREFIX):
        return url.replace(_SYNC_PREFIX, _ASYNC_PREFIX, 1)
    return url


def get_pool_settings() -> dict[str, int]:
    """Connection pool tuning, overridable via ``PG_POOL_SIZE`` / ``PG_MAX_OVERFLOW``."""
    return {
        "pool_size": int(os.getenv("PG_POOL_SIZE", "5")),
        "max_overflow": int(os.getenv("PG_MAX_OVERFLOW", "10")),
    }

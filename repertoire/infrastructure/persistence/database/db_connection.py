"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and SQLite connection tuning
- Session factory creation
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from repertoire.config import get_logger, settings

logger = get_logger(__name__)


def _is_memory_url(db_url: str) -> bool:
    return db_url.startswith("sqlite") and (
        ":memory:" in db_url or db_url.rstrip("/").endswith("sqlite+aiosqlite:")
    )


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create async SQLAlchemy engine, tuned for SQLite when applicable.

    An in-memory SQLite database lives only as long as its connection, so it
    is served from a single shared connection.
    """
    db_config = settings.database
    db_url = connection_string or db_config.url
    is_sqlite = db_url.startswith("sqlite")

    engine_args: dict[str, Any] = {"echo": db_config.echo}
    if is_sqlite:
        engine_args["connect_args"] = {
            "check_same_thread": False,
            "timeout": db_config.busy_timeout_ms / 1000,
        }
    if _is_memory_url(db_url):
        engine_args["poolclass"] = StaticPool
    else:
        engine_args["pool_timeout"] = db_config.pool_timeout
        engine_args["pool_pre_ping"] = True

    engine = create_async_engine(db_url, **engine_args)

    if is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _):  # type: ignore # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            cursor = dbapi_connection.cursor()
            cursor.execute(f"PRAGMA busy_timeout = {db_config.busy_timeout_ms}")
            cursor.execute("PRAGMA foreign_keys = ON")  # Cascades rely on this
            cursor.close()

    logger.info("Created database engine", url=db_url.split("?")[0])
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def create_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)

    Returns:
        Async session factory for creating properly configured sessions
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,  # Entities are mapped out after commit
        autoflush=True,
    )

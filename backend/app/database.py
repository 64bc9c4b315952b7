"""
TripPlanner Backend: Database Engine & Session Factory
========================================================

What:  Async SQLAlchemy engine construction, session factory and declarative base.
Why:   Centralizes all database connection logic in one place.
How:   build_engine() creates an async engine with connection pooling for
       PostgreSQL (asyncpg) or a pool-less engine for SQLite (aiosqlite).
       build_session_factory() returns the async_sessionmaker every repository
       receives at construction time.
Who:   Called once by the dependency container; used by the Alembic environment.
When:  Engine is created at application startup; sessions are opened per
       repository call.

Connection Pooling Strategy:
    pool_size=10:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

SQLite:
    Every new connection runs PRAGMA foreign_keys=ON so ON DELETE CASCADE is
    honoured, and PRAGMA case_sensitive_like=ON so name search matches the
    PostgreSQL LIKE semantics. In-memory databases share one connection
    (StaticPool) so every session sees the same data.
"""

import logging

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models register with this class's metadata, which Alembic reads for
    migrations and the test suite uses for create_all().
    """
    pass


def _enable_sqlite_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Args:
        settings: Application settings carrying DATABASE_URL and pool sizing.

    Returns:
        AsyncEngine bound to the database. Nothing is connected until the
        first query runs.
    """
    url = make_url(settings.database_url)
    echo = settings.log_level == "DEBUG"

    if url.get_backend_name() == "sqlite":
        kwargs = {"echo": echo, "connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_pragmas)
    else:
        engine = create_async_engine(
            url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            echo=echo,
        )

    logger.info("Database engine created for backend '%s'", url.get_backend_name())
    return engine


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows returned by a repository stay readable after
# the session that loaded them has committed and closed
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

"""
Palette Backend: Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, FastAPI session dependency,
       and the startup connectivity check.
How:   One engine per process with connection pooling; one session per request
       that commits on success and rolls back on error.
Who:   Route handlers (via Depends), the health route and the app lifespan.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential_jitter,
)

from palette.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    # SQLite (tests, local runs) does not take queue pool sizing arguments
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


engine = create_async_engine(settings.database_url, **_engine_options())

# expire_on_commit=False: rows stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives Alembic."""
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)

    Example:
        @router.get("/colors")
        async def list_colors(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def ping_database() -> bool:
    """
    Run `SELECT 1` against the engine.

    Returns True when the database answered. Connection errors propagate so
    callers decide whether to retry (see `wait_for_database`).
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def wait_for_database() -> bool:
    """
    Ping the database at startup, retrying with exponential backoff.

    What:    Verifies the configured database is reachable before serving.
    Why:     Containers often start before the database accepts connections.
    Returns: True when reachable, False after all attempts failed. The app
             keeps running so /health can report the outage.
    """
    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(settings.db_connect_attempts),
            wait=wait_exponential_jitter(
                initial=settings.db_connect_min_wait,
                max=settings.db_connect_max_wait,
                jitter=1,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await ping_database()
    except Exception as e:
        logger.error(
            "Database unreachable after %d attempts: %s",
            settings.db_connect_attempts,
            str(e),
        )
        return False

    logger.info("Database connection verified")
    return True


async def dispose_engine() -> None:
    """Close all pooled connections; called on application shutdown."""
    await engine.dispose()

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from candidate_intake.config.settings import Settings, get_settings
from candidate_intake.exceptions.base import StorageInitializationError

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the AsyncEngine for the configured database."""
    url = settings.effective_database_url
    # sqlite3 / aiosqlite call it `timeout`; libpq (psycopg) calls it `connect_timeout`.
    if url.startswith("sqlite"):
        connect_args = {"timeout": settings.DB_CONNECT_TIMEOUT}
    else:
        connect_args = {"connect_timeout": settings.DB_CONNECT_TIMEOUT}
    return create_async_engine(
        url,
        echo=settings.SQLALCHEMY_ECHO,
        pool_pre_ping=True,              # Enables connection health checks
        connect_args=connect_args,
    )


_settings = get_settings()

engine: AsyncEngine = build_engine(_settings)

AsyncSessionMaker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with AsyncSessionMaker() as session:
        yield session


async def ensure_connection(db: AsyncSession) -> AsyncConnection:
    """
    Return the session's connection, establishing it if needed.

    Any driver error raised while the connection is being established is
    re-raised as StorageInitializationError, the marker the storage error
    translator recognizes as "database unreachable".
    """
    try:
        return await db.connection()
    except DBAPIError as exc:
        logger.warning("database.connect_failed", extra={"error_type": type(exc.orig).__name__})
        raise StorageInitializationError("Could not establish a database connection", orig=exc) from exc
    except OSError as exc:
        logger.warning("database.connect_failed", extra={"error_type": type(exc).__name__})
        raise StorageInitializationError("Could not establish a database connection", orig=exc) from exc


async def check_connection(bind: AsyncEngine | None = None) -> None:
    """Open a connection and run `SELECT 1`; used at application startup."""
    target = bind or engine
    try:
        async with target.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (DBAPIError, OSError) as exc:
        logger.warning("database.connect_failed", extra={"error_type": type(exc).__name__})
        raise StorageInitializationError("Could not establish a database connection", orig=exc) from exc

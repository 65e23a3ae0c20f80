"""Database Session Manager — async engine, sessions and health probe for the audit store.

Invariants:
    - A session that raises is rolled back before the error leaves the context
    - SQLAlchemy failures never escape raw: each maps to DatabaseError
      (core/errors.py) with a fixed, non-leaking message
    - One manager per process, created by init_db() from the app lifespan

Design Decisions:
    - expire_on_commit=False: rows stay readable after commit in async code
    - SQLite URLs (tests, local runs) get the driver's default pool;
      PostgreSQL gets a sized pool with pre-ping and recycling
    - Failure mapping is a table checked in order, most specific first
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from civictrust.core.errors import DatabaseError
from civictrust.db.base import Base
import civictrust.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)

# (exception type, operation label, public message)
_FAILURES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "commit", "Audit entry conflicts with a stored entry"),
    (OperationalError, "execute", "Database unreachable or busy"),
    (DBAPIError, "query", "Database driver rejected the statement"),
    (SQLAlchemyError, "unknown", "Database operation failed"),
)


def _to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, operation, message in _FAILURES:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


def _build_engine(database_url: str, pool_size: int, max_overflow: int) -> AsyncEngine:
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url)
    return create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


class DatabaseSessionManager:
    """Owns the async engine and hands out rollback-safe sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = _build_engine(database_url, pool_size, max_overflow)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = _to_database_error(e)
            logger.error(
                f"{type(e).__name__} during {error.operation}: {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables. Production deployments run alembic instead."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.warning(f"Database health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    """Create the process-wide manager. Called once from the app lifespan."""
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


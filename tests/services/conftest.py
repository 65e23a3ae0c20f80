"""Service test fixtures — async in-memory SQLite audit store.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The store goes through DatabaseSessionManager, so DB errors map to DatabaseError

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the audit table
    - StaticPool: one shared connection so :memory: survives across sessions
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from civictrust.db.base import Base
from civictrust.infrastructure.audit_store import SqlAuditStore
from civictrust.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
async def store(db_manager):
    return SqlAuditStore(db_manager)

"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and logging that are
needed across ALL types of tests (validators, exceptions, repositories,
services, API).

Domain-specific fixtures live in:
- tests/test_fixtures/candidate_fixtures.py

and are imported at the bottom of this file so every test module can use them
without importing them itself.
"""

from __future__ import annotations

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block above the project imports so SQLAlchemy / Faker registration
# does not spam the output during collection.
import logging

NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from candidate_intake.config.settings import get_settings
from candidate_intake.core.logging.builder import setup_logging
from candidate_intake.database.base import Base
import candidate_intake.models  # noqa: F401 – registers every model with Base.metadata

settings = get_settings()

# Each test gets a brand-new in-memory database; StaticPool keeps the single
# connection alive so the schema created below is the one the session sees.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session.

    pytest adds its capture handlers around each test phase, so `caplog` keeps
    working after dictConfig has replaced the root handlers.
    """
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
async def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """
    A session on a throwaway in-memory database.

    Code under test may commit freely: the whole database disappears with the
    engine at the end of the test.
    """
    async with session_maker() as session:
        yield session


# Candidate fixtures
from candidate_intake.tests.test_fixtures.candidate_fixtures import (  # noqa: E402,F401
    candidate_repository,
    complete_payload,
    minimal_payload,
    make_payload,
    created_candidate,
)

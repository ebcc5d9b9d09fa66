"""
Core pytest configuration for the entire test suite.

This module provides only the database setup and logging configuration shared by
ALL types of tests (repositories, services, API, ...).

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/service_fixtures.py
- tests/test_fixtures/api_fixtures.py
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from pathlib import Path
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block above the app.* imports so Faker / SQLAlchemy don't spam
# the output during collection.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config.settings import Settings
from app.core.logging.builder import setup_logging
from app.database import Base, create_engine, create_session_factory
from app import models  # noqa: F401 - registers tables on Base.metadata

from .test_fixtures.settings import make_test_settings

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging once for the whole session, so the same
    formatters and filters used by the app are active in tests.
    """
    setup_logging(make_test_settings())
    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """Database URL with the password masked, for logging."""
    return make_url(db_url).render_as_string(hide_password=True)


def get_test_database_url(tmp_dir: Path) -> str:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI against a real Postgres)
    2. otherwise a throwaway SQLite file inside the test's tmp dir
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return f"sqlite+aiosqlite:///{tmp_dir / 'test_database.db'}"


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return make_test_settings(DATABASE_URL_OVERRIDE=get_test_database_url(tmp_path))


@pytest.fixture
async def async_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh schema per test.

    The repository commits through its own sessions, so tests are isolated by
    recreating the tables rather than by rolling back a shared transaction.
    """
    logger.info("Using test DB: %s", safe_log_db_url(test_settings.DATABASE_URL))
    engine = create_engine(test_settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


# Shared fixtures from test_fixtures/ (imported here so every test module can use them)
from .test_fixtures.repository_fixtures import (  # noqa: E402
    user_repository,
    make_user_create,
    created_user,
    multiple_users,
)
from .test_fixtures.service_fixtures import (  # noqa: E402
    fake_repository,
    user_service,
)
from .test_fixtures.api_fixtures import (  # noqa: E402
    app,
    client,
)

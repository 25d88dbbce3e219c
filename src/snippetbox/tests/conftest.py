"""
Core pytest configuration for the entire test suite.

Only the essentials shared by every kind of test live here: logging set-up,
a throwaway SQLite database per test and a session factory bound to it.

Domain-specific fixtures (stores, clocks, sample users, the HTTP client) are in
tests/test_fixtures/ and re-exported at the bottom of this module so every test
module can use them without importing.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from pathlib import Path
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block above the project imports so Faker / SQLAlchemy / aiosqlite
# don't spam the output while the test modules are collected.
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
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from snippetbox.core.logging.builder import setup_logging
from snippetbox.database.session import build_sessionmaker, create_schema

from .test_fixtures.settings_fixtures import make_test_settings


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the application's logging config once for the session, so formatters
    and filters used in production are also active while tests run.
    """
    setup_logging(make_test_settings())
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh SQLite database file per test, with all tables created.

    A file (not :memory:) so that several connections from the pool see the same
    data; the concurrency tests rely on two sessions hitting one database.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture()
def sessions(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """The same session factory the app factory builds, bound to the test engine."""
    return build_sessionmaker(async_engine)


# Store / clock / data fixtures
from .test_fixtures.store_fixtures import (  # noqa: E402
    clock,
    snippet_store,
    user_store,
    memory_snippet_store,
    memory_user_store,
    sample_user_data,
    create_snippet,
    registered_user,
)

# HTTP fixtures
from .test_fixtures.api_fixtures import (  # noqa: E402
    app,
    client,
)

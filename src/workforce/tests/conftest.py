"""
Core pytest configuration for the whole suite.

Only the store setup and logging live here. Domain fixtures (repositories,
services, sample payloads, HTTP client) are in tests/test_fixtures/ and are
re-exported at the bottom of this module so every test can use them.

Store selection:
1. `TEST_DATABASE_URL` environment variable (CI override, e.g. PostgreSQL)
2. SQLite (aiosqlite) file in the test's tmp_path
"""

from __future__ import annotations

import os
import sys
import asyncio
import logging
from pathlib import Path
from urllib.parse import urlparse
from typing import AsyncGenerator

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

SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from workforce.config import Settings
from workforce.core.logging.builder import setup_logging
from workforce.database.base import Base
from workforce.database.session import create_session_factory, init_models
from workforce.repositories.document_repository import DocumentRepository
from .test_fixtures.settings import make_test_settings

logger = logging.getLogger(__name__)

# psycopg async needs the selector loop on Windows
if sys.platform == "win32":
    try:
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    except AttributeError:
        pass


def safe_log_db_url(db_url: str) -> str:
    """Database URL without credentials."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """
    Install the application logging for the session.

    dictConfig replaces root handlers, so caplog only sees records emitted
    after its per-phase handler is attached (i.e. inside the test body).
    """
    setup_logging(test_settings)
    yield


@pytest.fixture
def restore_logging(test_settings: Settings):
    """For tests that call setup_logging() themselves."""
    yield
    setup_logging(test_settings)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}"
    logger.debug("Using test DB: %s", safe_log_db_url(url))
    return url


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh `documents` table per test; dropped again afterwards."""
    engine = create_async_engine(database_url, future=True, pool_pre_ping=True)
    await init_models(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


@pytest.fixture
def repository(session_factory: async_sessionmaker[AsyncSession]) -> DocumentRepository:
    return DocumentRepository(session_factory)


from .test_fixtures.repository_fixtures import (  # noqa: E402
    fake,
    sample_branch_data,
    sample_employee_data,
    branch_service,
    employee_service,
    create_branch,
    create_employee,
)
from .test_fixtures.api_fixtures import (  # noqa: E402
    api_settings,
    app,
    client,
)

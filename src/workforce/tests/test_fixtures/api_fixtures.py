"""Fixtures for HTTP tests: a real app on a per-test SQLite file."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from workforce.config import Settings
from workforce.main import create_app

from .settings import make_test_settings


@pytest.fixture
def api_settings(tmp_path: Path) -> Settings:
    return make_test_settings(SQLITE_URL=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")


@pytest.fixture
def app(api_settings: Settings) -> FastAPI:
    return create_app(api_settings)


@pytest.fixture
def client(app: FastAPI):
    """
    TestClient used as a context manager so the lifespan runs: the engine,
    the `documents` table and the repository exist before the first request.
    """
    with TestClient(app) as test_client:
        yield test_client

"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Configuration classes read the environment at import time.
_DB_DIR = Path(tempfile.mkdtemp(prefix="fx-rate-engine-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ["FX_RATE_PROVIDERS"] = "mock"
os.environ["RATE_STORE_ASYNC"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"

from rate_engine import create_app  # noqa: E402
from rate_engine.database import SessionLocal, dispose_engine  # noqa: E402


@pytest.fixture(scope="session")
def app() -> Iterator:
    """Session-wide Flask application backed by a migrated temporary database."""

    database_url = os.environ["DATABASE_URL"]
    alembic_cfg = Config(str(ROOT_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(alembic_cfg, "head")

    flask_app = create_app("development")
    flask_app.config.update(TESTING=True)

    yield flask_app

    dispose_engine()
    command.downgrade(alembic_cfg, "base")


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture()
def db_session(app) -> Iterator:
    """Provide a database session that rolls back between tests."""

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        SessionLocal.remove()


@pytest.fixture()
def engine(app):
    """The application's conversion engine with an empty cache and a due sweep."""

    conversion_engine = app.extensions["conversion_engine"]
    conversion_engine.clear_cache()
    yield conversion_engine
    conversion_engine.clear_cache()

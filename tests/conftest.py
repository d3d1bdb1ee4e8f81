"""
Pytest configuration for the CMS content API.

Provides fixtures for:
- A throwaway SQLite database per test with the schema created
- Sessions and a ContentStore bound to that database
- A TestClient whose get_db dependency points at the test database
"""

from __future__ import annotations

import os

# Must be set before cms_api is imported: settings are cached on first use.
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "DEBUG"

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from cms_api.api.main import app
from cms_api.db.sqlalchemy import get_db, init_db
from cms_api.services.content_store import ContentStore


@pytest.fixture
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """
    File-backed SQLite engine so separate sessions get separate connections.
    """
    eng = create_engine(
        f"sqlite:///{tmp_path / 'cms_test.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(db_session: Session) -> ContentStore:
    return ContentStore(db_session)


@pytest.fixture
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    """
    TestClient with the request session redirected to the test database.

    Not used as a context manager, so startup hooks (table creation against
    DATABASE_URL) do not run.
    """

    def _override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

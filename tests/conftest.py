from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.main import app
from app.models import models  # noqa: F401  registers tables on Base.metadata
from app.models.base import Base
from tests.test_utils import create_unit


# In-memory SQLite shared across connections
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    future=True,
)
SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def create_test_database() -> Generator[None, None, None]:
    """Create/drop all tables once per test session."""
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session() -> Generator:
    """Provide a transactional SQLAlchemy Session for each test.

    Each test runs in its own transaction which is rolled back afterwards,
    so orders, styles and material requests never leak between tests.
    """
    connection = engine.connect()
    trans = connection.begin()
    session = SessionTesting(bind=connection)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture
def unit(db_session):
    """The sewing unit the API is configured to serve."""
    return create_unit(db_session)


@pytest.fixture
def api_settings(unit) -> Settings:
    return Settings(
        database_url="sqlite://",
        current_unit_id=unit.id,
        default_material_unit="Meters",
    )


@pytest.fixture
def client(db_session, api_settings):
    def _get_db_override():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db_override
    app.dependency_overrides[get_settings] = lambda: api_settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

"""
Pytest configuration and fixtures.

Unit and API tests run against an in-memory SQLite database; the LLM and
S3 clients are MagicMocks. Tests marked `db` use PostgreSQL started through
testcontainers (or TEST_DATABASE_URL).
"""

import os

# Engines are built at import time in database.database and web.backend.dependencies
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.config_loader import AppConfig
from core.retirement import AdvisorCalendar, IncentiveCalculator
from database.models import Base
from database.repositories import UserRepository
from etl.resume import ResumeParser


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db_session):
    user = UserRepository(db_session).create("jane.doe@example.com", first_name="Jane", last_name="Doe")
    db_session.commit()
    return user


@pytest.fixture
def other_user(db_session):
    user = UserRepository(db_session).create("sam.roe@example.com", first_name="Sam", last_name="Roe")
    db_session.commit()
    return user


@pytest.fixture
def ai():
    """LLMProvider double; tests set return values per call."""
    ai = MagicMock()
    ai.generate_text.return_value = "Generated text"
    ai.extract_structured_data.return_value = {}
    return ai


@pytest.fixture
def uploader():
    uploader = MagicMock()
    uploader.bucket = "test-bucket"

    def _upload(data, key, content_type=None):
        return {"bucket": "test-bucket", "key": key, "url": f"https://test-bucket.s3.amazonaws.com/{key}"}

    uploader.upload_bytes.side_effect = _upload
    return uploader


@pytest.fixture
def app_config():
    return AppConfig()


@pytest.fixture
def client(db_session, ai, uploader, app_config):
    """TestClient for the full app with DB, LLM and S3 dependencies overridden."""
    from fastapi.testclient import TestClient
    from web.backend.app import app
    from web.backend.config import get_config
    from web.backend.dependencies import (
        get_advisor_calendar,
        get_ai_service,
        get_db,
        get_incentive_calculator,
        get_resume_parser,
        get_uploader,
    )
    from web.backend.rate_limit import limiter

    # Disable rate limiting for tests
    limiter.enabled = False

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_ai_service] = lambda: ai
    app.dependency_overrides[get_uploader] = lambda: uploader
    app.dependency_overrides[get_config] = lambda: app_config
    app.dependency_overrides[get_incentive_calculator] = lambda: IncentiveCalculator(app_config.retirement)
    app.dependency_overrides[get_advisor_calendar] = lambda: AdvisorCalendar(app_config.retirement)
    app.dependency_overrides[get_resume_parser] = ResumeParser

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()


@pytest.fixture
def auth(user):
    return {"X-User-Id": str(user.id)}


@pytest.fixture(scope="session")
def test_database():
    """
    Session-scoped fixture that manages the PostgreSQL test database.

    Uses testcontainers to start PostgreSQL before the `db` tests and stops
    it afterwards. Falls back to an external database if TEST_DATABASE_URL
    is set.
    """
    external_url = os.environ.get("TEST_DATABASE_URL")
    if external_url:
        from tests import check_db_available
        if check_db_available():
            yield external_url
            return
        pytest.skip("External database not available")

    try:
        from testcontainers.postgres import PostgresContainer

        postgres = PostgresContainer(
            image="postgres:16-alpine",
            username="testuser",
            password="testpass",
            dbname="maxjoboffers_test",
            port=5432
        )
        postgres.start()
    except Exception as e:
        pytest.skip(f"Could not start test database container: {e}")

    db_url = postgres.get_connection_url()
    engine = create_engine(db_url)
    Base.metadata.create_all(engine)
    engine.dispose()
    print(f"\n✓ Test database started: {db_url}")

    yield db_url

    postgres.stop()
    print("\n✓ Test database stopped")


@pytest.fixture
def pg_session(test_database):
    """PostgreSQL session whose tables are emptied after each test."""
    engine = create_engine(test_database)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.rollback()
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())
        session.close()
        engine.dispose()

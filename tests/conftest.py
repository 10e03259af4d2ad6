"""Pytest fixtures and configuration for dailyFocus tests."""

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from zoneinfo import ZoneInfo
import uuid

from dailyfocus.database.database import Base
from dailyfocus.database import models  # noqa: F401  (registers tables)
from dailyfocus.models.item import SchedulableItem, ItemStatus, Priority, ItemKind
from dailyfocus.models.notification import NotificationRule, QuietConfig


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def sao_paulo():
    return ZoneInfo("America/Sao_Paulo")


@pytest.fixture
def sample_item_base():
    """Base item data for creating test items.

    Returns a dict with default item attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "title": "Test Task",
        "kind": ItemKind.TASK,
        "priority": Priority.MEDIUM,
        "status": ItemStatus.TODO,
        "start_date": None,
        "due_date": None,
        "start_time": None,
        "recurrence": None,
    }


@pytest.fixture
def make_item(sample_item_base):
    """Factory for SchedulableItem with overrides and a fresh id."""
    def _make(**overrides):
        data = {**sample_item_base, "id": str(uuid.uuid4()), **overrides}
        return SchedulableItem(**data)
    return _make


@pytest.fixture
def make_rule():
    """Factory for NotificationRule with overrides and a fresh id."""
    def _make(**overrides):
        data = {"id": str(uuid.uuid4()), "type": "time", "time": "09:00", "message": "Reminder", **overrides}
        return NotificationRule(**data)
    return _make


@pytest.fixture
def no_quiet():
    return QuietConfig(quiet_hours_enabled=False)


@pytest.fixture
def test_day():
    """A fixed Friday."""
    return date(2024, 3, 15)


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from dailyfocus.api.app import app
    from dailyfocus.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()

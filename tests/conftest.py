"""Pytest fixtures and configuration for TaskFlow tests."""

import os

# Configure before any taskflow import reads the environment
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ["OPENAI_API_KEY"] = ""

import pytest
import uuid
from datetime import datetime, timedelta
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from taskflow.database.database import Base, set_sqlite_pragmas
from taskflow.database.repository import TaskRepository
from taskflow.database.user_repository import UserRepository
from taskflow.integrations.canned import CannedCompletionClient
from taskflow.models.task import Task, TaskPriority


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_PASSWORD = "password123"


@pytest.fixture(scope="function")
def db_session(test_user_id):
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    Also creates a test user (with a real password hash) in the database.
    """
    from taskflow.auth.passwords import hash_password
    from taskflow.database.models import UserDB

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    event.listen(engine, "connect", set_sqlite_pragmas)

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    # Create test user (required for foreign key constraints)
    now = datetime.utcnow()
    session.add(UserDB(
        id=test_user_id,
        username="testuser",
        email="test@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        created_at=now,
        updated_at=now,
    ))
    session.commit()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def test_user(db_session, test_user_id):
    """The seeded test user as a pydantic model."""
    return UserRepository(db_session).get(test_user_id)


@pytest.fixture
def now():
    """A fixed evaluation instant for pure engine tests."""
    return datetime(2025, 6, 15, 12, 0, 0)


@pytest.fixture
def sample_task_base(test_user_id):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    now = datetime.utcnow()
    return {
        "id": str(uuid.uuid4()),
        "user_id": test_user_id,
        "title": "Test Task",
        "description": "Test description",
        "due_date": None,
        "priority": TaskPriority.MEDIUM,
        "category": "work",
        "completed": False,
        "completed_at": None,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def make_task(sample_task_base):
    """Factory for tasks with a fresh id and overridden fields."""
    def _make(**overrides):
        return Task(**{**sample_task_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def task_due_in_two_days(make_task):
    """Create an open task due within the week."""
    return make_task(title="Due soon", due_date=datetime.utcnow() + timedelta(days=2))


@pytest.fixture
def canned_client():
    """Completion client double; replies are queued per test."""
    return CannedCompletionClient()


def _override_db(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it
    return override_get_db


@pytest.fixture
def test_client(db_session: Session, test_user, canned_client):
    """Create a FastAPI test client with overridden database, authentication and AI client."""
    from taskflow.api.app import app
    from taskflow.api.dependencies import get_completion_client
    from taskflow.auth.dependencies import get_current_user
    from taskflow.database.database import get_db

    # Override authentication to return test user
    def override_get_current_user():
        return test_user

    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_completion_client] = lambda: canned_client

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db_session: Session, canned_client):
    """Test client that authenticates with real bearer tokens."""
    from taskflow.api.app import app
    from taskflow.api.dependencies import get_completion_client
    from taskflow.database.database import get_db

    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_completion_client] = lambda: canned_client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()

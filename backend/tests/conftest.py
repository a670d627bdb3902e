"""Shared fixtures: in-memory database, API client and board doubles."""

import os

# Settings are read at import time, so the environment is set up first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("MONDAY_NAME_COL_ID", "name")
os.environ.setdefault("MONDAY_STATUS_COL_ID", "project_status")
os.environ.setdefault("MONDAY_PRIORITY_COL_ID", "priority__1")
os.environ.setdefault("MONDAY_FILE_COL_ID", "link__1")
os.environ.setdefault("MONDAY_DUEDATE_COL_ID", "date")
os.environ.setdefault("MONDAY_GRANT_ACCESS_COL_ID", "checkbox__1")
os.environ.setdefault("MONDAY_FEEDBACK_COL_ID", "text__1")
# Board sync stays off unless a test injects a client
os.environ["MONDAY_API_KEY"] = ""
os.environ["MONDAY_BOARD_ID"] = ""
os.environ["MONDAY_GROUP_ID"] = ""

import uuid
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quickcut.database import Base, get_db
from quickcut.main import app
from quickcut.models import Profile, Project
from quickcut.services.monday import MondayClient, create_monday_client


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with the schema created."""
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
def db_session(db_engine):
    SessionLocal = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def monday():
    """Board client double; every call succeeds unless a test says otherwise."""
    client = Mock(spec=MondayClient)
    client.create_item = AsyncMock(return_value="9001")
    client.update_item = AsyncMock(return_value=None)
    client.set_status = AsyncMock(return_value=None)
    client.add_update = AsyncMock(return_value="5005")
    client.get_item = AsyncMock(return_value=None)
    return client


@pytest.fixture
def client(db_session):
    """API client bound to the test session, with board sync disabled."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[create_monday_client] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def board_client(client, monday):
    """API client whose board calls go to the ``monday`` double."""
    app.dependency_overrides[create_monday_client] = lambda: monday
    return client


@pytest.fixture
def owner(db_session) -> Profile:
    profile = Profile(id=uuid.uuid4(), email="jane@example.com", full_name="Jane Doe")
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


@pytest.fixture
def other_user(db_session) -> Profile:
    profile = Profile(id=uuid.uuid4(), email="sam@example.com", full_name="Sam Roe")
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


@pytest.fixture
def make_project(db_session, owner):
    """Factory for projects owned by ``owner`` unless another owner is given."""

    def _make(**overrides) -> Project:
        values = {
            "user_id": owner.id,
            "name": "Wedding highlight reel",
            "monday_item_id": "1234567890",
            "priority": "Standard",
        }
        values.update(overrides)
        project = Project(**values)
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)
        return project

    return _make

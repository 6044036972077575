"""Pytest configuration and fixtures."""

import os
import uuid
from pathlib import PurePath

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app
from src.services.media import MediaStoreError, StoredMedia, get_media_store


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


class FakeMediaStore:
    """In-memory media host that records every call."""

    def __init__(self):
        self.stored: list[StoredMedia] = []
        self.deleted: list[tuple[str, str]] = []
        self.fail_deletes = False

    async def store(self, data, filename, content_type, folder):
        content_type = content_type or ""
        if content_type.startswith("image/"):
            resource_type = "image"
        elif content_type.startswith("video/"):
            resource_type = "video"
        else:
            resource_type = "raw"
        name = uuid.uuid4().hex
        extension = PurePath(filename).suffix
        media = StoredMedia(
            url=f"https://res.cloudinary.com/demo/{resource_type}/upload/v1/{folder}/{name}{extension}",
            public_id=f"{folder}/{name}",
        )
        self.stored.append(media)
        return media

    async def delete(self, public_id, resource_type="image"):
        if self.fail_deletes:
            raise MediaStoreError("media host unavailable")
        self.deleted.append((public_id, resource_type))

    @property
    def deleted_ids(self) -> list[str]:
        return [public_id for public_id, _ in self.deleted]


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/portfolio", "/portfolio_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def media_store():
    """Recording media store shared by the app and the test."""
    return FakeMediaStore()


@pytest.fixture(scope="function")
def client(db, media_store):
    """Create a test client with database and media store overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_store] = lambda: media_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def profile(client):
    """Create a profile with a password and return its creation response."""
    response = client.post(
        "/api/profile/create",
        data={
            "name": "Test User",
            "username": "test_user",
            "intro_text": "Hello there",
            "highlights": "Developer, Climber",
            "password": "testpass123",
            "securityCode": "blue",
        },
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def auth_headers(client, profile):
    """Log in as the profile user and return auth headers with user info."""
    response = client.post(
        "/api/profile/login",
        json={"username": "test_user", "password": "testpass123"},
    )
    assert response.status_code == 200
    token = response.json()["token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=profile["userId"])

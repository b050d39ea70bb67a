import os

# Must be set before the app (and its settings) are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES"] = "false"

import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import settings
from app.db.session import get_db
from app.models.base import Base
from app.repos.memory import InMemoryAuthorRepository
from app.services.author_service import AuthorService

# One shared in-memory connection for the whole test run
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    future=True,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture(autouse=True)
def setup_test_database():
    """Fresh authors table for every test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def _override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def test_client():
    """Create a test client for FastAPI app."""
    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def api_key(monkeypatch):
    """Turn on the X-API-Key guard for one test."""
    key = f"key-{uuid.uuid4().hex}"
    monkeypatch.setattr(settings, "API_KEY", key)
    return key


@pytest.fixture
def author_payload():
    """Valid create payload with a unique name/email."""
    unique_suffix = uuid.uuid4().hex[:8]
    return {
        "name": f"John Doe {unique_suffix}",
        "email": f"john.{unique_suffix}@email.com",
        "github": "github.com/john",
        "twitter": "johndoe",
        "location": "NewYork",
        "latest_article_published": "How to make an API documentation",
    }


@pytest.fixture
def sample_author(test_client, author_payload):
    """Create a sample author for testing using the API."""
    response = test_client.post("/authors", json=author_payload)

    assert response.status_code == 201, f"Failed to create sample author: {response.text}"
    return response.json()


@pytest.fixture
def memory_repo():
    return InMemoryAuthorRepository()


@pytest.fixture
def author_service(memory_repo):
    return AuthorService(memory_repo)


@pytest.fixture
def headers_with_correlation():
    """HTTP headers with correlation ID."""
    return {"X-Request-ID": str(uuid.uuid4())}

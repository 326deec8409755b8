import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import InMemoryUserStore
from main import create_app


@pytest.fixture
def settings():
    return Settings(cors_origins=["http://localhost:3000"], missing_user_as_null=True)


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def client(settings, store):
    """A test client over a fresh app and an empty store."""
    with TestClient(create_app(settings=settings, store=store)) as c:
        yield c


@pytest.fixture
def sample_user():
    return {"name": "A", "email": "a@x.com", "password": "p"}

"""Shared fixtures for the test suite."""

import os

# Cheap hashing for tests; must be set before the settings module loads.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from devconnect.config import settings
from devconnect.core.database import Database
from devconnect.main import create_app
from devconnect.repositories import ConnectionRequestRepository, UserRepository
from devconnect.services.connections import ConnectionService
from devconnect.services.feed import FeedService
from devconnect.services.requests import RequestService


@pytest.fixture
def database():
    """Fresh in-process store for each test."""
    return Database()


@pytest_asyncio.fixture
async def users(database):
    repo = UserRepository(database)
    await repo.ensure_indexes()
    return repo


@pytest_asyncio.fixture
async def requests_repo(database):
    repo = ConnectionRequestRepository(database)
    await repo.ensure_indexes()
    return repo


@pytest.fixture
def request_service(users, requests_repo):
    return RequestService(users, requests_repo)


@pytest.fixture
def connection_service(users, requests_repo):
    return ConnectionService(users, requests_repo)


@pytest.fixture
def feed_service(users, requests_repo):
    return FeedService(users, requests_repo)


@pytest.fixture
def make_user(users):
    """Factory inserting a user straight through the repository."""
    counter = {"n": 0}

    async def _make_user(first_name=None, **profile):
        counter["n"] += 1
        n = counter["n"]
        return await users.create(
            first_name=first_name or f"User{n}",
            last_name="Tester",
            email=f"user{n}@example.com",
            password_hash="not-a-real-hash",
            **profile,
        )

    return _make_user


@pytest.fixture
def client():
    """TestClient over an app backed by a fresh in-process store."""
    app = create_app(Database())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup(client):
    """Sign a user up through the API and return ``(user_id, token)``."""

    def _signup(first_name, email, password="Str0ng!Pass"):
        response = client.post("/signup", json={
            "first_name": first_name,
            "last_name": "Tester",
            "email": email,
            "password": password,
        })
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"], response.cookies[settings.cookie_name]

    return _signup


@pytest.fixture
def act_as(client):
    """Make subsequent requests from ``client`` carry the given token."""

    def _act_as(token):
        client.cookies.clear()
        client.cookies.set(settings.cookie_name, token)

    return _act_as

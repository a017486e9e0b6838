# This project was developed with assistance from AI tools.
"""Fixtures for functional tests.

Each test gets a fresh in-memory session and blob store wired into the real
app, so a flow can submit, review and re-read the same records.
"""

import pytest
from fastapi.testclient import TestClient
from producer_db import get_db

from producer_api.services.storage import get_storage_service

from .fake_store import InMemorySession, InMemoryStorage


@pytest.fixture
def db():
    return InMemorySession()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def client(app, db, storage) -> TestClient:
    async def fake_db():
        yield db

    app.dependency_overrides[get_db] = fake_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    return TestClient(app)


@pytest.fixture
def admin_client(client) -> TestClient:
    """Client whose cookie jar carries an authenticated admin session."""
    resp = client.post(
        "/admin/login",
        data={"email": "reviewer@example.com", "password": "secret"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    return client

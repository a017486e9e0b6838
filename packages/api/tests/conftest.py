# This project was developed with assistance from AI tools.
"""Shared fixtures for API tests.

``app`` is the real module-level FastAPI app; overrides are cleared after
every test so one test's doubles never leak into the next.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from producer_db import get_db

from producer_api.main import app as real_app
from producer_api.services.credentials import get_credential_store
from producer_api.services.storage import get_storage_service

from .factories import make_mock_session


@pytest.fixture(autouse=True)
def _clean_state():
    """Clear dependency overrides and issued credentials after each test."""
    yield
    real_app.dependency_overrides.clear()
    get_credential_store().clear()


@pytest.fixture
def app():
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def make_client(app):
    """Factory fixture: wire a session and storage double into the app."""

    def _make(session=None, storage=None) -> TestClient:
        session = session or make_mock_session()

        async def fake_db():
            yield session

        app.dependency_overrides[get_db] = fake_db
        app.dependency_overrides[get_storage_service] = lambda: storage or MagicMock()
        return TestClient(app)

    return _make

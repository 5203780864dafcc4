"""Shared fixtures for API integration tests.

The application is used without running its lifespan, so no MongoDB
connection is made; services are replaced through dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.core.security import generate_token


@pytest.fixture
def client():
    """Test client returning error responses instead of raising."""
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer token headers for user-1."""
    return {"Authorization": f"Bearer {generate_token('user-1')}"}


@pytest.fixture
def assert_error_body():
    """Checker for the common error body shape."""

    def check(response, status_code, message=None):
        assert response.status_code == status_code
        body = response.json()
        assert set(body) == {"timestamp", "status", "error", "message", "path"}
        assert body["status"] == status_code
        assert body["path"] == response.request.url.path
        if message is not None:
            assert body["message"] == message
        return body

    return check

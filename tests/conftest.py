"""Pytest configuration and fixtures."""

import pytest

from api import create_app

PASSWORD = "secret123"


@pytest.fixture
def app(tmp_path):
    """App on an in-memory database with a throwaway static directory."""
    (tmp_path / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")
    app = create_app("testing", STATIC_DIR=str(tmp_path))
    yield app
    app.extensions["storage"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sessions(app):
    """SessionService bound to the app's storage; needs an app context for cleanup."""
    with app.app_context():
        yield app.extensions["sessions"]


@pytest.fixture
def register(client):
    def _register(email="alice@example.com", password=PASSWORD):
        resp = client.post("/api/users", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _register


@pytest.fixture
def login(client):
    def _login(email="alice@example.com", password=PASSWORD, **extra):
        resp = client.post("/api/login", json={"email": email, "password": password, **extra})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}

import pytest
from fastapi.testclient import TestClient

from chatto.config.settings import Config
from chatto.fastapi_app import create_fastapi_app
from chatto.setup.ioc import create_container


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    """Cheap hashing and short typing timeouts for every test."""
    monkeypatch.setattr(Config, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(Config, "TYPING_TIMEOUT_SECONDS", 0.2)
    monkeypatch.setattr(Config, "JWT_SECRET", "test-secret")


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def app():
    """A fresh app over an empty memory store for each test."""
    return create_fastapi_app(create_container("memory"))


@pytest.fixture()
def client(app):
    # Entering the client keeps one event loop for HTTP calls and WebSockets
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def make_user(client):
    """Register and log in a user; returns {"id", "email", "token", "headers"}."""

    def _make_user(email: str, password: str = "secret-pass"):
        response = client.post("/auth/register", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        return {
            "id": body["user"]["id"],
            "email": body["user"]["email"],
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _make_user

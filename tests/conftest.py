"""Pytest fixtures for food_delivery tests."""

import pytest
from fastapi.testclient import TestClient

from food_delivery.core.config import Settings
from food_delivery.main import create_app

ADMIN_NAME = "admin"
ADMIN_PASSWORD = "admin-secret"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        db_connect_attempts=1,
        admin_name=ADMIN_NAME,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def client(settings):
    """Test client with the lifespan (database connect, admin seed) running."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user and return its id."""
    def _register(name="alice", password="pw1", email=None):
        payload = {"name": name, "password": password}
        if email:
            payload["email"] = email
        response = client.post("/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["userId"]

    return _register


@pytest.fixture
def login(client):
    """Log in as a user; the session cookie replaces any previous one."""
    def _login(name="alice", password="pw1"):
        response = client.post("/users/login", json={"name": name, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest.fixture
def login_admin(client):
    def _login_admin():
        response = client.post(
            "/admin/login", json={"name": ADMIN_NAME, "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login_admin


@pytest.fixture
def alice(register, login):
    """Registered and logged-in user 'alice'; returns her user id."""
    user_id = register("alice", "pw1")
    login("alice", "pw1")
    return user_id

"""Shared fixtures: an application wired to a throwaway SQLite file."""

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient

from carbon_tracker.core.app_factory import create_application
from carbon_tracker.core.config import Settings
from carbon_tracker.infrastructure.persistence.sqlite import SQLitePersistence

TEST_SECRET = "test-token-secret"


@pytest.fixture()
def settings(tmp_path, monkeypatch) -> Settings:
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "carbon.db"))
    monkeypatch.setenv("TOKEN_SECRET", TEST_SECRET)
    # Lowest cost bcrypt accepts, keeps the suite fast.
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
    monkeypatch.delenv("TOKEN_EXP_MINUTES", raising=False)
    return Settings()


@pytest.fixture()
def persistence(tmp_path) -> Generator[SQLitePersistence, None, None]:
    store = SQLitePersistence(tmp_path / "store.db")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture()
def client(settings) -> Generator[TestClient, None, None]:
    """TestClient that also runs the application lifespan."""
    with TestClient(create_application(settings)) as test_client:
        yield test_client


@pytest.fixture()
def register_and_login(client) -> Callable[..., Dict[str, str]]:
    """Create an account through the API and return bearer headers for it."""

    def _register_and_login(email: str = "alice@example.com", password: str = "s3cret!") -> Dict[str, str]:
        response = client.post("/api/register", json={"email": email, "password": password})
        assert response.status_code == 201
        response = client.post("/api/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login

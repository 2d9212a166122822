"""
Shared fixtures.

Every test runs against a fresh in-memory SQLite database. DATABASE_URL is set
before any project module is imported so kitchen.db binds its engine to it.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_TTL_SECONDS"] = "3600"

import pytest
from fastapi.testclient import TestClient

from api.main import app
from kitchen.db import reset_db


@pytest.fixture(autouse=True)
def fresh_db():
    """Drop and recreate all tables around each test."""
    reset_db()
    yield


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def make_user(client):
    """
    Factory fixture: register and log in a user, return auth headers.

    Usage:
        headers = make_user("ada@example.com")
    """
    def _make_user(email: str, password: str = "secret123", name: str = "Test User") -> dict:
        response = client.post(
            "/api/auth/signup",
            json={"email": email, "password": password, "metadata": {"name": name}},
        )
        assert response.status_code == 200, response.text

        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        token = response.json()["data"]["session"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest.fixture
def auth_headers(make_user):
    return make_user("ada@example.com", name="Ada")


@pytest.fixture
def other_auth_headers(make_user):
    return make_user("grace@example.com", name="Grace")


@pytest.fixture
def spinach_recipe():
    return {
        "name": "Spinach Tofu Scramble",
        "cooking_time": 20,
        "image_url": "https://images.pexels.com/photos/1/pexels-photo-1.jpeg",
        "ingredients": ["200g firm tofu", "2 handfuls spinach", "1 tsp turmeric"],
        "instructions": ["Crumble the tofu.", "Fry with turmeric for 3 minutes.", "Stir in the spinach."],
    }

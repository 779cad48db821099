"""
Shared fixtures.

Each test gets its own in-memory Mongo database swapped into the Database
handle. The TestClient is used without a `with` block so the lifespan hook
(which connects to a real server) never runs.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.core.config import get_settings
from app.core.database import Database
from app.main import app

VALID_DESCRIPTION = "Plants that store water in thick fleshy leaves and stems."


@pytest.fixture
def db():
    """Scoped in-memory database for one test."""
    mock_client = AsyncMongoMockClient()
    Database.client = mock_client
    Database.db = mock_client["plant_catalog_test"]
    yield Database.db
    Database.client = None
    Database.db = None


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def settings():
    return get_settings()


def run(coro):
    """Drive a single mock-database coroutine from a sync test."""
    return asyncio.run(coro)


@pytest.fixture
def make_category(client):
    def _make(name: str, description: str = VALID_DESCRIPTION) -> str:
        r = client.post("/api/categories", json={"category": name, "description": description})
        assert r.status_code == 201, r.text
        return r.json()["_id"]
    return _make


@pytest.fixture
def make_plant(client):
    def _make(name: str, category_id: str, price: float = 100, availability: int = 10, **extra) -> str:
        payload = {
            "name": name,
            "price": price,
            "category": category_id,
            "availability": availability,
            **extra,
        }
        r = client.post("/api/plants", json=payload)
        assert r.status_code == 201, r.text
        return r.json()["_id"]
    return _make

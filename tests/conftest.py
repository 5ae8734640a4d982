# tests/conftest.py

"""
Shared fixtures for the Product Service tests.
Each test gets its own in-memory SQLite database and an app built around it,
so tests never share rows.
"""

import logging
import os

# Must be set before product_service.main builds its module-level app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FRONTEND_URL", "http://localhost:5173")

import pytest
from fastapi.testclient import TestClient

from product_service.config import Settings
from product_service.db import Database
from product_service.main import create_app

# Suppress noisy logs from SQLAlchemy during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

FRONTEND_URL = "http://localhost:5173"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        frontend_url=FRONTEND_URL,
        db_connect_retries=1,
        db_connect_retry_delay=0,
    )


@pytest.fixture
def database(settings):
    database = Database(settings.database_url)
    yield database
    database.dispose()


@pytest.fixture
def client(settings, database):
    """
    TestClient for a fresh app; entering it runs the lifespan, which creates the tables.
    """
    with TestClient(create_app(settings, database)) as test_client:
        yield test_client


@pytest.fixture
def product(client):
    """A product created through the API."""
    response = client.post(
        "/api/products", json={"name": "Monitor curvo de 49 pulgadas", "price": 300}
    )
    assert response.status_code == 201
    return response.json()["data"]

"""Shared fixtures for the catalog tests."""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient

from vegan_catalog_api.app.core.config import Settings
from vegan_catalog_api.app.main import create_app
from vegan_catalog_api.app.schemas.product import ProductPayload
from vegan_catalog_api.app.services.product_service import ProductService


class FakeClock:
    """Nanosecond clock that advances by ``step`` on every call."""

    def __init__(self, start: int = 1_700_000_000_000_000_000, step: int = 1_000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def temp_db_path():
    """Create a temporary database file for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def product_service(temp_db_path, clock):
    """ProductService over a temporary database with a deterministic clock."""
    return ProductService(temp_db_path, clock=clock)


@pytest.fixture
def tofu():
    return ProductPayload(name="Tofu", description="Firm", price=500, seller="Acme")


@pytest.fixture
def client(temp_db_path):
    """TestClient for an app whose catalog lives in the temporary database."""
    app = create_app(Settings(database_url=temp_db_path))
    with TestClient(app) as test_client:
        yield test_client

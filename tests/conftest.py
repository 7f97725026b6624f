import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.database import get_backend, try_get_backend
from tests.fakes import FakeSheetsBackend, seeded_tabs


@pytest.fixture(scope="function")
def backend():
    """Fresh in-memory spreadsheet with a few articles, one client and one supplier."""
    return FakeSheetsBackend(seeded_tabs())


@pytest.fixture(scope="function")
def client(backend):
    """Create test client backed by the in-memory spreadsheet."""
    app.dependency_overrides[get_backend] = lambda: backend
    app.dependency_overrides[try_get_backend] = lambda: backend

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

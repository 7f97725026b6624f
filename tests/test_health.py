"""Tests for health check endpoints."""
from app.database import try_get_backend
from app.main import app


def test_health_check(client):
    """Test basic health check."""
    response = client.get("/api/health/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_endpoint(client):
    """Test root endpoint returns API info."""
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "version" in data
    assert "docs" in data
    assert data["health"] == "/api/health"


def test_readiness_all_tabs_present(client):
    response = client.get("/api/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["spreadsheet"] is True
    assert all(data["checks"]["tabs"].values())


def test_readiness_reports_missing_tab(client, backend):
    del backend.tabs["proveedores"]

    data = client.get("/api/health/ready").json()

    assert data["status"] == "not_ready"
    assert data["checks"]["tabs"]["proveedores"] is False
    assert data["checks"]["tabs"]["articulos"] is True


def test_readiness_spreadsheet_unreachable(client, backend):
    backend.fail_on("tab_titles", "*")

    response = client.get("/api/health/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "not_ready"
    assert response.json()["checks"]["spreadsheet"] is False


def test_readiness_without_credentials(client):
    app.dependency_overrides[try_get_backend] = lambda: None

    response = client.get("/api/health/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "not_ready"

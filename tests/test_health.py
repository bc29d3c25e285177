"""Tests for health check endpoints."""


def test_health_check(client):
    """Test basic health endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "timestamp" in data


def test_db_health_check(client):
    """Test database connectivity probe."""
    response = client.get("/api/db-health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["db_time"]


def test_db_health_check_unavailable(client, unreachable_database):
    """Test database probe reports failure without leaking the driver error."""
    response = client.get("/api/db-health")
    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "Database unavailable"}
    assert "connection refused" not in response.text


def test_api_info(client):
    """Test API info endpoint returns service info."""
    response = client.get("/api")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Book Tracker"
    assert "version" in data
    assert "docs" in data


def test_root_serves_ui(client):
    """Test root endpoint serves the single-page UI."""
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "app.js" in response.text

"""
Health endpoint tests.
"""


def test_health_endpoint(client):
    """Test that the /health endpoint returns 200 OK."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert data["version"] == "0.1.0"
    assert data["service"] == "DocIntro"


def test_health_ready_endpoint(client):
    """Test that the /health/ready endpoint reports storage and email state."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["video_storage"] == "ok"
    assert data["checks"]["storage_mode"] == "local"
    assert data["checks"]["email"] == "configured"


def test_root_endpoint(client):
    """Test that the root endpoint returns API information."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "running"
    assert data["environment"] == "testing"


def test_responses_carry_timing_and_request_id(client):
    response = client.get("/health")
    assert "X-Process-Time" in response.headers
    assert response.headers["X-Request-ID"]


def test_cors_allows_frontend_origin(client):
    response = client.options(
        "/doctors",
        headers={"Origin": "http://front.test", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://front.test"

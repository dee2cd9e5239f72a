"""Tests for service liveness, readiness and info endpoints."""

from unittest.mock import AsyncMock, patch


def test_liveness(client):
    for path in ("/health", "/api/health"):
        body = client.get(path).json()
        assert body["success"] is True
        assert body["status"] == "UP"
        assert "timestamp" in body


def test_root_lists_endpoints(client):
    body = client.get("/").json()

    assert body["name"] == "ToolsVault API"
    assert body["endpoints"]["blog"] == "/api/blog"


def test_readiness_reports_each_dependency(client):
    with patch("app.api.health.check_db_connection"), \
            patch("app.api.health.ping_redis", new=AsyncMock()):
        response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"] == {"database": "UP", "redis": "UP"}


def test_readiness_is_503_when_redis_is_down(client):
    with patch("app.api.health.check_db_connection"), \
            patch("app.api.health.ping_redis", new=AsyncMock(side_effect=ConnectionError("refused"))):
        response = client.get("/health/ready")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "NOT_READY"
    assert body["checks"] == {"database": "UP", "redis": "DOWN"}

"""Tests for the admin token check."""

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app
from app.services.blog_service import blog_service


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")


def test_development_allows_admin_routes_without_token(client):
    assert client.get("/api/blog/stats").status_code == 200


def test_production_requires_token(client, production):
    response = client.get("/api/blog/stats")

    assert response.status_code == 403
    assert response.json() == {"success": False, "error": "Admin access required"}


def test_production_rejects_wrong_token(client, production):
    response = client.get("/api/blog/stats", headers={"X-ADMIN-TOKEN": "wrong"})
    assert response.status_code == 403


def test_production_accepts_valid_token(client, production):
    response = client.get("/api/blog/stats", headers={"X-ADMIN-TOKEN": settings.ADMIN_SECRET_KEY})
    assert response.status_code == 200


def test_public_routes_need_no_token(client, production):
    assert client.get("/api/blog/public").status_code == 200
    assert client.post("/api/connections", json={"email": "reader@example.com"}).status_code == 201


def test_production_hides_unexpected_error_details(client, production, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(blog_service, "list_public", explode)
    response = TestClient(app, raise_server_exceptions=False).get("/api/blog/public")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Server Error"}

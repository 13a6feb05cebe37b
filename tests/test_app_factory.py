"""
Tests for api/app.py — create_app() factory

Verifies the FastAPI app is created with correct configuration,
routers are registered, and middleware is functional.
"""
import json
import logging
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import api.app as app_module
from api.app import create_app


@pytest.fixture()
def app(fake_container_cls, fallback_rows):
    return create_app(container=fake_container_cls(rows=fallback_rows))


class TestCreateApp:
    def test_creates_fastapi_instance(self, app):
        assert app.title == "Government Spending API"
        assert app.version == "1.0.0"

    def test_registers_api_routes(self, app):
        route_paths = {getattr(r, "path", "") for r in app.routes}
        assert "/api/spending" in route_paths
        assert "/api/dashboard" in route_paths
        assert "/health" in route_paths
        assert "/" in route_paths

    def test_container_override_is_per_app(self, fake_container_cls):
        a = TestClient(create_app(container=fake_container_cls(rows=[])))
        b = TestClient(create_app(container=fake_container_cls(
            rows=[{"department": "A", "year": 2022, "amount": 1}])))
        assert a.get("/api/spending").json() == []
        assert len(b.get("/api/spending").json()) == 1


class TestHealthEndpoint:
    def test_health_ok(self, app):
        resp = TestClient(app).get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["cosmos_configured"] is True

    def test_health_unconfigured(self, monkeypatch):
        for var in ("COSMOS_ENDPOINT", "COSMOS_KEY", "COSMOS_DATABASE", "COSMOS_CONTAINER"):
            monkeypatch.delenv(var, raising=False)
        resp = TestClient(create_app()).get("/health")
        assert resp.status_code == 200
        assert resp.json()["cosmos_configured"] is False


class TestMiddleware:
    def test_security_headers(self, app):
        resp = TestClient(app).get("/health")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert "cdn.jsdelivr.net" in resp.headers["Content-Security-Policy"]

    def test_cors_preflight(self, app):
        resp = TestClient(app).options(
            "/api/spending",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert resp.status_code == 200
        assert "access-control-allow-origin" in resp.headers

    def test_request_logged(self, app, caplog):
        with caplog.at_level(logging.INFO, logger="spending_api"):
            TestClient(app).get("/health")
        assert "path=/health" in caplog.text

    def test_startup_logs_masked_settings(self, monkeypatch, caplog):
        monkeypatch.setenv("COSMOS_KEY", "top-secret-key")
        with caplog.at_level(logging.INFO, logger="spending_api"):
            with TestClient(create_app()):
                pass
        assert "startup cosmos_config=" in caplog.text
        assert "'key': '***'" in caplog.text
        assert "top-secret-key" not in caplog.text


class TestErrorHandlers:
    def test_unhandled_exception_returns_json(self, fake_container_cls):
        app = create_app(container=fake_container_cls(error=RuntimeError("kaboom")))
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/api/spending")
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Internal server error"
        assert body["status_code"] == 500

    def test_value_error_is_400(self, fake_container_cls):
        app = create_app(container=fake_container_cls(error=ValueError("bad input")))
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/api/spending")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "bad input"


class TestJsonFormatter:
    def test_formats_extra_fields(self):
        formatter = app_module._JsonFormatter()
        record = logging.LogRecord(
            "spending_api", logging.INFO, __file__, 1, "request", None, None,
        )
        record.path = "/api/spending"
        record.status = 200
        data = json.loads(formatter.format(record))
        assert data["message"] == "request"
        assert data["level"] == "INFO"
        assert data["path"] == "/api/spending"
        assert data["status"] == 200

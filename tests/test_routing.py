"""Tests for route dispatch, liveness and the app factory."""

import asyncio
import logging

import psycopg
import pytest
from fastapi.testclient import TestClient

from chirpy import main as main_module
from chirpy.config import ApiConfig, load_settings
from chirpy.db import check_db


class TestHealthz:

    def test_ok(self, client):
        response = client.get("/api/healthz")
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/plain; charset=utf-8"
        assert response.text == "OK"

    def test_head_allowed(self, client):
        response = client.head("/api/healthz")
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/plain; charset=utf-8"


class TestRouting:

    def test_unknown_path_is_empty_404(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert response.content == b""

    def test_docs_not_exposed(self, client):
        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404

    def test_metrics_requires_get(self, client):
        response = client.post("/admin/metrics")
        assert response.status_code == 405
        assert "GET" in response.headers["allow"]

    def test_metrics_answers_head(self, client, api_config):
        response = client.head("/admin/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html"
        assert api_config.fileserver_hits.load() == 0

    def test_reset_requires_post(self, client, api_config):
        client.get("/app/index.html")
        response = client.get("/admin/reset")
        assert response.status_code == 405
        assert api_config.fileserver_hits.load() == 1

    def test_validate_requires_post(self, client):
        assert client.get("/api/validate_chirp").status_code == 405

    def test_app_without_slash_redirects(self, client, api_config):
        response = client.get("/app", follow_redirects=False)
        assert response.status_code in (301, 307, 308)
        assert response.headers["location"].endswith("/app/")
        assert api_config.fileserver_hits.load() == 0


class TestStartup:

    def test_db_check_skipped_without_url(self, api_config, monkeypatch):
        called = []

        async def fake_check(url):
            called.append(url)

        monkeypatch.setattr(main_module, "check_db", fake_check)
        with TestClient(main_module.create_app(api_config)) as client:
            assert client.get("/api/healthz").status_code == 200
        assert called == []

    def test_db_failure_is_not_fatal(self, static_root, monkeypatch, caplog):
        async def failing_check(url):
            raise OSError("connection refused")

        monkeypatch.setattr(main_module, "check_db", failing_check)
        cfg = ApiConfig(filepath_root=static_root, db_url="postgresql://localhost/chirpy")
        with caplog.at_level(logging.WARNING, logger="chirpy.main"):
            with TestClient(main_module.create_app(cfg)) as client:
                assert client.get("/api/healthz").text == "OK"
        assert "database check failed" in caplog.text

    def test_check_db_unreachable_raises(self):
        with pytest.raises(psycopg.OperationalError):
            asyncio.run(check_db("postgresql://chirpy@127.0.0.1:1/chirpy?connect_timeout=2"))


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DB_URL", raising=False)
        monkeypatch.delenv("CHIRPY_LOG_LEVEL", raising=False)
        settings = load_settings()
        assert settings.db_url is None
        assert settings.log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("DB_URL", "postgres://user@db/chirpy")
        monkeypatch.setenv("CHIRPY_LOG_LEVEL", "debug")
        settings = load_settings()
        assert settings.db_url == "postgres://user@db/chirpy"
        assert settings.log_level == "DEBUG"

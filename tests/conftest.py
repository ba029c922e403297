"""Shared fixtures: a fresh app per test serving a temporary static root."""

import pytest
from fastapi.testclient import TestClient

from chirpy.config import ApiConfig
from chirpy.main import create_app


INDEX_HTML = "<html><body><h1>Welcome to Chirpy</h1></body></html>"


@pytest.fixture
def static_root(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "assets").mkdir()
    (root / "assets" / "logo.txt").write_text("chirpy logo", encoding="utf-8")
    return root


@pytest.fixture
def api_config(static_root):
    return ApiConfig(filepath_root=static_root)


@pytest.fixture
def client(api_config):
    return TestClient(create_app(api_config))

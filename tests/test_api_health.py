"""Tests for the health check API endpoint."""

from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def test_client():
    """Create a test client for the API router."""
    from fastapi import FastAPI
    from promptsmith.api.routes import router

    app = FastAPI()
    app.include_router(router, prefix="/api")

    return TestClient(app)


class TestHealthEndpoint:
    """Test the /api/health endpoint."""

    def test_health_check_returns_ok_status(self, test_client):
        """Test that health check returns status 'ok'."""
        response = test_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "promptsmith"

    def test_health_check_includes_config(self, test_client):
        response = test_client.get("/api/health")

        config = response.json()["config"]
        assert isinstance(config["root_dir_configured"], bool)
        assert isinstance(config["resolve_files"], bool)
        assert isinstance(config["extra_ignore_patterns"], int)

    @patch("promptsmith.config.settings")
    def test_health_check_does_not_expose_root_dir(self, mock_settings, test_client):
        """Test that the configured root is reported only as present."""
        mock_settings.root_dir = Path("/srv/private/prompts")
        mock_settings.resolve_files = True
        mock_settings.extra_ignore_patterns = ["*.csv", "*.tsv"]

        response = test_client.get("/api/health")

        config = response.json()["config"]
        assert config["root_dir_configured"] is True
        assert config["resolve_files"] is True
        assert config["extra_ignore_patterns"] == 2
        assert "/srv/private" not in response.text


class TestCreateApp:
    """Test the application factory."""

    def test_create_app_mounts_api(self):
        from promptsmith.api import create_app

        client = TestClient(create_app())
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

"""
Integration tests for the FastAPI server.
Uses the real FastAPI TestClient; only the opencode CLI call is replaced.
"""
import json
import subprocess

import pytest
from fastapi.testclient import TestClient

from config import SCHEMA_URL
from core.exceptions import ExternalToolUnavailable
from server import app, init_state
from server.routes import models as models_routes


@pytest.fixture
def static_dir(temp_dir):
    """A built UI with an index page and one asset."""
    dist = temp_dir / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<html>shell</html>")
    (dist / "assets" / "app.js").write_text("console.log('app')")
    return dist


@pytest.fixture
def client(template_store, static_dir):
    """Create a test client with fresh per-test state."""
    init_state(app, template_store, static_dir=static_dir, models_timeout=5)
    return TestClient(app)


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health(self, client):
        """Test health endpoint fields."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"
        assert data["timestamp"].endswith("Z")


class TestConfigEndpoints:
    """Test config file endpoints."""

    def test_config_path(self, client, monkeypatch, temp_dir):
        """Test the default config path."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        response = client.get("/api/config/path")

        assert response.status_code == 200
        assert response.json()["path"].endswith("opencode.json")

    def test_read_existing(self, client, config_file):
        """Test reading a file returns its raw text."""
        response = client.get("/api/config", params={"path": str(config_file)})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == config_file.read_text()

    def test_read_missing_file(self, client, temp_dir):
        """Test that a missing file reads as the minimal document."""
        response = client.get("/api/config", params={"path": str(temp_dir / "none.json")})

        assert response.status_code == 200
        assert json.loads(response.text) == {"$schema": SCHEMA_URL}

    def test_read_without_path(self, client):
        """Test that the path parameter is required."""
        response = client.get("/api/config")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_read_io_error(self, client, temp_dir):
        """Test that unreadable paths report a server error."""
        response = client.get("/api/config", params={"path": str(temp_dir)})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to read config file"
        assert data["path"] == str(temp_dir)

    def test_write(self, client, temp_dir):
        """Test writing a file, creating its parent directory."""
        target = temp_dir / "new" / "opencode.json"
        response = client.post("/api/config", json={"path": str(target), "content": '{"model": "a/b"}'})

        assert response.status_code == 200
        assert response.json() == {"success": True, "path": str(target)}
        assert target.read_text() == '{"model": "a/b"}'

    def test_write_missing_content(self, client, temp_dir):
        """Test that the body must include content."""
        response = client.post("/api/config", json={"path": str(temp_dir / "x.json")})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


class TestModelsEndpoint:
    """Test the model listing endpoint."""

    def test_models(self, client, monkeypatch):
        """Test parsed output and grouping."""
        calls = []

        async def fake_run(provider=None, timeout=None):
            calls.append((provider, timeout))
            return "anthropic/claude-sonnet-4\nopenai/gpt-4o\nanthropic/claude-sonnet-4\n"

        monkeypatch.setattr(models_routes, "run_models_command", fake_run)
        response = client.get("/api/models", params={"provider": "anthropic"})

        assert response.status_code == 200
        data = response.json()
        assert calls == [("anthropic", 5)]
        assert data["output"].startswith("anthropic/claude-sonnet-4")
        assert [m["fullId"] for m in data["models"]] == ["anthropic/claude-sonnet-4", "openai/gpt-4o"]
        assert list(data["byProvider"]) == ["anthropic", "openai"]

    def test_tool_unavailable(self, client, monkeypatch):
        """Test that a missing CLI is reported as 503."""

        async def fake_run(provider=None, timeout=None):
            raise ExternalToolUnavailable("opencode", ["opencode models"])

        monkeypatch.setattr(models_routes, "run_models_command", fake_run)
        response = client.get("/api/models")

        assert response.status_code == 503
        assert response.json() == {
            "error": "Failed to run opencode models",
            "message": "opencode command not found",
        }

    def test_command_failure(self, client, monkeypatch):
        """Test that a failing CLI is reported as 500 with its message."""

        async def fake_run(provider=None, timeout=None):
            raise subprocess.CalledProcessError(1, "opencode models")

        monkeypatch.setattr(models_routes, "run_models_command", fake_run)
        response = client.get("/api/models")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to run opencode models"
        assert "exit status 1" in data["message"]


class TestTemplatesEndpoint:
    """Test the template listing endpoint."""

    def test_templates(self, client, template_store):
        """Test that built-in and user templates are listed."""
        saved = template_store.save_as_template("Mine", "desc", {"model": "a/b"})

        response = client.get("/api/templates")

        assert response.status_code == 200
        data = response.json()
        assert len(data["builtin"]) == 10
        assert data["builtin"][0]["id"] == "developer-default"
        assert data["user"] == [saved.to_record()]


class TestFallbackRoutes:
    """Test unknown paths and the web UI."""

    def test_unknown_api_path(self, client):
        """Test that unknown API paths return JSON 404."""
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "API endpoint not found", "path": "/api/nope"}

    def test_unknown_api_method(self, client):
        """Test that unknown API routes for other methods are JSON errors too."""
        response = client.delete("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "API endpoint not found", "path": "/api/nope"}

    def test_unknown_api_post(self, client):
        """Test that POSTs to unknown API paths are 404 rather than 405."""
        response = client.post("/api/nope", json={})

        assert response.status_code == 404
        assert response.json()["error"] == "API endpoint not found"

    def test_known_api_path_wrong_method(self, client):
        """Test that an unsupported method on an API path is a JSON 404."""
        response = client.delete("/api/health")

        assert response.status_code == 404
        assert response.json()["path"] == "/api/health"

    def test_spa_fallback(self, client):
        """Test that client-side routes serve the shell."""
        response = client.get("/settings/providers")

        assert response.status_code == 200
        assert response.text == "<html>shell</html>"

    def test_root(self, client):
        """Test that the root serves the shell."""
        assert client.get("/").text == "<html>shell</html>"

    def test_static_asset(self, client):
        """Test that built assets are served."""
        response = client.get("/assets/app.js")

        assert response.status_code == 200
        assert response.text == "console.log('app')"

    def test_no_escape_from_static_dir(self, client, temp_dir):
        """Test that paths outside the static directory are not served."""
        (temp_dir / "secret.txt").write_text("secret")
        response = client.get("/..%2Fsecret.txt")

        assert response.text != "secret"

"""Tests for application wiring: root, health, errors, config and logging."""

import logging
from datetime import datetime

from task_api.config import Settings
from task_api.deps import get_settings
from task_api.utils.logging import ColoredFormatter, setup_logging


class TestRootAndHealth:
    """Test the metadata and health endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Task Tracker API"
        assert data["version"] == "1.0.0"
        assert data["health_check"] == "/health"
        assert data["endpoints"]["tasks"] == "/tasks"
        assert data["endpoints"]["stats"] == "/tasks/stats"

    def test_health_endpoint(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))

    def test_health_uptime_grows(self, client):
        first = client.get("/health").json()["uptime"]
        second = client.get("/health").json()["uptime"]

        assert second >= first

    def test_uptime_counts_from_startup(self, app):
        from fastapi.testclient import TestClient

        assert getattr(app.state, "started_at", None) is None
        assert TestClient(app).get("/health").json()["uptime"] == 0.0

        with TestClient(app) as client:
            assert app.state.started_at is not None
            assert client.get("/health").json()["uptime"] >= 0


class TestErrorEnvelope:
    """Test the error body returned for framework-level failures."""

    def test_unknown_route(self, client):
        response = client.get("/404")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Not Found"
        assert body["message"] == "Not Found - /404"
        assert body["status"] == 404
        assert "timestamp" in body

    def test_timestamp_uses_z_suffix(self, client, task_service):
        task = task_service.create_task({"title": "x"})

        error = client.get("/tasks/nonexistent").json()
        fetched = client.get(f"/tasks/{task.id}").json()

        assert error["timestamp"].endswith("Z")
        assert fetched["createdAt"].endswith("Z")
        datetime.fromisoformat(error["timestamp"].replace("Z", "+00:00"))

    def test_method_not_allowed(self, client):
        response = client.patch("/tasks/some-id", json={"title": "x"})

        assert response.status_code == 405
        body = response.json()
        assert body["error"] == "Method Not Allowed"
        assert body["status"] == 405

    def test_cors_headers(self, client):
        response = client.get("/tasks", headers={"Origin": "http://localhost:3000"})

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


class TestSettings:
    """Test configuration loading."""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "HOST", "LOG_LEVEL", "LOG_FILE", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 5000
        assert settings.host == "0.0.0.0"
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.cors_origins == ["*"]

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8123")

        settings = Settings(_env_file=None)

        assert settings.port == 8123

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestLogging:
    """Test logging setup and request logging."""

    def test_setup_logging_is_idempotent(self, test_settings):
        root_logger = logging.getLogger()
        foreign = logging.NullHandler()
        root_logger.addHandler(foreign)
        try:
            setup_logging(test_settings)
            first_count = len(root_logger.handlers)
            setup_logging(test_settings)

            assert len(root_logger.handlers) == first_count
            assert foreign in root_logger.handlers
        finally:
            root_logger.removeHandler(foreign)

    def test_setup_logging_with_file(self, test_settings, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        settings = test_settings.model_copy(update={"log_file": log_file})

        setup_logging(settings)
        logging.getLogger("task_api.test").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "written to file" in log_file.read_text(encoding="utf-8")

        # Detach the file handler again
        setup_logging(test_settings)

    def test_colored_formatter_restores_levelname(self):
        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s")
        record = logging.LogRecord("t", logging.WARNING, __file__, 1, "careful", (), None)

        output = formatter.format(record)

        assert "\033[33mWARNING" in output
        assert record.levelname == "WARNING"

    def test_request_logging(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="task_api.requests"):
            client.get("/tasks")
            client.get("/tasks/nonexistent")

        messages = [r.getMessage() for r in caplog.records if r.name == "task_api.requests"]
        assert any(m.startswith("GET /tasks - 200") for m in messages)

        warnings = [r for r in caplog.records if r.name == "task_api.requests" and r.levelno == logging.WARNING]
        assert any("GET /tasks/nonexistent - 404" in r.getMessage() for r in warnings)

    def test_service_logs_creation(self, task_service, caplog):
        with caplog.at_level(logging.INFO, logger="task_api.services.task_service"):
            task = task_service.create_task({"title": "Logged"})

        assert f"Created task {task.id}: Logged" in caplog.text

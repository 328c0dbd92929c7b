"""Shared test fixtures and configuration for the test suite."""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from task_api.config import Settings
from task_api.main import create_app
from task_api.services.task_service import TaskService
from task_api.services.task_store import TaskStore


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings without touching the environment."""
    return Settings(
        app_name="Task Tracker API",
        app_version="1.0.0",
        port=5000,
        environment="test",
        log_level="DEBUG",
        log_file=None,
    )


@pytest.fixture
def task_store() -> TaskStore:
    """Create an empty task store."""
    return TaskStore()


@pytest.fixture
def task_service(task_store) -> TaskService:
    """Create a task service over the test store."""
    return TaskService(task_store)


@pytest.fixture
def app(test_settings, task_service) -> FastAPI:
    """Create an application serving the test task service."""
    return create_app(settings=test_settings, task_service=task_service)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


# Test data fixtures
@pytest.fixture
def sample_task_data():
    """Sample task data for testing."""
    return {"title": "Test Task", "description": "This is a test task description"}


@pytest.fixture
def tasks_of_each_status():
    """One creation payload per status."""
    return [
        {"title": "Write report", "status": "pending"},
        {"title": "Review code", "status": "in progress"},
        {"title": "Deploy", "status": "completed"},
    ]

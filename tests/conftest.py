"""Shared pytest fixtures for the meal planner test suite."""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mealplan.config import get_settings
from mealplan.db.repository import reset_repository_state
from mealplan.server.app import create_app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database and image directory."""

    db_path = tmp_path / "test_mealplan.db"
    monkeypatch.setenv("MEALPLAN_DATABASE_PATH", str(db_path))
    monkeypatch.setenv("MEALPLAN_IMAGE_DIR", str(tmp_path / "images"))
    monkeypatch.delenv("MEALPLAN_API_TOKEN", raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("MEALPLAN_DATABASE_PATH", raising=False)
    monkeypatch.delenv("MEALPLAN_IMAGE_DIR", raising=False)
    get_settings.cache_clear()


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)

"""Shared pytest fixtures for clockface tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from clockface.app import create_app
from clockface.config.settings import ClockSettings
from clockface.service import ClockService

# 2024-03-10 22:15:30 UTC: late enough in the day that most eastern zones
# are already on the next calendar date.
FIXED_NOW = datetime(2024, 3, 10, 22, 15, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host env vars and any local .env out of settings."""
    for key in list(os.environ):
        if key.startswith("CLOCKFACE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ClockSettings:
    return ClockSettings(default_timezone="UTC")


@pytest.fixture
def service(settings: ClockSettings) -> ClockService:
    return ClockService(settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def client(settings: ClockSettings) -> Generator[TestClient]:
    app = create_app(settings, clock=lambda: FIXED_NOW)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

"""Shared fixtures for smartcal tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime

import pytest

from smartcal.auth import StaticSession
from smartcal.models.event import Event
from smartcal.store import InMemoryEventStore

_ENV_VARS = (
    "LOG_LEVEL",
    "SMARTCAL_SCORER",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "SCORING_TIMEOUT",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all smartcal-related environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("smartcal.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def gemini_env(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Configure the Gemini scorer with a fake key.

    Returns the dict of variables so tests can inspect or override values.
    """
    env_vars = {
        "SMARTCAL_SCORER": "gemini",
        "GEMINI_API_KEY": "test-gemini-key-12345",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)


@pytest.fixture()
def now() -> datetime:
    """A fixed reference time: Wednesday 2026-03-18 10:42:17."""
    return datetime(2026, 3, 18, 10, 42, 17)


@pytest.fixture()
def work_event() -> Event:
    """A valid one-hour work event."""
    return Event(
        id="evt-work",
        title="Quarterly planning",
        description="Roadmap review",
        location="Room 4B",
        start_time=datetime(2026, 6, 25, 15, 0),
        end_time=datetime(2026, 6, 25, 16, 0),
        category="work",
    )


@pytest.fixture()
def store() -> InMemoryEventStore:
    """An empty in-memory store."""
    return InMemoryEventStore()


@pytest.fixture()
def alice() -> StaticSession:
    """A session logged in as ``alice``."""
    return StaticSession("alice")

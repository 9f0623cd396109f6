"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from repwise.config import get_settings
from repwise.db import InMemoryProgressStore
from repwise.models.feedback import WorkoutFeedbackEntry
from repwise.models.progress import ProgressState
from repwise.services.engine import ProgressEngine


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def clock():
    """A clock fixed at Wednesday 2024-01-17 18:00."""
    return FixedClock(datetime(2024, 1, 17, 18, 0))


@pytest.fixture
def memory_store():
    return InMemoryProgressStore()


@pytest.fixture
def engine(memory_store, clock):
    """Progress engine over an in-memory store with a fixed clock."""
    return ProgressEngine(store=memory_store, user_id="test-user", clock=clock)


@pytest.fixture
def progress():
    """Fresh progress state."""
    return ProgressState.initial()


@pytest.fixture
def make_entry():
    """Factory for feedback entries with sensible defaults."""

    def _make(timestamp: datetime | str, difficulty: str = "perfect", **kwargs):
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        kwargs.setdefault("workout_id", f"w-{timestamp:%Y%m%d%H%M%S}")
        return WorkoutFeedbackEntry(difficulty=difficulty, timestamp=timestamp, **kwargs)

    return _make


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temporary data directory."""
    monkeypatch.setenv("REPWISE_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()

"""Shared pytest fixtures for TRAXR tests.

This module provides fixtures for:
- Settings pointing at a per-test snapshot directory
- A deterministic stub scorer
- Writing producer snapshot files
- A controllable clock

Usage:
    @pytest.mark.unit
    def test_something(settings, stub_scorer, write_snapshot):
        write_snapshot("xrplPools.json", [RawPoolRecordFactory()])
"""

import json
import os
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from tests.factories import StubScorer
from traxr.config.settings import Settings, get_settings

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_environment() -> Generator[None, None, None]:
    """Drop TRAXR_* variables and the settings cache around each test."""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("TRAXR_"):
            del os.environ[key]
    get_settings.cache_clear()

    yield

    os.environ.clear()
    os.environ.update(original_env)
    get_settings.cache_clear()


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Empty snapshot directory."""
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(snapshot_dir: Path) -> Settings:
    """Settings reading from the per-test snapshot directory."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        local_pools_path=snapshot_dir / "xrplPools.json",
        snapshot_dir=snapshot_dir,
    )


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def stub_scorer() -> StubScorer:
    return StubScorer()


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def fresh_scheduler(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start each test without the process-wide refresh scheduler."""
    monkeypatch.setattr("traxr.scheduler.scheduler._scheduler", None)


# =============================================================================
# Snapshot files
# =============================================================================


@pytest.fixture
def write_snapshot(snapshot_dir: Path) -> Callable[..., Path]:
    """Write a JSON snapshot file into the snapshot directory.

    Args:
        name: File name.
        records: JSON-serializable content (normally a list of records).
        mtime: Optional modification time (epoch seconds).
    """

    def _write(name: str, records: Any, mtime: float | None = None) -> Path:
        path = snapshot_dir / name
        path.write_text(json.dumps(records), encoding="utf-8")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _write

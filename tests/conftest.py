# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tasg.tasks.task_store import TaskStore


class FakeClock:
    """
    Deterministic clock: every call returns a time one minute after the previous one.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 16, 9, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        self.calls += 1
        return current


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """The CLI reconfigures the root logger; drop whatever it attached after each test."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasg" / "tasks.json"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_store(tasks_file: Path, clock: FakeClock) -> Callable[[], TaskStore]:
    """Load the store from the per-test task file, the way each CLI invocation does."""

    def _load() -> TaskStore:
        return TaskStore.load(tasks_file, clock=clock)

    return _load


@pytest.fixture()
def store(make_store) -> TaskStore:
    return make_store()


@pytest.fixture()
def cli_env(tmp_path: Path, tasks_file: Path) -> dict[str, str]:
    """
    Environment for CliRunner: everything lives under tmp_path.

    We pass it explicitly instead of relying on the real config dir.
    """
    return {
        "TASG_DATA_DIR": str(tmp_path / "data"),
        "TASG_FILE": str(tasks_file),
        "TASG_LOG_TO_FILE": "false",
        "TASG_LOG_LEVEL": "WARNING",
    }

# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from tasg.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.makeLogRecord({"name": name, "levelno": level, "msg": "x"})


def test_console_filter_passes_own_logs_and_only_errors_from_others() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("tasg.tasks.task_store", logging.DEBUG))
    assert f.filter(_record("tasg", logging.INFO))

    for name in ("py.warnings", "urllib3", "tasgx"):
        assert not f.filter(_record(name, logging.WARNING))
        assert f.filter(_record(name, logging.ERROR))


def test_log_file_rotates(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "tasg.log"
    setup_logging(log_file=log_file, max_bytes=500, backup_count=2)

    log = logging.getLogger("tasg.rotation")
    for i in range(200):
        log.debug("line %03d padded to make the file grow quickly", i)

    assert log_file.exists()
    assert (tmp_path / "logs" / "tasg.log.1").exists()
    assert not (tmp_path / "logs" / "tasg.log.3").exists()
    assert log_file.stat().st_size <= 500


def test_setup_twice_does_not_duplicate_handlers(tmp_path: Path) -> None:
    setup_logging(log_file=tmp_path / "a.log")
    setup_logging(log_file=tmp_path / "a.log")
    assert len(logging.getLogger().handlers) == 2

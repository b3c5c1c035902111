# tests/test_logging_setup.py

from __future__ import annotations

import logging

from task_tracker.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_lets_app_logs_through() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("task_tracker", logging.DEBUG))
    assert f.filter(_record("task_tracker.tasks.task_store", logging.INFO))
    # prefix match only on the package boundary
    assert not f.filter(_record("task_tracker_extra", logging.INFO))


def test_console_filter_mutes_third_party_below_error() -> None:
    f = _ConsoleNoiseFilter()
    for name in ("httpx", "httpcore", "py.warnings", "asyncio"):
        assert not f.filter(_record(name, logging.WARNING))
        assert f.filter(_record(name, logging.ERROR))

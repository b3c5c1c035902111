# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.tasks.task_models import Task
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeTaskApi


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="DEBUG",
        api_url="http://tasks.test",
        api_timeout_seconds=1.0,
        api_connect_timeout_seconds=1.0,
        api_connect_retries=0,
        data_dir=tmp_path / "data",
        cache_enabled=True,
        cache_path=tmp_path / "data" / "tasks_cache.json",
        page_size=5,
    )


@pytest.fixture()
def api() -> FakeTaskApi:
    return FakeTaskApi(
        [
            Task(id=1, text="Buy milk", completed=False),
            Task(id=2, text="Walk dog", completed=True),
        ]
    )


@pytest.fixture()
def store(api: FakeTaskApi) -> TaskStore:
    # fixed clock -> predictable placeholder ids (1_000_000)
    return TaskStore(api, clock=lambda: 1000.0)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)

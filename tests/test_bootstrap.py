# tests/test_bootstrap.py

from __future__ import annotations

import pytest

from task_tracker.cli.bootstrap import create_initial_state
from task_tracker.config import Settings
from task_tracker.tasks.task_cache import JsonTaskCache
from task_tracker.tasks.task_models import Task

from .fakes import FakeTaskApi


@pytest.mark.asyncio
async def test_bootstrap_restores_cache_then_load_persists(settings) -> None:
    JsonTaskCache(settings.cache_path).put([Task(9, "from last session")])
    api = FakeTaskApi([Task(1, "fresh")])

    state = create_initial_state(settings=settings, api=api)

    assert state.store.tasks == [Task(9, "from last session")]
    assert state.store.view.page_size == 5

    await state.store.load()

    assert state.store.tasks == [Task(1, "fresh")]
    assert JsonTaskCache(settings.cache_path).get() == [Task(1, "fresh")]


def test_bootstrap_without_cache(settings) -> None:
    settings.cache_enabled = False
    state = create_initial_state(settings=settings, api=FakeTaskApi())

    assert state.store.tasks == []
    assert not settings.cache_path.exists()


def test_settings_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TASKS_API_URL", "http://backend:8080")
    monkeypatch.setenv("TASKS_API_CONNECT_RETRIES", "2")
    monkeypatch.setenv("TASKS_PAGE_SIZE", "0")
    monkeypatch.setenv("TASKS_CACHE_ENABLED", "no")
    monkeypatch.setenv("TASKS_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TASKS_CACHE_PATH", raising=False)
    monkeypatch.setenv("TASKS_API_TIMEOUT_SECONDS", "soon")

    s = Settings.from_env()

    assert s.api_url == "http://backend:8080"
    assert s.api_connect_retries == 2
    assert s.page_size == 1
    assert s.cache_enabled is False
    assert s.cache_path == tmp_path / "tasks_cache.json"
    assert s.api_timeout_seconds == 10.0

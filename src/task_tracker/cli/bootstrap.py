# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP task API, the optional cache and the store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskApi, TaskCache
from ..core.state import AppState
from ..tasks.task_api import build_task_api
from ..tasks.task_cache import JsonTaskCache
from ..tasks.task_store import NotifyCallback, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.cache_enabled:
        settings.cache_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    api: TaskApi | None = None,
    on_notify: NotifyCallback | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and the API injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if api is None:
        api = build_task_api(settings)

    cache: TaskCache | None = None
    if settings.cache_enabled:
        cache = JsonTaskCache(settings.cache_path)

    store = TaskStore(api, cache=cache, page_size=settings.page_size, on_notify=on_notify)
    store.restore_cached()

    logger.info("Task store ready api=%s cache=%s", settings.api_url, cache.path if cache else None)
    return AppState(settings=settings, store=store)

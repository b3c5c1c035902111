# src/task_tracker/tasks/task_cache.py

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class JsonTaskCache:
    """
    Last known task list as a JSON file.

    Only used to show something before the first remote load completes.
    Read/write failures are logged and never raised.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> list[Task] | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read task cache from %s", self._path)
            return None

        if not isinstance(data, list):
            logger.warning("Ignoring task cache %s: expected a list", self._path)
            return None

        out: list[Task] = []
        seen: set[int] = set()
        for raw in data:
            try:
                task = Task.from_api(raw)
            except ValueError:
                logger.debug("Skipping bad cache entry: %r", raw)
                continue
            if task.id in seen:
                continue
            seen.add(task.id)
            out.append(task)

        logger.debug("Loaded %d cached tasks from %s", len(out), self._path)
        return out

    def put(self, tasks: list[Task]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            payload = [t.to_api() for t in tasks]
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            logger.exception("Failed to write task cache to %s", self._path)

# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from ..core.errors import TransportError
from ..core.ports import TaskApi, TaskCache
from .task_models import Notification, Severity, SortKey, Task, TaskFilter, ViewState
from .task_views import TaskPage, build_view, completed_count

logger = logging.getLogger(__name__)

NotifyCallback = Callable[[Notification], None]


@dataclass(slots=True, frozen=True)
class _Undo:
    """
    Compensating action for one in-flight mutation.

    - toggle: put back the captured `completed` value of that task
    - delete: re-insert the captured task at its captured position
    """

    kind: str
    task: Task
    index: int


class TaskStore:
    """
    In-memory task collection mirrored optimistically against a remote TaskApi.

    Every mutation applies its local change before its first await, then
    confirms with the API. On failure the change is compensated, the error
    slot is filled and an error notification is emitted.

    Collaborator failures never escape: mutation coroutines return a bool
    (or the confirmed Task) instead of raising.
    """

    def __init__(
        self,
        api: TaskApi,
        *,
        cache: TaskCache | None = None,
        page_size: int = 5,
        on_notify: NotifyCallback | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._api = api
        self._cache = cache
        self._on_notify = on_notify
        self._clock = clock

        self._tasks: list[Task] = []
        # placeholder ids whose add is still in flight; never written to the cache
        self._pending_ids: set[int] = set()

        self.view = ViewState(page_size=max(1, int(page_size)))
        self.notification = Notification()
        # The first load is expected to start right away.
        self.initial_loading = True
        self.retrying = False
        self.error: str | None = None

    # ---- read side ----

    @property
    def tasks(self) -> list[Task]:
        """Raw collection in insertion order (a copy)."""
        return list(self._tasks)

    @property
    def completed_count(self) -> int:
        return completed_count(self._tasks)

    def visible(self) -> TaskPage:
        """Current page of the filtered + searched + sorted collection."""
        return build_view(self._tasks, self.view)

    def filtered_tasks(self) -> list[Task]:
        return self.visible().filtered

    def get(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    # ---- view state ----

    def set_filter(self, value: TaskFilter | str) -> None:
        self.view.filter = TaskFilter.parse(value)
        self.view.page = 1

    def set_search(self, value: str) -> None:
        self.view.search = value or ""
        self.view.page = 1

    def set_sort(self, value: SortKey | str) -> None:
        self.view.sort_by = SortKey.parse(value)
        self.view.page = 1

    def set_page(self, page: int) -> None:
        self.view.page = max(1, int(page))

    def set_page_size(self, page_size: int) -> None:
        self.view.page_size = max(1, int(page_size))
        self.view.page = 1

    # ---- feedback ----

    def notify(self, message: str, severity: Severity | str = Severity.INFO) -> None:
        """Replace the current notification (no queueing)."""
        self.notification = Notification(open=True, message=message, severity=Severity.parse(severity))
        if self._on_notify is None:
            return
        try:
            self._on_notify(self.notification)
        except Exception:
            logger.exception("on_notify callback failed")

    def dismiss_notification(self) -> None:
        self.notification = replace(self.notification, open=False)

    # ---- cache ----

    def restore_cached(self) -> int:
        """
        Show the cached collection before the first remote load.

        Only applies while the collection is empty. Returns the number of tasks restored.
        """
        if self._cache is None or self._tasks:
            return 0
        cached = self._cache.get()
        if not cached:
            return 0
        self._tasks = list(cached)
        logger.info("Restored %d tasks from cache", len(cached))
        return len(cached)

    def _save_cache(self) -> None:
        if self._cache is None:
            return
        try:
            self._cache.put([t for t in self._tasks if t.id not in self._pending_ids])
        except Exception:
            logger.exception("Task cache write failed")

    # ---- low-level helpers ----

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _placeholder_id(self) -> int:
        taken = {t.id for t in self._tasks}
        candidate = int(self._clock() * 1000)
        while candidate in taken:
            candidate += 1
        return candidate

    def _record_failure(self, exc: Exception, default: str) -> None:
        if isinstance(exc, TransportError):
            logger.warning("%s: %s", default, exc)
        else:
            logger.exception("%s (unexpected error from task API)", default)
        self.error = str(exc).strip() or default

    def _rollback(self, undo: _Undo) -> None:
        if undo.kind == "toggle":
            idx = self._index_of(undo.task.id)
            if idx is None:
                # deleted meanwhile; nothing to compensate
                return
            self._tasks[idx] = replace(self._tasks[idx], completed=undo.task.completed)
        elif undo.kind == "delete":
            if self._index_of(undo.task.id) is not None:
                return
            self._tasks.insert(min(undo.index, len(self._tasks)), undo.task)
        else:
            raise ValueError(f"unknown undo kind: {undo.kind}")
        logger.debug("Rolled back %s id=%s", undo.kind, undo.task.id)

    def _confirm_created(self, temp_id: int, created: Task) -> None:
        idx = self._index_of(temp_id)
        if idx is None:
            # collection was replaced by a load while the add was in flight
            if self._index_of(created.id) is None:
                self._tasks.append(created)
            logger.info("Placeholder id=%s gone at confirmation; kept server task id=%s", temp_id, created.id)
            return

        dup = self._index_of(created.id)
        if dup is not None and dup != idx:
            # server id already present locally: keep one copy, at the older position
            self._tasks[dup] = created
            del self._tasks[idx]
            return

        self._tasks[idx] = created

    # ---- operations ----

    async def load(self, is_retry: bool = False) -> bool:
        """
        Replace the collection with the remote one.

        On failure the collection is left untouched; only the error slot changes.
        """
        if is_retry:
            self.retrying = True
        else:
            self.initial_loading = True
        self.error = None

        try:
            fetched = await self._api.fetch_all()
        except Exception as e:
            self._record_failure(e, "Failed to load tasks.")
            return False
        else:
            self._tasks = list(fetched)
            logger.info("Loaded %d tasks", len(self._tasks))
            self._save_cache()
            if is_retry:
                self.notify("Tasks refreshed", Severity.SUCCESS)
            return True
        finally:
            if is_retry:
                self.retrying = False
            else:
                self.initial_loading = False

    async def add_task(self, text: str) -> Task | None:
        """
        Append a placeholder task immediately, then swap in the server's task.

        Returns the confirmed task, or None if creation failed (placeholder removed).
        """
        temp_id = self._placeholder_id()
        self._tasks.append(Task(id=temp_id, text=text, completed=False))
        self._pending_ids.add(temp_id)
        self.notify("Task added", Severity.SUCCESS)
        logger.debug("Optimistic add id=%s", temp_id)

        try:
            created = await self._api.create(text)
        except Exception as e:
            self._tasks = [t for t in self._tasks if t.id != temp_id]
            self._record_failure(e, "Failed to add task")
            self.notify("Failed to add task", Severity.ERROR)
            return None
        finally:
            self._pending_ids.discard(temp_id)

        self._confirm_created(temp_id, created)
        self._save_cache()
        logger.debug("Add confirmed placeholder=%s id=%s", temp_id, created.id)
        return created

    async def toggle_task(self, task_id: int) -> bool:
        """Flip `completed` on one task. No-op (False) if the id is unknown."""
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("toggle_task: unknown id=%s", task_id)
            return False

        before = self._tasks[idx]
        desired = not before.completed
        undo = _Undo(kind="toggle", task=before, index=idx)

        self._tasks[idx] = replace(before, completed=desired)
        self.notify("Task updated", Severity.INFO)

        try:
            await self._api.set_completed(task_id, desired)
        except Exception as e:
            self._rollback(undo)
            self._record_failure(e, "Failed to update task")
            self.notify("Failed to update task", Severity.ERROR)
            return False

        self._save_cache()
        return True

    async def delete_task(self, task_id: int) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("delete_task: unknown id=%s", task_id)
            return False

        undo = _Undo(kind="delete", task=self._tasks[idx], index=idx)

        del self._tasks[idx]
        self.notify("Task deleted", Severity.INFO)

        try:
            await self._api.delete(task_id)
        except Exception as e:
            self._rollback(undo)
            self._record_failure(e, "Failed to delete task")
            self.notify("Failed to delete task", Severity.ERROR)
            return False

        self._save_cache()
        return True

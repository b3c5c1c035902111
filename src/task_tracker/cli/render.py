# src/task_tracker/cli/render.py

from __future__ import annotations

from ..tasks.task_models import Notification, Severity, Task
from ..tasks.task_store import TaskStore

_SEVERITY_TAG = {
    Severity.SUCCESS: "OK",
    Severity.INFO: "INFO",
    Severity.ERROR: "ERROR",
}


def render_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] #{task.id} {task.text}"


def render_notification(notification: Notification) -> str:
    return f"[{_SEVERITY_TAG[notification.severity]}] {notification.message}"


def render_tasks(store: TaskStore) -> str:
    """Header, current page of tasks, pager line."""
    page = store.visible()
    view = store.view

    lines = [f"Completed: {store.completed_count} / {page.filtered_count}"]

    details = [f"filter={view.filter.value}", f"sort={view.sort_by.value}"]
    if view.search.strip():
        details.append(f"search={view.search.strip()!r}")
    lines.append("  " + " ".join(details))

    if store.initial_loading:
        lines.append("  (loading tasks...)")
    elif not page.items:
        lines.append("  No tasks.")
    else:
        lines.extend(f"  {render_task(t)}" for t in page.items)

    if page.total_pages > 1:
        lines.append(f"  Page {page.page} / {page.total_pages} (use /page N)")

    if store.error:
        hint = "retrying..." if store.retrying else "use /retry"
        lines.append(f"  Error: {store.error} ({hint})")

    return "\n".join(lines)

# src/task_tracker/tasks/task_views.py

from __future__ import annotations

"""
Derived views over the task collection.

Everything here is a pure function of (tasks, view state): nothing mutates
its input, and calling twice with the same arguments yields the same result.

Pipeline order: completion filter -> search -> sort -> paginate.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .task_models import SortKey, Task, TaskFilter, ViewState


@dataclass(slots=True, frozen=True)
class TaskPage:
    items: list[Task]
    page: int
    page_size: int
    total_pages: int
    filtered_count: int
    # full filtered + sorted sequence the page was sliced from
    filtered: list[Task] = field(default_factory=list)


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    if task_filter == TaskFilter.ACTIVE:
        return [t for t in tasks if not t.completed]
    if task_filter == TaskFilter.DONE:
        return [t for t in tasks if t.completed]
    return list(tasks)


def search_tasks(tasks: Iterable[Task], search: str) -> list[Task]:
    needle = (search or "").strip().lower()
    if not needle:
        return list(tasks)
    return [t for t in tasks if needle in t.text.lower()]


def sort_tasks(tasks: Iterable[Task], sort_by: SortKey) -> list[Task]:
    # sorted() is stable, so ties keep collection order
    if sort_by == SortKey.NEWEST:
        return sorted(tasks, key=lambda t: t.id, reverse=True)
    if sort_by == SortKey.OLDEST:
        return sorted(tasks, key=lambda t: t.id)
    if sort_by == SortKey.COMPLETED:
        return sorted(tasks, key=lambda t: t.completed)
    if sort_by == SortKey.PENDING:
        return sorted(tasks, key=lambda t: not t.completed)
    return list(tasks)


def total_pages(count: int, page_size: int) -> int:
    size = max(1, int(page_size))
    return math.ceil(max(0, count) / size)


def paginate(tasks: Sequence[Task], page: int, page_size: int) -> list[Task]:
    size = max(1, int(page_size))
    start = (max(1, int(page)) - 1) * size
    return list(tasks[start : start + size])


def completed_count(tasks: Iterable[Task]) -> int:
    """Completed tasks in the whole collection, ignoring any view state."""
    return sum(1 for t in tasks if t.completed)


def build_view(tasks: Sequence[Task], view: ViewState) -> TaskPage:
    filtered = filter_tasks(tasks, view.filter)
    filtered = search_tasks(filtered, view.search)
    filtered = sort_tasks(filtered, view.sort_by)

    size = max(1, int(view.page_size))
    pages = total_pages(len(filtered), size)
    # a page past the end (e.g. after deletes) shows the last page instead
    page = min(max(1, int(view.page)), max(1, pages))

    return TaskPage(
        items=paginate(filtered, page, size),
        page=page,
        page_size=size,
        total_pages=pages,
        filtered_count=len(filtered),
        filtered=filtered,
    )

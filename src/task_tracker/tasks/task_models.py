# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.errors import ValidationError


class _Choice(StrEnum):
    @classmethod
    def parse(cls, raw: str | None):
        value = (raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            choices = " | ".join(m.value for m in cls)
            raise ValidationError(f"Expected one of: {choices}") from None


class TaskFilter(_Choice):
    ALL = "all"
    ACTIVE = "active"
    DONE = "done"


class SortKey(_Choice):
    NEWEST = "newest"
    OLDEST = "oldest"
    COMPLETED = "completed"  # incomplete tasks first
    PENDING = "pending"  # completed tasks first


class Severity(_Choice):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool = False

    @classmethod
    def from_api(cls, raw: Any) -> Task:
        """Parse one task object as returned by the backend."""
        if not isinstance(raw, dict):
            raise ValueError(f"task must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        # bool is an int subclass; "true" is not an id
        if isinstance(task_id, bool) or not isinstance(task_id, int | str):
            raise ValueError(f"invalid task id: {task_id!r}")
        try:
            task_id = int(task_id)
        except ValueError:
            raise ValueError(f"invalid task id: {task_id!r}") from None

        text = raw.get("text")
        if not isinstance(text, str):
            raise ValueError(f"invalid task text for id={task_id}")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"invalid completed flag for id={task_id}: {completed!r}")

        return cls(id=task_id, text=text, completed=completed)

    def to_api(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}


@dataclass(slots=True)
class ViewState:
    filter: TaskFilter = TaskFilter.ALL
    search: str = ""
    sort_by: SortKey = SortKey.NEWEST
    page: int = 1
    page_size: int = 5


@dataclass(slots=True, frozen=True)
class Notification:
    """
    The single notification slot.

    A dismissed notification keeps its message and severity; only `open` changes.
    """

    open: bool = False
    message: str = ""
    severity: Severity = Severity.INFO


def normalize_task_text(raw: str | None) -> str:
    """Producer-side validation for new task labels."""
    text = (raw or "").strip()
    if not text:
        raise ValidationError("Task text must not be empty.")
    return text

# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task store.

The store depends on Protocols instead of concrete implementations.
This keeps the HTTP backend and the local cache swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskApi(Protocol):
    """
    Remote task collection.

    Every method may raise TransportError (or a subclass) with a human-readable message.
    """

    async def fetch_all(self) -> list[Task]: ...
    async def create(self, text: str) -> Task: ...
    async def set_completed(self, task_id: int, completed: bool) -> Task: ...
    async def delete(self, task_id: int) -> None: ...


class TaskCache(Protocol):
    """Local pre-load cache. Never the system of record."""

    def get(self) -> list[Task] | None: ...
    def put(self, tasks: list[Task]) -> None: ...

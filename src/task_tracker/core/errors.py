# src/task_tracker/core/errors.py

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for all task tracker errors."""


class TransportError(TaskTrackerError):
    """
    A remote call to the task API failed.

    The store treats every subclass the same way: the message goes into the
    error slot and the optimistic change is rolled back.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(TransportError):
    """Connection refused, DNS failure, timeout."""


class ServerError(TransportError):
    """HTTP 5xx from the backend."""


class NotFoundError(TransportError):
    """The task no longer exists remotely (HTTP 404)."""


class ValidationError(TaskTrackerError):
    """Input rejected locally before it reaches the store."""

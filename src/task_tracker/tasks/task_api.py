# src/task_tracker/tasks/task_api.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import NetworkError, NotFoundError, ServerError, TransportError
from .task_models import Task

logger = logging.getLogger(__name__)


def _make_timeout(timeout_s: float, connect_s: float) -> httpx.Timeout:
    return httpx.Timeout(
        connect=connect_s,
        read=timeout_s,
        write=timeout_s,
        pool=connect_s,
    )


class HttpTaskApi:
    """
    Task API client over HTTP/JSON.

    Endpoints:
      GET    /tasks        -> [task, ...]
      POST   /tasks        -> task
      PATCH  /tasks/{id}   -> task
      DELETE /tasks/{id}

    Timeouts and connection retries are configured here. The store never retries.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        connect_timeout_seconds: float = 5.0,
        connect_retries: int = 0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None

        if client is None:
            client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=_make_timeout(float(timeout_seconds), float(connect_timeout_seconds)),
                transport=httpx.AsyncHTTPTransport(retries=max(0, int(connect_retries))),
                headers={"Accept": "application/json"},
            )
        self._client = client

    async def aclose(self) -> None:
        """Close the underlying client (only if we created it)."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpTaskApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    async def _request(self, method: str, path: str, action: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out: %s", method, path, e)
            raise NetworkError(f"Request timed out while {action}") from e
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Network error while {action}: {e}") from e

        status = resp.status_code
        logger.debug("%s %s -> %s", method, path, status)

        if status == 404:
            raise NotFoundError(f"Task not found while {action}", status_code=status)
        if status >= 500:
            raise ServerError(f"Server error ({status}) while {action}", status_code=status)
        if status >= 400:
            raise TransportError(f"Request rejected ({status}) while {action}", status_code=status)
        return resp

    @staticmethod
    def _json(resp: httpx.Response, action: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"Invalid response while {action}") from e

    @staticmethod
    def _task(raw: Any, action: str) -> Task:
        try:
            return Task.from_api(raw)
        except ValueError as e:
            raise TransportError(f"Invalid task in response while {action}: {e}") from e

    # ---- public API ----

    async def fetch_all(self) -> list[Task]:
        action = "loading tasks"
        resp = await self._request("GET", "/tasks", action)
        data = self._json(resp, action)
        if not isinstance(data, list):
            raise TransportError(f"Invalid response while {action}: expected a list")
        return [self._task(item, action) for item in data]

    async def create(self, text: str) -> Task:
        action = "adding task"
        resp = await self._request(
            "POST", "/tasks", action, json={"text": text, "completed": False}
        )
        return self._task(self._json(resp, action), action)

    async def set_completed(self, task_id: int, completed: bool) -> Task:
        action = "updating task"
        resp = await self._request(
            "PATCH", f"/tasks/{int(task_id)}", action, json={"completed": bool(completed)}
        )
        return self._task(self._json(resp, action), action)

    async def delete(self, task_id: int) -> None:
        await self._request("DELETE", f"/tasks/{int(task_id)}", "deleting task")


def build_task_api(settings) -> HttpTaskApi:
    return HttpTaskApi(
        settings.api_url,
        timeout_seconds=settings.api_timeout_seconds,
        connect_timeout_seconds=settings.api_connect_timeout_seconds,
        connect_retries=settings.api_connect_retries,
    )

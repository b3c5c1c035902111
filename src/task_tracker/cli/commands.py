# src/task_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.errors import ValidationError
from ..core.state import AppState
from ..tasks.task_models import SortKey, TaskFilter, normalize_task_text
from .render import render_tasks

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        # commands that take the rest of the line verbatim as a single argument
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if raw:
            self._raw.update([key, *(a.lower() for a in aliases)])

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        ValidationError raised by a handler is turned into its message.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]
        if name in self._raw:
            rest = line[1:].lstrip().split(None, 1)
            args = rest[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except ValidationError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_int(raw: str, what: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{what} must be an integer, got {raw!r}.") from None


def _require_task_id(state: AppState, args: list[str], usage: str) -> int:
    if not args:
        raise ValidationError(usage)
    task_id = _parse_int(args[0], "Task id")
    if state.store.get(task_id) is None:
        raise ValidationError(f"No task with id {task_id}.")
    return task_id


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_tasks(state.store)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <text>  -> add a task (shown immediately, confirmed in the background)
    """
    text = normalize_task_text(args[0] if args else "")
    state.spawn(state.store.add_task(text), name="add_task")
    return ""


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _require_task_id(state, args, "Usage: /toggle <id>")
    state.spawn(state.store.toggle_task(task_id), name=f"toggle_task:{task_id}")
    return ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _require_task_id(state, args, "Usage: /rm <id>")
    state.spawn(state.store.delete_task(task_id), name=f"delete_task:{task_id}")
    return ""


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter                   -> show current filter
    /filter all|active|done   -> change filter
    """
    if not args:
        return f"Filter is {state.store.view.filter.value}. Use /filter all | active | done."
    state.store.set_filter(TaskFilter.parse(args[0]))
    return render_tasks(state.store)


def cmd_search(state: AppState, args: list[str]) -> str:
    # no args clears the search
    state.store.set_search(args[0] if args else "")
    return render_tasks(state.store)


def cmd_sort(state: AppState, args: list[str]) -> str:
    if not args:
        return (
            f"Sort is {state.store.view.sort_by.value}. "
            "Use /sort newest | oldest | completed | pending."
        )
    state.store.set_sort(SortKey.parse(args[0]))
    return render_tasks(state.store)


def cmd_page(state: AppState, args: list[str]) -> str:
    if not args:
        raise ValidationError("Usage: /page <n>")
    page = _parse_int(args[0], "Page")
    if page < 1:
        raise ValidationError("Page must be 1 or greater.")
    state.store.set_page(page)
    return render_tasks(state.store)


def cmd_per_page(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Showing {state.store.view.page_size} tasks per page. Use /per-page <n>."
    size = _parse_int(args[0], "Page size")
    if size < 1:
        raise ValidationError("Page size must be 1 or greater.")
    state.store.set_page_size(size)
    return render_tasks(state.store)


def cmd_retry(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.store.retrying:
        return "Already retrying."
    if emit is not None:
        emit("Reloading tasks...")
    state.spawn(state.store.load(is_retry=True), name="load_tasks:retry")
    return ""


def cmd_dismiss(state: AppState, args: list[str]) -> str:
    state.store.dismiss_notification()
    return ""


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    loading = "yes" if store.initial_loading else "no"
    return (
        "Status:\n"
        f"  API: {getattr(state.settings, 'api_url', '?')}\n"
        f"  Tasks: {len(store.tasks)} (completed {store.completed_count})\n"
        f"  Loading: {loading}, retrying: {'yes' if store.retrying else 'no'}\n"
        f"  Pending operations: {len(state.background)}\n"
        f"  Last error: {store.error or '-'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the current page of tasks.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"], raw=True)
registry.register("toggle", cmd_toggle, help_text="Toggle completion: /toggle <id>.", aliases=["t", "done"])
registry.register("rm", cmd_delete, help_text="Delete a task: /rm <id>.", aliases=["del", "delete"])
registry.register("filter", cmd_filter, help_text="Filter tasks: /filter all | active | done.")
registry.register(
    "search", cmd_search, help_text="Search task text: /search [text] (empty clears).", raw=True
)
registry.register("sort", cmd_sort, help_text="Sort: /sort newest | oldest | completed | pending.")
registry.register("page", cmd_page, help_text="Go to page: /page <n>.")
registry.register("per-page", cmd_per_page, help_text="Tasks per page: /per-page <n>.")
registry.register("retry", cmd_retry, help_text="Reload tasks from the server.", aliases=["reload"])
registry.register("dismiss", cmd_dismiss, help_text="Dismiss the current notification.")
registry.register("status", cmd_status, help_text="Show connection and loading status.")

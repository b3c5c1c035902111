# src/task_tracker/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.render import render_notification, render_tasks
from ..core.state import AppState
from ..tasks.task_models import Notification

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def print_notification(notification: Notification) -> None:
    """on_notify hook for the store: notifications appear as they happen."""
    _print_ts(render_notification(notification))


async def _read_line(prompt: str) -> str:
    # input() blocks; run it off-loop so background confirmations keep running
    return await asyncio.to_thread(input, prompt)


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        try:
            user_input = (await _read_line(">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            print(render_tasks(state.store))
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        # plain text is a new task
        if not user_input.startswith("/"):
            user_input = f"/add {user_input}"

        try:
            response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        # let spawned operations apply their optimistic change before rendering
        await asyncio.sleep(0)

        if response:
            print(response)
        elif response == "":
            print(render_tasks(state.store))

    logger.info("Console connector finished.")

# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the initial load in the background
and runs the console REPL until /exit or EOF.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_notification, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_api import build_task_api

logger = logging.getLogger(__name__)


async def run(settings) -> None:
    api = build_task_api(settings)
    try:
        state = create_initial_state(settings=settings, api=api, on_notify=print_notification)

        # fire-and-forget; the console renders "(loading tasks...)" until it resolves
        state.spawn(state.store.load(), name="load_tasks")

        try:
            await run_console_loop(state)
        finally:
            # results of a load still in flight must not land in a defunct store
            await state.cancel_all()
    finally:
        await api.aclose()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=max(console_level, logging.WARNING))

    logger.info("Starting %s...", settings.app_name)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()

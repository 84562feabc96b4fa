# src/todo_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads both state files into AppState, then runs the
interactive menu in the main thread. Corrupt state aborts startup.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..errors import CorruptStateError, PersistenceError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(settings=None) -> int:
    if settings is None:
        settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_file = settings.log_file_path if getattr(settings, "log_file_enabled", True) else None
    setup_logging(log_file=log_file, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "todo"))

    try:
        state = create_initial_state(settings=settings)
    except (CorruptStateError, PersistenceError) as e:
        logger.critical("Cannot load state, refusing to start: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        run_console_loop(state)
    finally:
        logger.info("Bye.")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

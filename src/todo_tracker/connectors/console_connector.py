# src/todo_tracker/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import menu_for
from ..core.state import AppState

logger = logging.getLogger(__name__)


def prompt_input(prompt: str) -> str:
    """Print a prompt and read one trimmed line (EOFError / KeyboardInterrupt propagate)."""
    return input(prompt).strip()


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")

    while True:
        menu = menu_for(state)
        print()
        print(menu.build_menu())

        try:
            choice = prompt_input("Select an option: ")
            outcome = menu.handle(state, choice, prompt_input)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break
        except Exception:
            logger.exception("Menu handler crashed.")
            print("Internal error while handling a command.")
            continue

        print(outcome.text)
        if outcome.exit:
            break

    logger.info("Console connector finished.")

# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the JSON collection files and the TodoStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import AppState, Session
from ..tasks.json_store import task_file, user_file
from ..tasks.task_store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    settings.users_path.parent.mkdir(parents=True, exist_ok=True)


def create_store(settings, *, clock: Clock | None = None) -> TodoStore:
    """Build the store from settings. Raises CorruptStateError if a state file is unreadable."""
    atomic = bool(getattr(settings, "atomic_writes", True))
    return TodoStore(
        task_file(settings.tasks_path, atomic=atomic),
        user_file(settings.users_path, atomic=atomic),
        clock=clock,
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(settings=settings, store=create_store(settings), session=Session())

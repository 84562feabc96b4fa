# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..tasks.task_store import TodoStore


@dataclass(slots=True)
class Session:
    """
    Acting identity for store calls.

    Passed explicitly into every TodoStore operation instead of living on the
    store, so several sessions can coexist (tests, future frontends).
    """

    username: str | None = None

    @property
    def is_logged_in(self) -> bool:
        return self.username is not None


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: TodoStore
    session: Session = field(default_factory=Session)

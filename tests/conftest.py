# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.cli.bootstrap import create_store
from todo_tracker.core.state import AppState, Session
from todo_tracker.tasks.task_store import TodoStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="todo-test",
        log_level="WARNING",
        log_file_enabled=False,
        log_file_path=data_dir / "todo.log",
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.json",
        users_path=data_dir / "users.json",
        atomic_writes=True,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(settings: SimpleNamespace, clock: FakeClock) -> TodoStore:
    """Real JSON-backed store on tmp paths; persistence is part of what we test."""
    return create_store(settings, clock=clock)


@pytest.fixture()
def session() -> Session:
    return Session()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore, session: Session) -> AppState:
    return AppState(settings=settings, store=store, session=session)

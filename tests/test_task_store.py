# tests/test_task_store.py

from __future__ import annotations

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from todo_tracker.cli.bootstrap import create_store
from todo_tracker.core.state import Session
from todo_tracker.errors import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotAuthorizedError,
    NotLoggedInError,
    PersistenceError,
    TaskNotFoundError,
)
from todo_tracker.tasks.task_models import Task, User
from todo_tracker.tasks.task_store import TodoStore

from .fakes import FakeClock, FakeCollectionFile


def _logged_in(store: TodoStore, username: str, password: str = "pw") -> Session:
    if not store.has_user(username):
        store.register(username, password)
    session = Session()
    store.login(session, username, password)
    return session


def test_example_scenario(store: TodoStore, session: Session) -> None:
    store.register("alice", "pw1")
    with pytest.raises(DuplicateUsernameError):
        store.register("alice", "pw2")
    with pytest.raises(InvalidCredentialsError):
        store.login(session, "alice", "wrong")
    assert session.username is None

    store.login(session, "alice", "pw1")
    assert store.add_task(session, "Buy milk", "2%  ") == 1

    tasks = store.list_tasks(session)
    assert len(tasks) == 1
    assert tasks[0].title == "Buy milk"
    assert tasks[0].description == "2%  "
    assert tasks[0].completed is False

    store.complete_task(session, 1)
    assert store.list_tasks(session)[0].completed is True

    store.logout(session)
    store.register("bob", "pwb")
    store.login(session, "bob", "pwb")
    assert store.list_tasks(session) == []
    with pytest.raises(NotAuthorizedError):
        store.complete_task(session, 1)


def test_login_unknown_user_is_invalid_credentials(store: TodoStore, session: Session) -> None:
    with pytest.raises(InvalidCredentialsError) as excinfo:
        store.login(session, "ghost", "pw")
    assert str(excinfo.value) == "Invalid username or password"


def test_usernames_are_case_sensitive(store: TodoStore, session: Session) -> None:
    store.register("alice", "pw")
    store.register("Alice", "other")
    assert store.count_users() == 2
    with pytest.raises(InvalidCredentialsError):
        store.login(session, "ALICE", "pw")


def test_logout_is_idempotent(store: TodoStore, session: Session) -> None:
    store.logout(session)
    assert session.username is None

    session = _logged_in(store, "alice")
    store.logout(session)
    store.logout(session)
    assert session.username is None
    assert not session.is_logged_in


def test_task_operations_require_login(store: TodoStore, session: Session) -> None:
    with pytest.raises(NotLoggedInError):
        store.add_task(session, "t", "d")
    with pytest.raises(NotLoggedInError):
        store.list_tasks(session)
    # Not-logged-in wins even for ids that do not exist.
    for op in (store.complete_task, store.delete_task, store.get_task):
        with pytest.raises(NotLoggedInError):
            op(session, 999)
    with pytest.raises(NotLoggedInError):
        store.edit_task(session, 999, "t", "d")


def test_missing_task_is_not_found_before_ownership(store: TodoStore) -> None:
    session = _logged_in(store, "alice")
    with pytest.raises(TaskNotFoundError):
        store.complete_task(session, 42)
    with pytest.raises(TaskNotFoundError):
        store.edit_task(session, 42, "t", "d")
    with pytest.raises(TaskNotFoundError):
        store.delete_task(session, 42)


def test_ids_are_distinct_and_increasing(store: TodoStore) -> None:
    session = _logged_in(store, "alice")
    ids = [store.add_task(session, f"t{i}", "") for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]

    # Deleting the newest task never frees its id within the process.
    store.delete_task(session, 5)
    assert store.add_task(session, "after delete", "") == 6


def test_ownership_isolation(store: TodoStore) -> None:
    alice = _logged_in(store, "alice")
    bob = _logged_in(store, "bob")

    a1 = store.add_task(alice, "alice 1", "")
    b1 = store.add_task(bob, "bob 1", "")
    a2 = store.add_task(alice, "alice 2", "")

    assert [t.id for t in store.list_tasks(alice)] == [a1, a2]
    assert [t.id for t in store.list_tasks(bob)] == [b1]

    with pytest.raises(NotAuthorizedError) as excinfo:
        store.edit_task(bob, a1, "hijack", "")
    assert str(excinfo.value) == "Not authorized to modify this task"
    with pytest.raises(NotAuthorizedError) as excinfo:
        store.delete_task(bob, a1)
    assert str(excinfo.value) == "Not authorized to delete this task"
    with pytest.raises(NotAuthorizedError):
        store.complete_task(bob, a2)

    assert store.get_task(alice, a1).title == "alice 1"
    assert store.count_tasks() == 3


def test_edit_keeps_completion_and_creation_time(store: TodoStore, clock: FakeClock) -> None:
    session = _logged_in(store, "alice")
    task_id = store.add_task(session, "old", "old desc")
    store.complete_task(session, task_id)
    created = store.get_task(session, task_id).created_at

    store.edit_task(session, task_id, "new", "new desc")

    task = store.get_task(session, task_id)
    assert (task.title, task.description) == ("new", "new desc")
    assert task.completed is True
    assert task.created_at == created
    assert task.created_at == datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
    assert task.user_id == "alice"


def test_listed_tasks_are_copies(store: TodoStore) -> None:
    session = _logged_in(store, "alice")
    task_id = store.add_task(session, "t", "d")

    store.list_tasks(session)[0].completed = True

    assert store.get_task(session, task_id).completed is False


def test_state_survives_restart_with_id_continuity(settings: SimpleNamespace) -> None:
    store = create_store(settings, clock=FakeClock())
    session = _logged_in(store, "alice", "pw1")
    for title in ("a", "b", "c"):
        store.add_task(session, title, "")
    store.delete_task(session, 2)
    store.complete_task(session, 3)

    reloaded = create_store(settings)
    assert reloaded.next_task_id == 4

    again = Session()
    reloaded.login(again, "alice", "pw1")
    assert reloaded.list_tasks(again) == store.list_tasks(session)
    assert reloaded.add_task(again, "d", "") == 4


def test_empty_store_starts_at_one(settings: SimpleNamespace) -> None:
    assert create_store(settings).next_task_id == 1


def test_add_task_save_failure_keeps_task_in_memory() -> None:
    tasks_file = FakeCollectionFile(fail_saves=True)
    store = TodoStore(tasks_file, FakeCollectionFile(), clock=FakeClock())
    session = _logged_in(store, "alice")

    with pytest.raises(PersistenceError) as excinfo:
        store.add_task(session, "unsaved", "")

    assert str(excinfo.value) == "Failed to save tasks"
    # No rollback: memory is ahead of disk and the id stays consumed.
    assert [t.title for t in store.list_tasks(session)] == ["unsaved"]
    assert store.next_task_id == 2
    assert tasks_file.saves == []


def test_register_save_failure_keeps_user_in_memory() -> None:
    users_file = FakeCollectionFile(fail_saves=True)
    store = TodoStore(FakeCollectionFile(), users_file)

    with pytest.raises(PersistenceError) as excinfo:
        store.register("alice", "pw")

    assert str(excinfo.value) == "Failed to save users"
    assert store.has_user("alice")
    with pytest.raises(DuplicateUsernameError):
        store.register("alice", "pw")


def test_every_mutation_saves_full_collection() -> None:
    tasks_file = FakeCollectionFile()
    users_file = FakeCollectionFile()
    store = TodoStore(tasks_file, users_file, clock=FakeClock())
    session = _logged_in(store, "alice")

    store.add_task(session, "a", "")
    store.add_task(session, "b", "")
    store.complete_task(session, 1)
    store.edit_task(session, 2, "b2", "")
    store.delete_task(session, 1)
    store.list_tasks(session)

    assert [sorted(s) for s in tasks_file.saves] == [["1"], ["1", "2"], ["1", "2"], ["1", "2"], ["2"]]
    assert list(users_file.saves[-1]) == ["alice"]
    # Reads and logins never touch disk.
    assert len(users_file.saves) == 1


def test_load_derives_counter_from_max_id() -> None:
    created = datetime(2024, 1, 1, tzinfo=UTC)
    initial = {
        "3": Task(3, "x", "", False, created, "alice"),
        "10": Task(10, "y", "", True, created, "alice"),
    }
    store = TodoStore(
        FakeCollectionFile(initial),
        FakeCollectionFile({"alice": User("alice", "pw")}),
    )
    session = Session()
    store.login(session, "alice", "pw")
    assert store.add_task(session, "z", "") == 11

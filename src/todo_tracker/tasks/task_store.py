# src/todo_tracker/tasks/task_store.py

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime

from ..core.ports import Clock, CollectionFile
from ..core.state import Session
from ..errors import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotAuthorizedError,
    NotLoggedInError,
    PersistenceError,
    TaskNotFoundError,
)
from .task_models import Task, User

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TodoStore:
    """
    Account-scoped task store.

    Owns the in-memory tasks/users and the id counter; the acting identity comes
    from the Session passed into each call. Every successful mutation rewrites
    the whole affected collection through its CollectionFile.

    Check order for task operations is fixed:
      session active -> task exists -> task owned by session user

    Persistence failures are NOT rolled back: the in-memory change stays and
    PersistenceError is raised, so memory is ahead of disk until the next save.
    """

    def __init__(
        self,
        tasks_file: CollectionFile[Task],
        users_file: CollectionFile[User],
        *,
        clock: Clock | None = None,
    ) -> None:
        self._tasks_file = tasks_file
        self._users_file = users_file
        self._clock = clock or _utc_now

        # CorruptStateError propagates: startup must abort on unreadable state.
        loaded_tasks = tasks_file.load()
        self._tasks: dict[int, Task] = {t.id: t for t in loaded_tasks.values()}
        self._users: dict[str, User] = dict(users_file.load())
        self._next_task_id = max(self._tasks, default=0) + 1

        logger.info(
            "TodoStore ready tasks=%s users=%s next_task_id=%s",
            len(self._tasks),
            len(self._users),
            self._next_task_id,
        )

    # ---- low-level helpers ----

    @staticmethod
    def _require_user(session: Session) -> str:
        if session.username is None:
            raise NotLoggedInError()
        return session.username

    def _owned_task(self, session: Session, task_id: int, *, action: str = "modify") -> Task:
        user_id = self._require_user(session)
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError()
        if task.user_id != user_id:
            logger.debug("Denied %s of task id=%s for user=%s", action, task_id, user_id)
            raise NotAuthorizedError(f"Not authorized to {action} this task")
        return task

    def _save_tasks(self) -> None:
        try:
            self._tasks_file.save({t.key: t for t in self._tasks.values()})
        except PersistenceError as e:
            logger.error("Task changes kept in memory but not on disk (%s).", self._tasks_file.path)
            raise PersistenceError("Failed to save tasks") from e

    def _save_users(self) -> None:
        try:
            self._users_file.save(dict(self._users))
        except PersistenceError as e:
            logger.error("User changes kept in memory but not on disk (%s).", self._users_file.path)
            raise PersistenceError("Failed to save users") from e

    # ---- accounts ----

    def has_user(self, username: str) -> bool:
        return username in self._users

    def count_users(self) -> int:
        return len(self._users)

    def register(self, username: str, password: str) -> None:
        if username in self._users:
            raise DuplicateUsernameError()

        self._users[username] = User(username=username, password=password)
        logger.info("Registered user=%s", username)
        self._save_users()

    def login(self, session: Session, username: str, password: str) -> None:
        user = self._users.get(username)
        if user is None or user.password != password:
            logger.info("Failed login attempt user=%s", username)
            raise InvalidCredentialsError()

        session.username = username
        logger.info("User logged in user=%s", username)

    def logout(self, session: Session) -> None:
        if session.username is not None:
            logger.info("User logged out user=%s", session.username)
        session.username = None

    # ---- tasks ----

    @property
    def next_task_id(self) -> int:
        return self._next_task_id

    def count_tasks(self) -> int:
        return len(self._tasks)

    def add_task(self, session: Session, title: str, description: str) -> int:
        user_id = self._require_user(session)

        task_id = self._next_task_id
        self._tasks[task_id] = Task(
            id=task_id,
            title=title,
            description=description,
            completed=False,
            created_at=self._clock().replace(microsecond=0),
            user_id=user_id,
        )
        self._next_task_id += 1
        logger.debug("Task added id=%s user=%s", task_id, user_id)

        self._save_tasks()
        return task_id

    def get_task(self, session: Session, task_id: int) -> Task:
        return replace(self._owned_task(session, task_id, action="view"))

    def complete_task(self, session: Session, task_id: int) -> None:
        task = self._owned_task(session, task_id)
        task.completed = True
        logger.debug("Task completed id=%s", task_id)
        self._save_tasks()

    def edit_task(self, session: Session, task_id: int, title: str, description: str) -> None:
        task = self._owned_task(session, task_id)
        task.title = title
        task.description = description
        logger.debug("Task edited id=%s", task_id)
        self._save_tasks()

    def delete_task(self, session: Session, task_id: int) -> None:
        self._owned_task(session, task_id, action="delete")
        del self._tasks[task_id]
        logger.debug("Task deleted id=%s", task_id)
        self._save_tasks()

    def list_tasks(self, session: Session) -> list[Task]:
        """Tasks owned by the session user, ascending id. Returned objects are copies."""
        user_id = self._require_user(session)
        return [
            replace(task)
            for task_id, task in sorted(self._tasks.items())
            if task.user_id == user_id
        ]

# src/todo_tracker/errors.py

"""
Error taxonomy shared by the store, the persistence layer and the shell.

Every failure the store reports is a TodoError subclass carrying an ErrorKind.
The shell renders them as "Error: <message>"; only CorruptStateError is fatal
(raised while loading state at startup).
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class ErrorKind(StrEnum):
    DUPLICATE_USERNAME = "duplicate_username"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_LOGGED_IN = "not_logged_in"
    TASK_NOT_FOUND = "task_not_found"
    NOT_AUTHORIZED = "not_authorized"
    CORRUPT_STATE = "corrupt_state"
    IO_FAILURE = "io_failure"


class TodoError(Exception):
    """Base class for every error the store surfaces to callers."""

    kind: ErrorKind
    default_message = "Todo error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class DuplicateUsernameError(TodoError):
    kind = ErrorKind.DUPLICATE_USERNAME
    default_message = "Username already exists"


class InvalidCredentialsError(TodoError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid username or password"


class NotLoggedInError(TodoError):
    kind = ErrorKind.NOT_LOGGED_IN
    default_message = "Not logged in"


class TaskNotFoundError(TodoError):
    kind = ErrorKind.TASK_NOT_FOUND
    default_message = "Task not found"


class NotAuthorizedError(TodoError):
    kind = ErrorKind.NOT_AUTHORIZED
    default_message = "Not authorized to modify this task"


class PersistenceError(TodoError):
    """
    A collection could not be written (or read) on disk.

    When raised by a mutating store operation the in-memory change has
    already been applied: memory and disk diverge until the next successful save.
    """

    kind = ErrorKind.IO_FAILURE
    default_message = "Failed to access storage"


class CorruptStateError(TodoError):
    """A state file exists but does not hold the expected JSON structure."""

    kind = ErrorKind.CORRUPT_STATE
    default_message = "Corrupt state file"

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        detail = f"Corrupt state file: {self.path}"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(detail)

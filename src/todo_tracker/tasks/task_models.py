# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


def to_epoch_seconds(ts: datetime) -> int:
    return int(ts.timestamp())


def from_epoch_seconds(raw: int) -> datetime:
    try:
        return datetime.fromtimestamp(raw, tz=UTC)
    except (OverflowError, OSError) as e:
        raise ValueError(f"timestamp out of range: {raw}") from e


def _require(record: dict[str, Any], name: str, kind: type) -> Any:
    """Fetch a field and check its JSON type (bool is not accepted as int)."""
    if name not in record:
        raise ValueError(f"missing field {name!r}")
    val = record[name]
    if kind is int and isinstance(val, bool):
        raise ValueError(f"field {name!r} must be int")
    if not isinstance(val, kind):
        raise ValueError(f"field {name!r} must be {kind.__name__}")
    return val


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str
    completed: bool
    created_at: datetime  # UTC, whole seconds
    user_id: str

    @property
    def key(self) -> str:
        return str(self.id)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "created_at": to_epoch_seconds(self.created_at),
            "user_id": self.user_id,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Task:
        task_id = _require(record, "id", int)
        if task_id < 1:
            raise ValueError("field 'id' must be positive")
        return cls(
            id=task_id,
            title=_require(record, "title", str),
            description=_require(record, "description", str),
            completed=_require(record, "completed", bool),
            created_at=from_epoch_seconds(_require(record, "created_at", int)),
            user_id=_require(record, "user_id", str),
        )


@dataclass(slots=True)
class User:
    username: str
    # Plain text: compared as-is on login. Known weakness, kept deliberately.
    password: str

    @property
    def key(self) -> str:
        return self.username

    def to_record(self) -> dict[str, Any]:
        return {"username": self.username, "password": self.password}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> User:
        return cls(
            username=_require(record, "username", str),
            password=_require(record, "password", str),
        )

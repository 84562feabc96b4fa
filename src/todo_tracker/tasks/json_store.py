# src/todo_tracker/tasks/json_store.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

from ..errors import CorruptStateError, PersistenceError
from .task_models import Task, User

logger = logging.getLogger(__name__)

R = TypeVar("R", Task, User)


class JsonCollectionFile(Generic[R]):
    """
    One JSON document holding a whole collection: {key: record}.

    - load(): missing file -> {}; anything that is not the expected structure
      -> CorruptStateError (callers must not continue with partial data)
    - save(): full rewrite of the collection, never a diff

    Writes go through a sibling .tmp file and os.replace() unless atomic=False,
    in which case the target is overwritten in place.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        from_record: Callable[[dict[str, Any]], R],
        label: str,
        atomic: bool = True,
    ) -> None:
        self.path = Path(path)
        self._from_record = from_record
        self.label = label
        self.atomic = atomic

    def load(self) -> dict[str, R]:
        try:
            raw = self.path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("No %s file at %s, starting empty.", self.label, self.path)
            return {}
        except UnicodeDecodeError as e:
            raise CorruptStateError(self.path, "not valid UTF-8") from e
        except OSError as e:
            logger.exception("Failed to read %s from %s", self.label, self.path)
            raise PersistenceError(f"Failed to load {self.label}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(self.path, f"invalid JSON: {e.msg}") from e

        if not isinstance(data, dict):
            raise CorruptStateError(self.path, "top level must be an object")

        out: dict[str, R] = {}
        for key, record in data.items():
            if not isinstance(record, dict):
                raise CorruptStateError(self.path, f"record {key!r} must be an object")
            try:
                item = self._from_record(record)
            except ValueError as e:
                raise CorruptStateError(self.path, f"record {key!r}: {e}") from e
            if item.key != key:
                raise CorruptStateError(self.path, f"record {key!r} is stored under the wrong key")
            out[key] = item

        logger.info("Loaded %d %s from %s", len(out), self.label, self.path)
        return out

    def save(self, collection: dict[str, R]) -> None:
        payload = {key: item.to_record() for key, item in collection.items()}
        text = json.dumps(payload, ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic:
                tmp = self.path.with_name(self.path.name + ".tmp")
                tmp.write_text(text, "utf-8")
                os.replace(tmp, self.path)
            else:
                self.path.write_text(text, "utf-8")
        except OSError as e:
            logger.exception("Failed to save %s to %s", self.label, self.path)
            raise PersistenceError(f"Failed to save {self.label}") from e
        logger.debug("Saved %d %s to %s", len(collection), self.label, self.path)


def task_file(path: str | Path, *, atomic: bool = True) -> JsonCollectionFile[Task]:
    return JsonCollectionFile(path, from_record=Task.from_record, label="tasks", atomic=atomic)


def user_file(path: str | Path, *, atomic: bool = True) -> JsonCollectionFile[User]:
    return JsonCollectionFile(path, from_record=User.from_record, label="users", atomic=atomic)

# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the store.

The store depends on Protocols instead of concrete implementations.
This keeps the JSON files swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol, TypeVar

R = TypeVar("R")

Clock = Callable[[], datetime]
# Returns an aware UTC datetime; the store truncates it to whole seconds.


class CollectionFile(Protocol[R]):
    """A whole collection of records persisted as one document."""

    path: Path

    def load(self) -> dict[str, R]: ...
    def save(self, collection: dict[str, R]) -> None: ...

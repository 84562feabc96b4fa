# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState
from ..errors import TodoError
from ..tasks.task_models import Task

Ask = Callable[[str], str]
# Prints a prompt and returns one trimmed input line.
MenuHandler = Callable[[AppState, Ask], str]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MenuOutcome:
    text: str
    exit: bool = False


@dataclass(frozen=True, slots=True)
class _MenuEntry:
    label: str
    handler: MenuHandler
    exits: bool


class MenuRegistry:
    """Numbered menu used by the console connector (1. Login, 2. Register, ...)."""

    def __init__(self, title: str) -> None:
        self.title = title
        self._entries: dict[str, _MenuEntry] = {}

    def register(self, key: str, label: str, handler: MenuHandler, *, exits: bool = False) -> None:
        self._entries[key] = _MenuEntry(label=label, handler=handler, exits=exits)

    def handle(self, state: AppState, choice: str, ask: Ask) -> MenuOutcome:
        """
        Run the handler for a menu choice.
        Store errors are rendered as "Error: <message>"; the loop keeps going.
        """
        entry = self._entries.get(choice.strip())
        if entry is None:
            return MenuOutcome("Invalid choice")

        try:
            text = entry.handler(state, ask)
        except TodoError as e:
            logger.debug("Menu choice %s failed kind=%s", choice, e.kind)
            return MenuOutcome(f"Error: {e}")

        return MenuOutcome(text, exit=entry.exits)

    def build_menu(self) -> str:
        lines = [self.title]
        for key, entry in self._entries.items():
            lines.append(f"{key}. {entry.label}")
        return "\n".join(lines)


guest_menu = MenuRegistry("Welcome to Todo App!")
member_menu = MenuRegistry("Todo App Menu:")


def menu_for(state: AppState) -> MenuRegistry:
    return member_menu if state.session.is_logged_in else guest_menu


def parse_task_id(raw: str) -> int | None:
    """Task ids are positive integers; anything else is rejected before reaching the store."""
    try:
        task_id = int(raw.strip())
    except ValueError:
        return None
    return task_id if task_id > 0 else None


def format_task(task: Task) -> str:
    status = "Completed" if task.completed else "Pending"
    created = task.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")
    return (
        f"ID: {task.id}\n"
        f"Title: {task.title}\n"
        f"Description: {task.description}\n"
        f"Status: {status}\n"
        f"Created: {created}"
    )


# ---- guest menu ----


def cmd_login(state: AppState, ask: Ask) -> str:
    username = ask("Username: ")
    password = ask("Password: ")
    state.store.login(state.session, username, password)
    return "Login successful!"


def cmd_register(state: AppState, ask: Ask) -> str:
    username = ask("Username: ")
    password = ask("Password: ")
    state.store.register(username, password)
    return "Registration successful!"


def cmd_exit(state: AppState, ask: Ask) -> str:
    return "Goodbye!"


# ---- member menu ----


def cmd_add_task(state: AppState, ask: Ask) -> str:
    title = ask("Title: ")
    description = ask("Description: ")
    task_id = state.store.add_task(state.session, title, description)
    return f"Task added successfully! (ID: {task_id})"


def cmd_list_tasks(state: AppState, ask: Ask) -> str:
    tasks = state.store.list_tasks(state.session)
    if not tasks:
        return "No tasks found."
    return "\n\n".join(format_task(t) for t in tasks)


def cmd_complete_task(state: AppState, ask: Ask) -> str:
    task_id = parse_task_id(ask("Task ID: "))
    if task_id is None:
        return "Invalid task ID"
    state.store.complete_task(state.session, task_id)
    return "Task marked as completed!"


def cmd_edit_task(state: AppState, ask: Ask) -> str:
    raw_id = ask("Task ID: ")
    title = ask("New Title: ")
    description = ask("New Description: ")
    task_id = parse_task_id(raw_id)
    if task_id is None:
        return "Invalid task ID"
    state.store.edit_task(state.session, task_id, title, description)
    return "Task updated successfully!"


def cmd_delete_task(state: AppState, ask: Ask) -> str:
    task_id = parse_task_id(ask("Task ID: "))
    if task_id is None:
        return "Invalid task ID"
    state.store.delete_task(state.session, task_id)
    return "Task deleted successfully!"


def cmd_logout(state: AppState, ask: Ask) -> str:
    state.store.logout(state.session)
    return "Logged out successfully!"


guest_menu.register("1", "Login", cmd_login)
guest_menu.register("2", "Register", cmd_register)
guest_menu.register("3", "Exit", cmd_exit, exits=True)

member_menu.register("1", "Add Task", cmd_add_task)
member_menu.register("2", "List Tasks", cmd_list_tasks)
member_menu.register("3", "Complete Task", cmd_complete_task)
member_menu.register("4", "Edit Task", cmd_edit_task)
member_menu.register("5", "Delete Task", cmd_delete_task)
member_menu.register("6", "Logout", cmd_logout)

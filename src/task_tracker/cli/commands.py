# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.ports import Console
from ..core.state import AppState
from ..tasks.task_api import (
    format_status_options,
    format_task_details,
    format_task_list,
    is_confirmation,
    parse_int,
    parse_status,
)
from ..tasks.task_errors import NotFoundError, StoreIOError, ValidationError
from ..tasks.task_models import Task, TaskStatus, status_label

CommandHandler = Callable[[AppState, list[str], Console], str]

UNKNOWN_COMMAND_MESSAGE = "Unknown command. Use: add, list, view, edit, delete, or quit"
NO_TASKS_MESSAGE = "No tasks found."
INVALID_ID_MESSAGE = "Invalid ID format. Please enter a number."
INVALID_STATUS_MESSAGE = "Invalid status. Please enter 0, 1, or 2."

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Command registry used by the console loop (add, list, view, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, console: Console) -> str | None:
        """
        Handle a string like "command args" (a leading "/" is accepted too).
        Returns a reply string or None for a blank line.
        """
        parts = line.strip().removeprefix("/").split()
        if not parts:
            return None

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            logger.debug("Unknown command %r", name)
            return UNKNOWN_COMMAND_MESSAGE

        return handler(state, args, console)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        lines.append("  quit - Exit the program.")
        return "\n".join(lines)


registry = CommandRegistry()


def _resolve_task(
    state: AppState, args: list[str], console: Console, verb: str
) -> tuple[Task | None, str | None]:
    """Find the task named by args[0] or by prompting; returns (task, error message)."""
    if state.store.count_tasks() == 0:
        return None, NO_TASKS_MESSAGE

    raw = args[0] if args else console.ask(f"Enter task ID to {verb}: ")
    task_id = parse_int(raw)
    if task_id is None:
        return None, INVALID_ID_MESSAGE

    task = state.store.find_by_id(task_id)
    if task is None:
        return None, f"Task with ID {task_id} not found."
    return task, None


def cmd_help(state: AppState, args: list[str], console: Console) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str], console: Console) -> str:
    """
    add                -> prompt for the description
    add <description>  -> inline description
    """
    description = " ".join(args) if args else console.ask("Insert New Task: ")
    try:
        task = state.store.add(description)
    except ValidationError as e:
        return str(e)
    except StoreIOError as e:
        return f"Error saving task: {e}"
    return f"Task added successfully! ID: {task.id}"


def cmd_list(state: AppState, args: list[str], console: Console) -> str:
    return format_task_list(state.store.list_tasks())


def cmd_view(state: AppState, args: list[str], console: Console) -> str:
    task, error = _resolve_task(state, args, console, "view")
    if task is None:
        return error or NO_TASKS_MESSAGE
    return format_task_details(task)


def _ask_status(console: Console) -> TaskStatus | None:
    console.emit(format_status_options())
    return parse_status(console.ask("Enter new status (0-2): "))


def cmd_edit(state: AppState, args: list[str], console: Console) -> str:
    """
    Interactive edit:
      1. Description
      2. Status
      3. Both
    A blank new description keeps the old one.
    """
    task, error = _resolve_task(state, args, console, "edit")
    if task is None:
        return error or NO_TASKS_MESSAGE

    console.emit(f"Current task: {task.description}")
    console.emit(f"Current status: {status_label(task.status)}")
    console.emit("What would you like to edit?\n1. Description\n2. Status\n3. Both")

    choice = parse_int(console.ask("Enter choice (1-3): "))
    if choice is None:
        return "Invalid choice. Please enter a number."

    description = None
    status = None
    if choice == 1:
        description = console.ask("Enter new description: ")
    elif choice == 2:
        status = _ask_status(console)
        if status is None:
            return INVALID_STATUS_MESSAGE
    elif choice == 3:
        description = console.ask("Enter new description: ")
        status = _ask_status(console)
        if status is None:
            return INVALID_STATUS_MESSAGE
    else:
        return "Invalid choice."

    try:
        state.store.update(task.id, description=description, status=status)
    except (NotFoundError, ValidationError) as e:
        return str(e)
    except StoreIOError as e:
        return f"Error saving task: {e}"
    return f"Task {task.id} updated successfully!"


def cmd_delete(state: AppState, args: list[str], console: Console) -> str:
    task, error = _resolve_task(state, args, console, "delete")
    if task is None:
        return error or NO_TASKS_MESSAGE

    console.emit(f"Task to delete: {task.description}")
    console.emit(f"Status: {status_label(task.status)}")
    answer = console.ask("Are you sure you want to delete this task? (y/N): ")

    try:
        removed = state.store.delete(task.id, confirmed=is_confirmation(answer))
    except NotFoundError as e:
        return str(e)
    except StoreIOError as e:
        return f"Error saving tasks: {e}"
    if removed is None:
        return "Deletion cancelled."
    return f"Task {task.id} deleted successfully!"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: add | add <description>.")
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("view", cmd_view, help_text="Show one task: view | view <id>.")
registry.register("edit", cmd_edit, help_text="Edit description and/or status: edit | edit <id>.")
registry.register(
    "delete", cmd_delete, help_text="Delete a task after confirmation: delete | delete <id>.",
    aliases=["rm"],
)

# src/task_tracker/tasks/task_api.py

from __future__ import annotations

import re
from datetime import datetime

from .task_models import Task, TaskStatus, status_label

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

CONFIRM_WORDS = frozenset({"y", "yes"})

# ASCII digits only: no "1_0", no full-width or other Unicode digits.
_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: str) -> int | None:
    """Parse a user-typed number (task id, menu choice); None if it is not a whole number."""
    text = raw.strip()
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def parse_status(raw: str) -> TaskStatus | None:
    """Parse a user-typed status number (0-2)."""
    value = parse_int(raw)
    if value is None:
        return None
    return TaskStatus.coerce(value)


def is_confirmation(raw: str) -> bool:
    return raw.strip().lower() in CONFIRM_WORDS


def format_timestamp(ts: datetime) -> str:
    # Shown in the user's local time zone.
    return ts.astimezone().strftime(DISPLAY_TIME_FORMAT)


def format_task_summary(task: Task) -> str:
    return (
        f"ID: {task.id} | Status: {status_label(task.status)} | Description: {task.description}\n"
        f"Created: {format_timestamp(task.created_at)} | Updated: {format_timestamp(task.updated_at)}"
    )


def format_task_details(task: Task) -> str:
    lines = [
        "--- Task Details ---",
        f"ID: {task.id}",
        f"Description: {task.description}",
        f"Status: {status_label(task.status)}",
        f"Created: {format_timestamp(task.created_at)}",
        f"Updated: {format_timestamp(task.updated_at)}",
    ]
    return "\n".join(lines)


def format_task_list(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks found."
    blocks = [format_task_summary(t) for t in tasks]
    return "--- All Tasks ---\n" + "\n\n".join(blocks)


def format_status_options() -> str:
    lines = ["Status options:"]
    for status in TaskStatus:
        lines.append(f"{int(status)}. {status.label}")
    return "\n".join(lines)

# src/task_tracker/tasks/task_errors.py

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base class for every error the task store reports to its callers."""


class StoreIOError(TaskTrackerError):
    """The tasks file could not be read or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(TaskTrackerError):
    """The tasks file is not valid JSON or does not have the expected shape."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(TaskTrackerError, LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found.")
        self.task_id = task_id


class ValidationError(TaskTrackerError, ValueError):
    """Rejected input: empty description, unknown status, nothing to update."""

# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class TaskStatus(IntEnum):
    """
    Task status, persisted as its integer value.

    Notes:
    - any status can be set from any other one (a DONE task can be reopened)
    - new tasks always start as NOT_STARTED
    """

    NOT_STARTED = 0
    IN_PROGRESS = 1
    DONE = 2

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def coerce(cls, raw: object) -> TaskStatus | None:
        """Return the matching status for an int-like value, or None."""
        if isinstance(raw, cls):
            return raw
        # bool is an int subclass; True/False are not statuses.
        if isinstance(raw, bool) or not isinstance(raw, int):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


_LABELS: dict[TaskStatus, str] = {
    TaskStatus.NOT_STARTED: "Not Started",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}


def status_label(raw: object) -> str:
    status = TaskStatus.coerce(raw)
    return status.label if status is not None else "Unknown"


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

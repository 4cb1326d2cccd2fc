# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..core.ports import Clock, SaveListener
from .task_errors import NotFoundError, ParseError, StoreIOError, ValidationError
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = "task.json"

_REQUIRED_FIELDS = ("id", "description", "status", "created_at", "updated_at")


def utc_now() -> datetime:
    return datetime.now(UTC)


# ---- JSON codec ----


def _parse_timestamp(raw: Any, *, field: str, index: int) -> datetime:
    if not isinstance(raw, str):
        raise ParseError(f"task #{index}: {field} must be a timestamp string")
    try:
        value = datetime.fromisoformat(raw.strip())
    except ValueError as e:
        raise ParseError(f"task #{index}: {field} is not an ISO 8601 timestamp: {raw!r}") from e
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def _dict_to_task(raw: Any, index: int) -> Task:
    if not isinstance(raw, dict):
        raise ParseError(f"task #{index}: expected an object, got {type(raw).__name__}")

    missing = [name for name in _REQUIRED_FIELDS if name not in raw]
    if missing:
        raise ParseError(f"task #{index}: missing field(s): {', '.join(missing)}")

    task_id = raw["id"]
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
        raise ParseError(f"task #{index}: id must be a positive integer, got {task_id!r}")

    description = raw["description"]
    if not isinstance(description, str):
        raise ParseError(f"task #{index}: description must be a string")

    status = TaskStatus.coerce(raw["status"])
    if status is None:
        raise ParseError(f"task #{index}: status must be 0, 1 or 2, got {raw['status']!r}")

    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at=_parse_timestamp(raw["created_at"], field="created_at", index=index),
        updated_at=_parse_timestamp(raw["updated_at"], field="updated_at", index=index),
    )


def _task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "description": task.description,
        "status": int(task.status),
        "created_at": task.created_at.isoformat(),
        "updated_at": task.updated_at.isoformat(),
    }


def load_tasks(text: str) -> list[Task]:
    """
    Decode the tasks file content.

    Empty content means "no tasks yet". Anything else must be a JSON array of
    task objects with unique ids; otherwise ParseError is raised.
    """
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ParseError(f"expected a JSON array of tasks, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[int] = set()
    for index, raw in enumerate(data):
        task = _dict_to_task(raw, index)
        if task.id in seen:
            raise ParseError(f"task #{index}: duplicate id {task.id}")
        seen.add(task.id)
        tasks.append(task)
    return tasks


def dump_tasks(tasks: list[Task]) -> str:
    return json.dumps([_task_to_dict(t) for t in tasks], ensure_ascii=False, indent=2) + "\n"


class TaskStore:
    """
    JSON-file task store.

    The whole collection lives in memory and is rewritten to disk after each
    successful mutation:
    - tasks keep insertion order; deletion preserves the order of survivors
    - ids come from a monotonic allocator and are never reused
    - callers only ever get copies of stored tasks
    - a failed save restores the previous in-memory state before re-raising
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_TASKS_FILE,
        *,
        tasks: list[Task] | None = None,
        last_id: int = 0,
        atomic_save: bool = True,
        clock: Clock | None = None,
        on_saved: SaveListener | None = None,
    ) -> None:
        self._path = Path(path)
        self._tasks: list[Task] = list(tasks or [])
        self._last_id = max([last_id, *(t.id for t in self._tasks)])
        self._atomic_save = atomic_save
        self._clock: Clock = clock or utc_now
        self._on_saved = on_saved

    @classmethod
    def load(cls, path: str | Path = DEFAULT_TASKS_FILE, **kwargs: Any) -> TaskStore:
        """
        Build a store from the tasks file.

        Missing or zero-length file -> empty store (next id = 1).
        Raises StoreIOError if the file exists but cannot be read,
        ParseError if its content is malformed.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            raw = b""
            logger.debug("Tasks file %s does not exist yet; starting empty.", path)
        except OSError as e:
            raise StoreIOError(f"error reading file {path}: {e}", path=path) from e

        try:
            tasks = load_tasks(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise ParseError(f"error decoding file {path}: {e}", path=path) from e
        except ParseError as e:
            raise ParseError(f"error parsing file {path}: {e}", path=path) from e

        store = cls(path, tasks=tasks, **kwargs)
        logger.info("TaskStore ready path=%s total=%s next_id=%s", path, len(tasks), store.next_id)
        return store

    # ---- low-level helpers ----

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        """The id the next allocate_id() call will return."""
        return self._last_id + 1

    def allocate_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return -1

    def _now(self) -> datetime:
        return self._clock()

    def save(self) -> Path:
        """Rewrite the whole tasks file. Raises StoreIOError on failure."""
        payload = dump_tasks(self._tasks)
        path = self._path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if self._atomic_save:
                tmp = path.with_name(path.name + ".tmp")
                try:
                    tmp.write_text(payload, "utf-8")
                    os.replace(tmp, path)
                except OSError:
                    with contextlib.suppress(OSError):
                        tmp.unlink()
                    raise
            else:
                path.write_text(payload, "utf-8")
        except OSError as e:
            logger.warning("Saving tasks to %s failed: %s", path, e)
            raise StoreIOError(f"error writing file {path}: {e}", path=path) from e

        logger.debug("Tasks saved path=%s total=%s", path, len(self._tasks))
        if self._on_saved is not None:
            self._on_saved(path)
        return path

    def _commit(self, snapshot: list[Task]) -> None:
        """Persist the current state, rolling back to `snapshot` if the save fails."""
        try:
            self.save()
        except StoreIOError:
            self._tasks = snapshot
            raise

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def list_tasks(self) -> list[Task]:
        return [replace(t) for t in self._tasks]

    def find_by_id(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return replace(self._tasks[idx]) if idx >= 0 else None

    def add(self, description: str) -> Task:
        text = (description or "").strip()
        if not text:
            raise ValidationError("Task description cannot be empty.")

        now = self._now()
        task = Task(
            id=self.allocate_id(),
            description=text,
            status=TaskStatus.NOT_STARTED,
            created_at=now,
            updated_at=now,
        )

        snapshot = list(self._tasks)
        self._tasks.append(task)
        self._commit(snapshot)
        logger.debug("Task added id=%s", task.id)
        return replace(task)

    def update(
        self,
        task_id: int,
        *,
        description: str | None = None,
        status: TaskStatus | int | None = None,
    ) -> Task:
        """
        Change description and/or status of a task.

        A blank description is ignored (the field stays as it is); an unknown
        status raises ValidationError before anything is applied.
        updated_at is refreshed and the file saved whenever a non-blank
        description or a status is supplied, even if the value is the same.
        """
        idx = self._index_of(task_id)
        if idx < 0:
            raise NotFoundError(task_id)
        if description is None and status is None:
            raise ValidationError("Nothing to update: supply a description and/or a status.")

        new_status: TaskStatus | None = None
        if status is not None:
            new_status = TaskStatus.coerce(status)
            if new_status is None:
                raise ValidationError("Invalid status. Please enter 0, 1, or 2.")

        current = self._tasks[idx]
        changes: dict[str, Any] = {}

        new_description = (description or "").strip()
        if new_description:
            changes["description"] = new_description
        if new_status is not None:
            changes["status"] = new_status

        if not changes:
            logger.debug("Task update id=%s: blank description, nothing to apply", task_id)
            return replace(current)

        changes["updated_at"] = max(self._now(), current.created_at)
        updated = replace(current, **changes)

        snapshot = list(self._tasks)
        self._tasks[idx] = updated
        self._commit(snapshot)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return replace(updated)

    def delete(self, task_id: int, *, confirmed: bool) -> Task | None:
        """
        Remove a task once the caller has confirmed it.

        Returns the removed task, or None when `confirmed` is false.
        """
        idx = self._index_of(task_id)
        if idx < 0:
            raise NotFoundError(task_id)
        if not confirmed:
            logger.debug("Task delete id=%s not confirmed", task_id)
            return None

        snapshot = list(self._tasks)
        removed = self._tasks.pop(idx)
        self._commit(snapshot)
        logger.debug("Task deleted id=%s", task_id)
        return replace(removed)

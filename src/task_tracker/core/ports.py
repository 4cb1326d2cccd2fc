# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Command handlers depend on Protocols instead of concrete implementations.
This keeps the console and the storage swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

Clock = Callable[[], datetime]
# Returns a timezone-aware "now".

SaveListener = Callable[[Path], None]


class Console(Protocol):
    """Line-oriented user I/O: ask a question, show a line."""

    def ask(self, prompt: str) -> str: ...

    def emit(self, text: str) -> None: ...


class TaskRepo(Protocol):
    def list_tasks(self) -> list[Any]: ...
    def count_tasks(self) -> int: ...
    def find_by_id(self, task_id: int) -> Any | None: ...
    def add(self, description: str) -> Any: ...
    def update(
        self,
        task_id: int,
        *,
        description: str | None = None,
        status: Any | None = None,
    ) -> Any: ...
    def delete(self, task_id: int, *, confirmed: bool) -> Any | None: ...

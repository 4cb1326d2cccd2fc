# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- loads the task store from the configured file,
- wires everything into AppState.

Load errors (unreadable file, malformed JSON) are not handled here: they are
fatal at startup and the entrypoint reports them.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import SaveListener
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, on_saved: SaveListener | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore.load(
        settings.tasks_file,
        atomic_save=getattr(settings, "atomic_save", True),
        on_saved=on_saved,
    )
    logger.debug("AppState created tasks_file=%s", settings.tasks_file)
    return AppState(settings=settings, store=store)

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.tasks.task_store import TaskStore

from .fakes import ScriptedConsole, StepClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="WARNING",
        log_to_file=False,
        tasks_file=tmp_path / "task.json",
        atomic_save=True,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def tasks_file(settings: SimpleNamespace) -> Path:
    return settings.tasks_file


@pytest.fixture()
def store(tasks_file: Path, clock: StepClock) -> TaskStore:
    return TaskStore.load(tasks_file, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired with a real TaskStore on a tmp file."""
    return AppState(settings=settings, store=store)


@pytest.fixture()
def console() -> ScriptedConsole:
    return ScriptedConsole()

# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the task store, then runs the console loop.
A tasks file that cannot be read or parsed is fatal: the error is printed
and the process exits with status 1 without touching the file.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from ..cli.bootstrap import create_initial_state
from ..config import LOG_LEVELS, get_settings
from ..connectors.console_connector import StdConsole, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_errors import TaskTrackerError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-tracker",
        description="Interactive task tracker backed by a JSON file",
    )
    parser.add_argument("--file", type=Path, help="tasks file (default: task.json)")
    parser.add_argument("--log-level", choices=[lvl.lower() for lvl in LOG_LEVELS])
    parser.add_argument("--no-log-file", action="store_true", help="do not write a log file")
    return parser


def main(argv: list[str] | None = None, *, console=None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    overrides: dict[str, object] = {}
    if args.file is not None:
        overrides["tasks_file"] = args.file
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    if args.no_log_file:
        overrides["log_to_file"] = False
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )
    logger.info("Starting %s...", settings.app_name)

    console = console or StdConsole()

    try:
        state = create_initial_state(
            settings=settings,
            on_saved=lambda path: console.emit(f"Tasks saved to {path}"),
        )
    except TaskTrackerError as e:
        logger.error("Loading tasks failed: %s", e)
        print(f"Error loading tasks: {e}", file=sys.stderr)
        return 1

    run_console_loop(state, console)
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

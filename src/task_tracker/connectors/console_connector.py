# src/task_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.ports import Console
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("quit", "exit", "/quit", "/exit")


class StdConsole:
    """Console port over stdin/stdout."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._print = print_fn

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def emit(self, text: str) -> None:
        self._print(text)


def run_console_loop(state: AppState, console: Console | None = None) -> None:
    """
    Read commands line by line until quit/exit, EOF or Ctrl+C.

    Every command runs to completion before the next line is read; a crashing
    handler is logged and reported, the loop keeps going.
    """
    console = console or StdConsole()
    logger.info("Console loop started (tasks=%s).", state.store.count_tasks())

    console.emit("Task Tracker")
    console.emit("Commands: add, list, view, edit, delete, quit")

    while True:
        try:
            line = console.ask("\nEnter command: ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            console.emit("")
            break

        if line.strip().lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            console.emit("Goodbye!")
            break

        try:
            reply = command_registry.handle(state, line, console)
        except (EOFError, KeyboardInterrupt):
            logger.info("Input closed in the middle of a command, exiting.")
            console.emit("")
            break
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            console.emit(reply)

    logger.info("Console loop finished.")

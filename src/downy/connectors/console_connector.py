# src/downy/connectors/console_connector.py

from __future__ import annotations

import logging
from types import TracebackType

from ..cli.parser import parse_command
from ..core.errors import DownyError
from ..core.ports import LineSource
from ..core.state import AppState

logger = logging.getLogger(__name__)


class StdinLineSource:
    """
    LineSource over input().

    EOF (Ctrl+D) and Ctrl+C both end the input. Use as a context manager so the
    source is released when the session ends.
    """

    def __init__(self, prompt: str = "") -> None:
        self._prompt = prompt
        self._closed = False

    def read_line(self) -> str | None:
        if self._closed:
            return None
        try:
            return input(self._prompt)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            return None
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            return None

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> StdinLineSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def run_console_loop(state: AppState, source: LineSource) -> None:
    """
    Read, parse and execute lines until `bye` or end of input.

    Errors never end the loop: DownyError is shown as-is, anything else is
    logged with its traceback and shown as an internal error.
    """
    ui = state.ui
    logger.info("Console connector started (tasks=%d).", len(state.tasks))

    ui.show_welcome()
    for warning in state.startup_warnings:
        ui.show_warning(warning)

    while True:
        line = source.read_line()
        if line is None:
            break

        line = line.strip()
        if not line:
            continue

        try:
            command = parse_command(line)
            command.execute(state.storage, state.tasks, ui)
        except DownyError as e:
            logger.debug("Command %r failed: %s: %s", line, type(e).__name__, e)
            ui.show_error(str(e))
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            ui.show_error("Internal error while handling the command.")
            continue

        if command.is_exit:
            logger.info("Console exit command received.")
            break

    logger.info("Console connector finished.")

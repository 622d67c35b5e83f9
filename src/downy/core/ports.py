# src/downy/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Commands and the console loop depend on Protocols instead of concrete
implementations, so tests can feed scripted input, capture rendered output,
and simulate a broken disk.
"""

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import Task


class LineSource(Protocol):
    """Where command lines come from. read_line() returns None at end of input."""

    def read_line(self) -> str | None: ...
    def close(self) -> None: ...


class TaskStorage(Protocol):
    def append(self, task: Task) -> None: ...
    def rewrite(self, tasks: Iterable[Task]) -> None: ...


class Renderer(Protocol):
    """Display collaborator. Stateless: every call renders one complete message."""

    def show_welcome(self) -> None: ...
    def show_farewell(self) -> None: ...
    def show_message(self, message: str) -> None: ...
    def show_error(self, message: str) -> None: ...
    def show_warning(self, message: str) -> None: ...
    def show_help(self, help_text: str) -> None: ...
    def show_tasks(self, tasks: Iterable[Task]) -> None: ...
    def show_matching_tasks(self, matches: Iterable[Task]) -> None: ...
    def show_task_added(self, task: Task, count: int) -> None: ...
    def show_task_marked(self, task: Task) -> None: ...
    def show_task_unmarked(self, task: Task) -> None: ...
    def show_task_deleted(self, task: Task, count: int) -> None: ...

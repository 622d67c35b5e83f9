# src/downy/cli/commands.py

"""
Command values and their execution.

Each Command is an immutable value produced by the parser. execute_command()
is the single dispatch point: it applies the command to the TaskList, asks the
storage to persist the change, then asks the renderer for the confirmation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import assert_never

from ..core.errors import StoragePersistError
from ..core.ports import Renderer, TaskStorage
from ..tasks.task_list import TaskList

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Command:
    @property
    def is_exit(self) -> bool:
        return False

    def execute(self, storage: TaskStorage, tasks: TaskList, ui: Renderer) -> None:
        execute_command(self, storage, tasks, ui)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class ListCommand(Command):
    pass


@dataclass(frozen=True, slots=True)
class MarkCommand(Command):
    index: int


@dataclass(frozen=True, slots=True)
class UnmarkCommand(Command):
    index: int


@dataclass(frozen=True, slots=True)
class DeleteCommand(Command):
    index: int


@dataclass(frozen=True, slots=True)
class ToDoCommand(Command):
    name: str


@dataclass(frozen=True, slots=True)
class DeadlineCommand(Command):
    name: str
    due: datetime


@dataclass(frozen=True, slots=True)
class EventCommand(Command):
    name: str
    start: datetime
    end: datetime


@dataclass(frozen=True, slots=True)
class FindCommand(Command):
    keyword: str


@dataclass(frozen=True, slots=True)
class HelpCommand(Command):
    help_text: str


@dataclass(frozen=True, slots=True)
class ExitCommand(Command):
    @property
    def is_exit(self) -> bool:
        return True


AnyCommand = (
    ListCommand
    | MarkCommand
    | UnmarkCommand
    | DeleteCommand
    | ToDoCommand
    | DeadlineCommand
    | EventCommand
    | FindCommand
    | HelpCommand
    | ExitCommand
)


def _persist(ui: Renderer, action: Callable[[], None]) -> None:
    """
    Run a storage write after the in-memory change has been applied.

    A failed write leaves memory and disk out of sync; report it and keep going.
    """
    try:
        action()
    except StoragePersistError as e:
        logger.warning("Persist failed: %s", e)
        ui.show_warning(f"{e}\nThe change is kept for this session but may be lost on exit.")


def execute_command(command: AnyCommand, storage: TaskStorage, tasks: TaskList, ui: Renderer) -> None:
    match command:
        case ListCommand():
            ui.show_tasks(tasks)

        case FindCommand(keyword):
            ui.show_matching_tasks(tasks.find_by_keyword(keyword))

        case ToDoCommand(name):
            task = tasks.add_todo(name)
            _persist(ui, lambda: storage.append(task))
            ui.show_task_added(task, len(tasks))

        case DeadlineCommand(name, due):
            task = tasks.add_deadline(name, due)
            _persist(ui, lambda: storage.append(task))
            ui.show_task_added(task, len(tasks))

        case EventCommand(name, start, end):
            task = tasks.add_event(name, start, end)
            _persist(ui, lambda: storage.append(task))
            ui.show_task_added(task, len(tasks))

        case MarkCommand(index):
            task = tasks.mark_done(index)
            _persist(ui, lambda: storage.rewrite(tasks))
            ui.show_task_marked(task)

        case UnmarkCommand(index):
            task = tasks.mark_not_done(index)
            _persist(ui, lambda: storage.rewrite(tasks))
            ui.show_task_unmarked(task)

        case DeleteCommand(index):
            task = tasks.delete(index)
            _persist(ui, lambda: storage.rewrite(tasks))
            ui.show_task_deleted(task, len(tasks))

        case HelpCommand(help_text):
            ui.show_help(help_text)

        case ExitCommand():
            ui.show_farewell()

        case _:
            assert_never(command)

    logger.debug("Executed %s (size=%d)", type(command).__name__, len(tasks))

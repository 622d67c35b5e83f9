# src/downy/ui/renderer.py

from __future__ import annotations

from collections.abc import Callable, Iterable

from ..tasks.task_models import Task

DIVIDER = "_" * 40

Writer = Callable[[str], None]


def _plural(n: int) -> str:
    return "task" if n == 1 else "tasks"


class Ui:
    """
    Console renderer.

    Holds nothing but the writer it prints through, so one instance can be
    shared by every command. Tests pass a writer that collects the output.
    """

    def __init__(self, app_name: str = "Downy", writer: Writer | None = None) -> None:
        self._app_name = app_name
        self._write: Writer = writer or print

    def _block(self, *lines: str) -> None:
        self._write("\n".join([DIVIDER, *lines, DIVIDER]))

    def show_welcome(self) -> None:
        self._block(f"Hello! I'm {self._app_name}.", "How can I help?")

    def show_farewell(self) -> None:
        self._block("Bye! Yippee!")

    def show_message(self, message: str) -> None:
        self._block(message)

    def show_error(self, message: str) -> None:
        self._block(f"Error: {message}")

    def show_warning(self, message: str) -> None:
        self._block(f"Warning: {message}")

    def show_help(self, help_text: str) -> None:
        self._block(help_text)

    def show_tasks(self, tasks: Iterable[Task]) -> None:
        lines = [f"{i}.{t.display()}" for i, t in enumerate(tasks, start=1)]
        if not lines:
            self._block("Your list is empty.")
            return
        self._block("Here are the tasks in your list:", *lines)

    def show_matching_tasks(self, matches: Iterable[Task]) -> None:
        lines = [f"{i}.{t.display()}" for i, t in enumerate(matches, start=1)]
        if not lines:
            lines = ["No matching tasks found."]
        self._block("Here are the tasks in your list that match the keyword:", *lines)

    def show_task_added(self, task: Task, count: int) -> None:
        self._block(
            "Okay! Added this task:",
            f"  {task.display()}",
            f"Now you have {count} {_plural(count)} in the list.",
        )

    def show_task_marked(self, task: Task) -> None:
        self._block("Nice! You've completed this task:", f"  {task.display()}")

    def show_task_unmarked(self, task: Task) -> None:
        self._block("Ok! This task is not complete:", f"  {task.display()}")

    def show_task_deleted(self, task: Task, count: int) -> None:
        self._block(
            "Ok! This task has been removed:",
            f"  {task.display()}",
            f"Now you have {count} {_plural(count)} in the list.",
        )

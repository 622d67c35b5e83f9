# src/downy/tasks/task_list.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime

from ..core.errors import IndexOutOfRange, InvalidTaskNumber
from .task_models import Deadline, Event, Task, ToDo

logger = logging.getLogger(__name__)


class TaskList:
    """
    Ordered in-memory task collection.

    Indexing conventions:
    - user-facing operations (mark/unmark/delete) take 1-based numbers and
      raise InvalidTaskNumber when out of [1, size]
    - get_task() takes a 0-based index and raises IndexOutOfRange
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    # ---- add ----

    def add(self, task: Task) -> Task:
        self._tasks.append(task)
        logger.debug("Task added #%d: %s", len(self._tasks), task.serialize())
        return task

    def add_todo(self, name: str) -> ToDo:
        task = ToDo(name)
        self.add(task)
        return task

    def add_deadline(self, name: str, due: datetime) -> Deadline:
        task = Deadline(name, due=due)
        self.add(task)
        return task

    def add_event(self, name: str, start: datetime, end: datetime) -> Event:
        task = Event(name, start=start, end=end)
        self.add(task)
        return task

    # ---- access ----

    def get_task(self, index0: int) -> Task:
        if index0 < 0 or index0 >= len(self._tasks):
            raise IndexOutOfRange(index0, len(self._tasks))
        return self._tasks[index0]

    def _to_index0(self, number: int) -> int:
        if number < 1 or number > len(self._tasks):
            raise InvalidTaskNumber(number, len(self._tasks))
        return number - 1

    # ---- mutation ----

    def mark_done(self, number: int) -> Task:
        task = self.get_task(self._to_index0(number))
        task.mark()
        return task

    def mark_not_done(self, number: int) -> Task:
        task = self.get_task(self._to_index0(number))
        task.unmark()
        return task

    def delete(self, number: int) -> Task:
        task = self._tasks.pop(self._to_index0(number))
        logger.debug("Task deleted #%d: %s", number, task.serialize())
        return task

    # ---- queries ----

    @property
    def size(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def find_by_keyword(self, keyword: str) -> Iterator[Task]:
        """Case-insensitive substring search over task names, in list order."""
        needle = keyword.lower()
        return (t for t in self._tasks if needle in t.name.lower())

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

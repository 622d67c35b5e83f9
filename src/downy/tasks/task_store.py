# src/downy/tasks/task_store.py

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..core.errors import CorruptTaskLine, StoragePersistError, StorageReadError
from .task_list import TaskList
from .task_models import Task, deserialize_task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Plain-text task file, one serialized task per line, in list order.

    - load(): reads the whole file once at startup
    - append(): adds one line after an add command
    - rewrite(): replaces the file (tmp + os.replace) after mark/unmark/delete

    Write failures surface as StoragePersistError; the in-memory list is never
    touched by this class.
    """

    def __init__(self, path: str | Path = "tasks.txt") -> None:
        self._path = Path(path)
        self.skipped_lines = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return self._path.with_suffix(self._path.suffix + ".bak")

    def load(self) -> TaskList:
        """
        Rebuild a TaskList from disk.

        Missing file -> empty list. Lines are split on "\\n" only and decoded one
        by one; blank lines are ignored, corrupt or undecodable lines are
        skipped and counted in self.skipped_lines.

        A file that cannot be read at all is moved to backup_path before
        StorageReadError is raised, so a later rewrite() cannot overwrite it.
        """
        self.skipped_lines = 0
        tasks = TaskList()
        if not self._path.exists():
            logger.info("TaskStore: no task file at %s, starting empty", self._path)
            return tasks

        try:
            data = self._path.read_bytes()
        except OSError as e:
            raise StorageReadError(self._set_aside(e)) from e

        for lineno, raw in enumerate(data.split(b"\n"), start=1):
            if not raw.strip():
                continue
            try:
                line = raw.decode("utf-8")
                tasks.add(deserialize_task(line))
            except UnicodeDecodeError as e:
                self.skipped_lines += 1
                logger.warning("TaskStore: skipping line %d of %s: not UTF-8 (%s)", lineno, self._path, e)
            except CorruptTaskLine as e:
                self.skipped_lines += 1
                logger.warning("TaskStore: skipping line %d of %s: %s", lineno, self._path, e.reason)

        logger.info(
            "TaskStore ready path=%s total=%d skipped=%d",
            self._path,
            len(tasks),
            self.skipped_lines,
        )
        return tasks

    def _set_aside(self, error: OSError) -> str:
        try:
            os.replace(self._path, self.backup_path)
        except OSError:
            logger.exception("TaskStore: could not move %s aside", self._path)
            return (
                f"Could not read {self._path}: {error}. It could not be backed up either; "
                "saving a change will overwrite it."
            )
        logger.warning("TaskStore: unreadable %s moved to %s", self._path, self.backup_path)
        return f"Could not read {self._path}: {error}. The file was moved to {self.backup_path}."

    def _needs_leading_newline(self) -> bool:
        try:
            with self._path.open("rb") as f:
                f.seek(0, os.SEEK_END)
                if f.tell() == 0:
                    return False
                f.seek(-1, os.SEEK_END)
                return f.read(1) != b"\n"
        except FileNotFoundError:
            return False

    def append(self, task: Task) -> None:
        record = task.serialize() + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # A hand-edited file may lack its final newline.
            if self._needs_leading_newline():
                record = "\n" + record
            with self._path.open("a", encoding="utf-8", newline="\n") as f:
                f.write(record)
        except OSError as e:
            raise StoragePersistError(f"Could not save the new task to {self._path}: {e}") from e
        logger.debug("TaskStore: appended %s", task.serialize())

    def rewrite(self, tasks: Iterable[Task]) -> None:
        lines = [t.serialize() + "\n" for t in tasks]
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text("".join(lines), "utf-8", newline="\n")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StoragePersistError(f"Could not update {self._path}: {e}") from e
        logger.debug("TaskStore: rewrote %s (%d tasks)", self._path, len(lines))

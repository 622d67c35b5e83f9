# src/downy/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the task file store, the task list read from it, and the renderer
  into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import StorageReadError
from ..core.ports import Renderer
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore
from ..ui.renderer import Ui

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, ui: Renderer | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    A task file that cannot be read does not stop the app: it starts with an
    empty list and a warning instead.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.tasks_path)
    warnings: list[str] = []

    try:
        tasks = store.load()
    except StorageReadError as e:
        logger.warning("Starting with an empty task list: %s", e)
        warnings.append(f"{e}\nStarting with an empty task list.")
        tasks = TaskList()

    if store.skipped_lines:
        warnings.append(
            f"Skipped {store.skipped_lines} unreadable line(s) in {store.path}. "
            "They will be dropped the next time the file is rewritten."
        )

    return AppState(
        settings=settings,
        tasks=tasks,
        storage=store,
        ui=ui or Ui(app_name=str(getattr(settings, "app_name", "Downy"))),
        startup_warnings=warnings,
    )

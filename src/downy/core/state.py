# src/downy/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_list import TaskList
from .ports import Renderer, TaskStorage


@dataclass
class AppState:
    # Settings object (Settings in production, SimpleNamespace in tests).
    settings: Any

    tasks: TaskList
    storage: TaskStorage
    ui: Renderer

    # Problems found while loading, shown right after the welcome message.
    startup_warnings: list[str] = field(default_factory=list)

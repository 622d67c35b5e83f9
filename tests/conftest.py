# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from downy.core.state import AppState
from downy.tasks.task_list import TaskList
from downy.tasks.task_store import TaskStore
from downy.ui.renderer import Ui

from .fakes import RecordingUi


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="Downy",
        log_level="WARNING",
        prompt="",
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.txt",
        log_dir=tmp_path / "data",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_path)


@pytest.fixture()
def output() -> list[str]:
    return []


@pytest.fixture()
def console_state(settings: SimpleNamespace, store: TaskStore, output: list[str]) -> AppState:
    """AppState with the real file store and a Ui that writes into `output`."""
    return AppState(
        settings=settings,
        tasks=TaskList(),
        storage=store,
        ui=Ui(app_name=settings.app_name, writer=output.append),
    )


@pytest.fixture()
def ui() -> RecordingUi:
    return RecordingUi()


@pytest.fixture()
def jan1() -> datetime:
    return datetime(2024, 1, 1, 10, 0)

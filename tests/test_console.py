# tests/test_console.py

from __future__ import annotations

from downy.cli.bootstrap import create_initial_state
from downy.connectors.console_connector import StdinLineSource, run_console_loop
from downy.ui.renderer import DIVIDER, Ui

from .fakes import ScriptedLineSource


def _blocks(output: list[str]) -> list[list[str]]:
    """Each Ui call writes one divider-framed block; return the inner lines."""
    out = []
    for text in output:
        lines = text.split("\n")
        assert lines[0] == DIVIDER and lines[-1] == DIVIDER
        out.append(lines[1:-1])
    return out


def test_end_to_end_session(settings, output) -> None:
    state = create_initial_state(settings=settings, ui=Ui(writer=output.append))
    source = ScriptedLineSource(["todo Buy milk", "list", "mark 1", "list", "bye", "list"])

    run_console_loop(state, source)

    blocks = _blocks(output)
    assert blocks[0] == ["Hello! I'm Downy.", "How can I help?"]
    assert blocks[1] == [
        "Okay! Added this task:",
        "  [T][ ] Buy milk",
        "Now you have 1 task in the list.",
    ]
    assert blocks[2] == ["Here are the tasks in your list:", "1.[T][ ] Buy milk"]
    assert blocks[3] == ["Nice! You've completed this task:", "  [T][X] Buy milk"]
    assert blocks[4] == ["Here are the tasks in your list:", "1.[T][X] Buy milk"]
    assert blocks[5] == ["Bye! Yippee!"]
    assert len(blocks) == 6

    # The loop stops reading at bye.
    assert source.remaining == ["list"]
    assert settings.tasks_path.read_text("utf-8") == "T|1|Buy milk\n"


def test_errors_are_reported_and_loop_continues(console_state, output) -> None:
    source = ScriptedLineSource(
        [
            "",
            "fly away",
            "mark 1",
            "mark x",
            "deadline Report /by notadate",
            "todo Walk dog",
            "delete 5",
            "find DOG",
            "find xyz",
        ]
    )

    run_console_loop(console_state, source)

    blocks = _blocks(output)[1:]  # drop welcome
    assert blocks[0][0].startswith("Error: I don't know the command 'fly'")
    assert blocks[1] == ["Error: There is no task 1: your list is empty."]
    assert blocks[2] == ["Error: taskNumber must be a number."]
    assert blocks[3][0].startswith("Error: Could not read 'notadate' as a date.")
    assert blocks[4][1] == "  [T][ ] Walk dog"
    assert blocks[5] == ["Error: There is no task 5. Pick a number from 1 to 1."]
    assert blocks[6] == [
        "Here are the tasks in your list that match the keyword:",
        "1.[T][ ] Walk dog",
    ]
    assert blocks[7] == [
        "Here are the tasks in your list that match the keyword:",
        "No matching tasks found.",
    ]
    assert len(console_state.tasks) == 1


def test_end_of_input_ends_loop_without_farewell(console_state, output) -> None:
    run_console_loop(console_state, ScriptedLineSource(["todo x"]))
    blocks = _blocks(output)
    assert blocks[-1][0] == "Okay! Added this task:"


def test_unexpected_exception_is_contained(console_state, output, monkeypatch, caplog) -> None:
    def explode(task):
        raise RuntimeError("boom")

    monkeypatch.setattr(console_state.storage, "append", explode)
    run_console_loop(console_state, ScriptedLineSource(["todo x", "list"]))

    blocks = _blocks(output)
    assert blocks[1] == ["Error: Internal error while handling the command."]
    assert blocks[2] == ["Here are the tasks in your list:", "1.[T][ ] x"]
    assert "Command handler crashed." in caplog.text


def test_tasks_survive_restart(settings, output) -> None:
    first = create_initial_state(settings=settings, ui=Ui(writer=output.append))
    run_console_loop(
        first,
        ScriptedLineSource(
            [
                "todo a",
                "deadline b /by 2024-01-31 1800",
                "event c /from 2024-02-01 1900 /to 2024-02-01 2300",
                "mark 2",
                "delete 1",
                "bye",
            ]
        ),
    )

    second = create_initial_state(settings=settings, ui=Ui(writer=output.append))
    assert [t.display() for t in second.tasks] == [
        "[D][X] b (by: Jan 31 2024, 6:00 PM)",
        "[E][ ] c (from: Feb 1 2024, 7:00 PM to: Feb 1 2024, 11:00 PM)",
    ]
    assert second.startup_warnings == []


def test_startup_warnings_are_shown_after_welcome(settings, output) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text("T|0|fine\nbroken line\n", "utf-8")

    state = create_initial_state(settings=settings, ui=Ui(writer=output.append))
    run_console_loop(state, ScriptedLineSource([]))

    blocks = _blocks(output)
    assert blocks[1][0].startswith("Warning: Skipped 1 unreadable line(s)")
    assert [t.name for t in state.tasks] == ["fine"]


def test_unreadable_task_file_starts_empty(settings, output) -> None:
    settings.tasks_path.mkdir(parents=True)  # directory in place of the file

    state = create_initial_state(settings=settings, ui=Ui(writer=output.append))

    assert state.tasks.is_empty()
    assert len(state.startup_warnings) == 1
    assert "Starting with an empty task list." in state.startup_warnings[0]
    assert "moved to" in state.startup_warnings[0]
    assert settings.tasks_path.with_suffix(".txt.bak").is_dir()


def test_bad_byte_in_task_file_does_not_wipe_other_tasks(settings, output) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_bytes(b"T|0|keep me\nT|0|caf\xe9\n")

    state = create_initial_state(settings=settings, ui=Ui(writer=output.append))
    assert [t.name for t in state.tasks] == ["keep me"]

    run_console_loop(state, ScriptedLineSource(["todo new", "mark 1", "bye"]))

    assert settings.tasks_path.read_bytes() == b"T|1|keep me\nT|0|new\n"


def test_stdin_source_reads_until_eof(monkeypatch) -> None:
    lines = iter(["todo x", "bye"])

    def fake_input(prompt: str = "") -> str:
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    with StdinLineSource() as source:
        assert source.read_line() == "todo x"
        assert source.read_line() == "bye"
        assert source.read_line() is None
    assert source.read_line() is None


def test_main_runs_a_session_and_returns(settings, monkeypatch, capsys) -> None:
    from downy.cli import main as main_module

    settings.log_to_file = False
    lines = iter(["todo from main", "bye"])
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    main_module.main()

    assert settings.tasks_path.read_text("utf-8") == "T|0|from main\n"
    assert "Bye! Yippee!" in capsys.readouterr().out

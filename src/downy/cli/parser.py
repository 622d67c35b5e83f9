# src/downy/cli/parser.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..core.errors import (
    EmptyDescription,
    InvalidArgument,
    InvalidDateRange,
    MissingArgument,
    UnknownCommand,
)
from ..tasks.task_models import MACHINE_DATE_HINT, format_display_date, parse_machine_date
from .commands import (
    Command,
    DeadlineCommand,
    DeleteCommand,
    EventCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    MarkCommand,
    ToDoCommand,
    UnmarkCommand,
)

logger = logging.getLogger(__name__)

ArgParser = Callable[[str], Command]

_INT_RE = re.compile(r"[+-]?\d+")


class CommandParser:
    """
    Keyword -> argument parser registry.

    parse() is pure: it never touches the task list, the disk or the screen.
    It either returns a Command or raises a DownyError subclass.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, ArgParser] = {}
        self._usage: dict[str, str] = {}

    def register(self, keyword: str, parse_args: ArgParser, usage: str) -> None:
        self._parsers[keyword] = parse_args
        self._usage[keyword] = usage

    @property
    def keywords(self) -> list[str]:
        return list(self._parsers)

    def parse(self, line: str) -> Command:
        parts = line.strip().split(maxsplit=1)
        if not parts:
            raise UnknownCommand("")

        keyword = parts[0]
        args = parts[1] if len(parts) > 1 else ""

        parse_args = self._parsers.get(keyword)
        if parse_args is None:
            raise UnknownCommand(keyword)

        command = parse_args(args)
        logger.debug("Parsed %r -> %r", line, command)
        return command

    def build_help(self) -> str:
        lines = ["Here are the valid commands:"]
        for usage in self._usage.values():
            lines.append(f" - {usage}")
        lines.append(f"Dates use the format {MACHINE_DATE_HINT}, e.g. 2024-01-31 1800.")
        return "\n".join(lines)


# ---- argument parsers ----


def _no_args(command: Command) -> ArgParser:
    def parse_args(args: str) -> Command:
        # Trailing text after list/bye/help is ignored.
        return command

    return parse_args


def _task_number(args: str) -> int:
    raw = args.strip()
    if not raw:
        raise MissingArgument("taskNumber is missing.")
    if not _INT_RE.fullmatch(raw):
        raise InvalidArgument("taskNumber must be a number.")
    # Range is checked by the TaskList when the command runs.
    try:
        return int(raw)
    except ValueError:
        # More digits than int() accepts (sys.get_int_max_str_digits).
        raise InvalidArgument("taskNumber is far too large.") from None


def _split_marker(text: str, marker: str, what: str) -> tuple[str, str]:
    before, found, after = text.partition(marker)
    if not found:
        raise MissingArgument(f"The {marker} marker is missing ({what}).")
    return before.strip(), after.strip()


def _require(value: str, what: str) -> str:
    if not value:
        raise MissingArgument(f"{what} is missing.")
    return value


def parse_mark(args: str) -> Command:
    return MarkCommand(_task_number(args))


def parse_unmark(args: str) -> Command:
    return UnmarkCommand(_task_number(args))


def parse_delete(args: str) -> Command:
    return DeleteCommand(_task_number(args))


def parse_todo(args: str) -> Command:
    name = args.strip()
    if not name:
        raise EmptyDescription("todo")
    return ToDoCommand(name)


def parse_deadline(args: str) -> Command:
    if not args.strip():
        raise EmptyDescription("deadline")
    name, due_raw = _split_marker(args, "/by", "deadline <description> /by <dueDate>")
    if not name:
        raise EmptyDescription("deadline")
    due = parse_machine_date(_require(due_raw, "dueDate"))
    return DeadlineCommand(name, due)


def parse_event(args: str) -> Command:
    if not args.strip():
        raise EmptyDescription("event")
    usage = "event <description> /from <startTime> /to <endTime>"
    name, times = _split_marker(args, "/from", usage)
    start_raw, end_raw = _split_marker(times, "/to", usage)
    if not name:
        raise EmptyDescription("event")

    start = parse_machine_date(_require(start_raw, "startTime"))
    end = parse_machine_date(_require(end_raw, "endTime"))
    if start > end:
        raise InvalidDateRange(
            f"An event cannot end ({format_display_date(end)}) "
            f"before it starts ({format_display_date(start)})."
        )
    return EventCommand(name, start, end)


def parse_help(args: str) -> Command:
    return HelpCommand(parser.build_help())


def parse_find(args: str) -> Command:
    keyword = args.strip()
    if not keyword:
        raise MissingArgument("keyword is missing.")
    return FindCommand(keyword)


parser = CommandParser()

parser.register("list", _no_args(ListCommand()), "list")
parser.register("mark", parse_mark, "mark <taskNumber>")
parser.register("unmark", parse_unmark, "unmark <taskNumber>")
parser.register("delete", parse_delete, "delete <taskNumber>")
parser.register("todo", parse_todo, "todo <description>")
parser.register("deadline", parse_deadline, "deadline <description> /by <dueDate>")
parser.register("event", parse_event, "event <description> /from <startTime> /to <endTime>")
parser.register("find", parse_find, "find <keyword>")
parser.register("help", parse_help, "help")
parser.register("bye", _no_args(ExitCommand()), "bye")


def parse_command(line: str) -> Command:
    return parser.parse(line)

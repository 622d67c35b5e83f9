# src/downy/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ..core.errors import CorruptTaskLine, InvalidDateFormat

# Machine format: what users type and what goes to disk ("2024-01-01 1800").
MACHINE_DATE_FORMAT = "%Y-%m-%d %H%M"
MACHINE_DATE_HINT = "YYYY-MM-DD HHmm"

FIELD_SEP = "|"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_machine_date(text: str) -> datetime:
    raw = (text or "").strip()
    try:
        return datetime.strptime(raw, MACHINE_DATE_FORMAT)
    except ValueError:
        raise InvalidDateFormat(raw, MACHINE_DATE_HINT) from None


def format_machine_date(dt: datetime) -> str:
    return dt.strftime(MACHINE_DATE_FORMAT)


def format_display_date(dt: datetime) -> str:
    """Human-friendly rendering, e.g. "Jan 1 2024, 6:00 PM". Locale independent."""
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{_MONTHS[dt.month - 1]} {dt.day} {dt.year}, {hour}:{dt:%M} {meridiem}"


class TaskKind(StrEnum):
    """Type tag used in both the display form and the on-disk form."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


@dataclass(slots=True, eq=True)
class Task:
    name: str
    done: bool = False

    kind = TaskKind.TODO  # class-level, overridden per variant

    @property
    def is_done(self) -> bool:
        return self.done

    def mark(self) -> None:
        if not self.done:
            self.done = True

    def unmark(self) -> None:
        if self.done:
            self.done = False

    @property
    def status_icon(self) -> str:
        return "[X]" if self.done else "[ ]"

    def _extra_fields(self) -> list[str]:
        return []

    def _display_suffix(self) -> str:
        return ""

    def serialize(self) -> str:
        fields = [self.kind.value, "1" if self.done else "0", self.name, *self._extra_fields()]
        return FIELD_SEP.join(fields)

    def display(self) -> str:
        return f"[{self.kind.value}]{self.status_icon} {self.name}{self._display_suffix()}"

    def __str__(self) -> str:
        return self.display()


@dataclass(slots=True, eq=True)
class ToDo(Task):
    kind = TaskKind.TODO


@dataclass(slots=True, eq=True, kw_only=True)
class Deadline(Task):
    due: datetime

    kind = TaskKind.DEADLINE

    def _extra_fields(self) -> list[str]:
        return [format_machine_date(self.due)]

    def _display_suffix(self) -> str:
        return f" (by: {format_display_date(self.due)})"


@dataclass(slots=True, eq=True, kw_only=True)
class Event(Task):
    start: datetime
    end: datetime

    kind = TaskKind.EVENT

    def _extra_fields(self) -> list[str]:
        return [format_machine_date(self.start), format_machine_date(self.end)]

    def _display_suffix(self) -> str:
        return f" (from: {format_display_date(self.start)} to: {format_display_date(self.end)})"


_EXTRA_FIELD_COUNT = {
    TaskKind.TODO: 0,
    TaskKind.DEADLINE: 1,
    TaskKind.EVENT: 2,
}


def deserialize_task(line: str) -> Task:
    """
    Inverse of Task.serialize().

    The name sits between the done flag and the trailing date fields, so it is
    recovered with a right split and may itself contain the delimiter.
    """
    raw = line.rstrip("\r\n")
    head = raw.split(FIELD_SEP, 2)
    if len(head) != 3:
        raise CorruptTaskLine(raw, "expected at least 3 fields")

    tag, flag, rest = head
    try:
        kind = TaskKind(tag)
    except ValueError:
        raise CorruptTaskLine(raw, f"unknown type tag {tag!r}") from None

    if flag not in ("0", "1"):
        raise CorruptTaskLine(raw, f"done flag must be 0 or 1, got {flag!r}")
    done = flag == "1"

    n_extra = _EXTRA_FIELD_COUNT[kind]
    parts = rest.rsplit(FIELD_SEP, n_extra) if n_extra else [rest]
    if len(parts) != n_extra + 1:
        raise CorruptTaskLine(raw, f"expected {n_extra} date field(s) for {kind.name}")

    name, *dates = parts
    if not name.strip():
        raise CorruptTaskLine(raw, "empty name")

    try:
        parsed = [parse_machine_date(d) for d in dates]
    except InvalidDateFormat as e:
        raise CorruptTaskLine(raw, f"bad date {e.text!r}") from None

    match kind:
        case TaskKind.TODO:
            return ToDo(name, done)
        case TaskKind.DEADLINE:
            return Deadline(name, done, due=parsed[0])
        case TaskKind.EVENT:
            return Event(name, done, start=parsed[0], end=parsed[1])

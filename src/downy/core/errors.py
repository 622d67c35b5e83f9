# src/downy/core/errors.py

"""
Domain errors.

Every failure the user can trigger is a DownyError subclass whose str() is a
message fit for display. The console loop catches DownyError and keeps going.
"""

from __future__ import annotations


class DownyError(Exception):
    """Base class for all user-visible errors."""


# ---- parser ----


class UnknownCommand(DownyError):
    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        super().__init__(f"I don't know the command '{keyword}'. Type 'help' to see valid commands.")


class MissingArgument(DownyError):
    pass


class InvalidArgument(DownyError):
    pass


class EmptyDescription(DownyError):
    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"The description of a {kind} cannot be empty.")


class InvalidDateFormat(DownyError):
    def __init__(self, text: str, expected: str) -> None:
        self.text = text
        super().__init__(f"Could not read '{text}' as a date. Use the format {expected}.")


class InvalidDateRange(DownyError):
    pass


# ---- task list ----


class InvalidTaskNumber(DownyError):
    def __init__(self, number: int, size: int) -> None:
        self.number = number
        self.size = size
        if size == 0:
            msg = f"There is no task {number}: your list is empty."
        else:
            msg = f"There is no task {number}. Pick a number from 1 to {size}."
        super().__init__(msg)


class IndexOutOfRange(DownyError):
    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Task index {index} is out of range (size={size}).")


# ---- storage ----


class StoragePersistError(DownyError):
    pass


class StorageReadError(DownyError):
    pass


class CorruptTaskLine(DownyError):
    def __init__(self, line: str, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"Corrupt task line {line!r}: {reason}")

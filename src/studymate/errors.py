"""Exceptions raised by the StudyMate scheduling core."""

from __future__ import annotations


class StudyMateError(Exception):
    """Base class for all StudyMate errors."""


class CapacityExceededError(StudyMateError):
    """Adding an entry would exceed a list's hard capacity."""

    def __init__(self, kind: str, capacity: int) -> None:
        super().__init__(f"Too many {kind}! Please delete some to add in more.")
        self.kind = kind
        self.capacity = capacity


class InvalidIndexError(StudyMateError, IndexError):
    """An index-based accessor received a position outside the list."""

    def __init__(self, index: int, size: int) -> None:
        if size == 0:
            message = f"Index {index} is out of range: the list is empty"
        else:
            message = f"Index {index} is out of range (valid: 0 to {size - 1})"
        super().__init__(message)
        self.index = index
        self.size = size


class UnsupportedOperationError(StudyMateError):
    """The operation is not defined for this kind of schedule."""


class InvalidSnoozeError(StudyMateError):
    """A snooze would leave the reminder at or before the current time."""


class ParseError(StudyMateError, ValueError):
    """A saved record could not be decoded."""


class StorageError(StudyMateError):
    """The save file could not be read or written."""


__all__ = [
    "CapacityExceededError",
    "InvalidIndexError",
    "InvalidSnoozeError",
    "ParseError",
    "StorageError",
    "StudyMateError",
    "UnsupportedOperationError",
]

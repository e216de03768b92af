"""Date plus optional time-of-day value used for deadlines and triggers."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

BLANK = " "


def format_time(value: dt.time) -> str:
    """Render ``HH:MM`` when seconds are zero, otherwise the full ISO time."""

    if value.second == 0 and value.microsecond == 0:
        return value.strftime("%H:%M")
    return value.isoformat()


def shift(value: dt.datetime, delta: dt.timedelta) -> dt.datetime:
    """``value + delta``, raising ``ValueError`` when the result is past ``datetime.max``."""

    try:
        return value + delta
    except OverflowError as exc:
        raise ValueError(
            f"{value.isoformat()} plus {delta} is beyond the latest supported date"
        ) from exc


@dataclass(frozen=True, slots=True)
class DateTimeArg:
    """A calendar date and time-of-day, either of which may be blank.

    Instances are immutable; schedules and habits replace their value rather
    than editing it, so handing one out never exposes internal state.
    """

    date: Optional[dt.date] = None
    time: Optional[dt.time] = None

    @classmethod
    def from_datetime(cls, value: dt.datetime) -> "DateTimeArg":
        return cls(value.date(), value.time())

    @classmethod
    def parse(cls, text: str) -> "DateTimeArg":
        """Parse the canonical string form (``2025-10-12T08:00``)."""

        date_part, _, time_part = text.partition("T")
        date_part = date_part.strip()
        time_part = time_part.strip()
        if not date_part:
            raise ValueError(f"Missing date in {text!r}")
        parsed_date = dt.date.fromisoformat(date_part)
        parsed_time = dt.time.fromisoformat(time_part) if time_part else None
        return cls(parsed_date, parsed_time)

    @property
    def is_complete(self) -> bool:
        return self.date is not None and self.time is not None

    def to_datetime(self) -> dt.datetime:
        """Return the concrete instant; both segments must be present."""

        if self.date is None or self.time is None:
            raise ValueError(f"DateTimeArg {str(self)!r} has a blank segment")
        return dt.datetime.combine(self.date, self.time)

    def plus(self, delta: dt.timedelta) -> "DateTimeArg":
        return DateTimeArg.from_datetime(shift(self.to_datetime(), delta))

    def _sort_key(self) -> tuple[dt.date, dt.time]:
        return (self.date or dt.date.min, self.time or dt.time.min)

    def __lt__(self, other: "DateTimeArg") -> bool:
        if not isinstance(other, DateTimeArg):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: "DateTimeArg") -> bool:
        if not isinstance(other, DateTimeArg):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: "DateTimeArg") -> bool:
        if not isinstance(other, DateTimeArg):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: "DateTimeArg") -> bool:
        if not isinstance(other, DateTimeArg):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        date_text = self.date.isoformat() if self.date is not None else BLANK
        time_text = "T" + format_time(self.time) if self.time is not None else BLANK
        return date_text + time_text


__all__ = ["DateTimeArg", "format_time", "shift"]

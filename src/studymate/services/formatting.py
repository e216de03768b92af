"""Save-string encoding and decoding for habits and reminders.

Record layouts (fields separated by ``|``)::

    R|0|<fired>|<name>|<remind at>                 one-time reminder
    R|1|<on>|<name>|<remind at>|<interval>         recurring reminder
    H|<name>|<deadline>|<interval>|<streak>        habit

Flags are ``1``/``0``, date-times use the :class:`DateTimeArg` canonical form
and intervals use ISO-8601 duration text (``PT24H``, ``PT1H30M``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Optional, Union

from ..errors import ParseError
from ..models.datetime_arg import DateTimeArg

if TYPE_CHECKING:  # pragma: no cover
    from ..models.habit import Habit
    from ..models.reminder import Reminder

DELIMITER = "|"
REMINDER_TAG = "R"
HABIT_TAG = "H"

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)(?:\.(?P<fraction>\d{1,9}))?S)?)?$",
    re.IGNORECASE,
)


@dataclass(slots=True)
class ReminderRecord:
    """Decoded reminder line."""

    name: str
    remind_at: DateTimeArg
    recurring: bool
    flag: bool
    interval: Optional[timedelta] = None


@dataclass(slots=True)
class HabitRecord:
    """Decoded habit line."""

    name: str
    deadline: DateTimeArg
    interval: timedelta
    streak: int


Record = Union[ReminderRecord, HabitRecord]


def format_duration(value: timedelta) -> str:
    """Render ``value`` as ISO-8601 duration text, hours being the largest unit."""

    total = value // timedelta(microseconds=1)
    if total == 0:
        return "PT0S"
    if total < 0:
        raise ValueError(f"Cannot format negative duration {value}")
    hours, rest = divmod(total, _MICROS_PER_HOUR)
    minutes, rest = divmod(rest, _MICROS_PER_MINUTE)
    seconds, micros = divmod(rest, _MICROS_PER_SECOND)

    text = "PT"
    if hours:
        text += f"{hours}H"
    if minutes:
        text += f"{minutes}M"
    if seconds or micros:
        text += f"{seconds}"
        if micros:
            text += "." + f"{micros:06d}".rstrip("0")
        text += "S"
    return text


def parse_duration(text: str) -> timedelta:
    """Parse ISO-8601 ``PnDTnHnMn.nS`` duration text."""

    cleaned = text.strip()
    match = _DURATION_RE.match(cleaned)
    if not match or cleaned.upper() in {"P", "PT"} or cleaned.upper().endswith("T"):
        raise ParseError(f"Invalid duration: {text!r}")
    parts = match.groupdict()
    fraction = (parts["fraction"] or "").ljust(6, "0")[:6]
    try:
        return timedelta(
            days=int(parts["days"] or 0),
            hours=int(parts["hours"] or 0),
            minutes=int(parts["minutes"] or 0),
            seconds=int(parts["seconds"] or 0),
            microseconds=int(fraction or 0),
        )
    except OverflowError as exc:
        raise ParseError(f"Duration out of range: {text!r}") from exc


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _parse_flag(value: str, field: str) -> bool:
    if value not in {"0", "1"}:
        raise ParseError(f"Invalid {field} flag: {value!r}")
    return value == "1"


def _check_name(name: str) -> str:
    if DELIMITER in name or "\n" in name or "\r" in name:
        raise ValueError(f"Name {name!r} cannot contain {DELIMITER!r} or line breaks")
    return name


def _parse_datetime(value: str, field: str) -> DateTimeArg:
    try:
        parsed = DateTimeArg.parse(value)
    except ValueError as exc:
        raise ParseError(f"Error parsing {field} date/time: {exc}") from exc
    if not parsed.is_complete:
        raise ParseError(f"Error parsing {field} date/time: {value!r} has no time")
    return parsed


def reminder_save_string(reminder: "Reminder") -> str:
    """Encode a reminder as a single save line."""

    name = _check_name(reminder.name)
    if reminder.is_recurring:
        fields = [
            REMINDER_TAG,
            "1",
            _flag(reminder.is_active),
            name,
            str(reminder.remind_at),
            format_duration(reminder.interval),
        ]
    else:
        fields = [REMINDER_TAG, "0", _flag(not reminder.is_active), name, str(reminder.remind_at)]
    return DELIMITER.join(fields)


def habit_save_string(habit: "Habit") -> str:
    """Encode a habit as a single save line."""

    return DELIMITER.join(
        [
            HABIT_TAG,
            _check_name(habit.name),
            str(habit.deadline),
            format_duration(habit.interval),
            str(habit.streak),
        ]
    )


def parse_reminder(parts: list[str]) -> ReminderRecord:
    if len(parts) < 5:
        raise ParseError("Reminder record has too few fields")
    recurring = _parse_flag(parts[1], "recurring")
    flag = _parse_flag(parts[2], "status")
    remind_at = _parse_datetime(parts[4], "reminder")
    interval = None
    if recurring:
        if len(parts) < 6:
            raise ParseError("Recurring reminder missing interval!")
        interval = parse_duration(parts[5])
    return ReminderRecord(
        name=parts[3], remind_at=remind_at, recurring=recurring, flag=flag, interval=interval
    )


def parse_habit(parts: list[str]) -> HabitRecord:
    if len(parts) < 5:
        raise ParseError("Habit record has too few fields")
    deadline = _parse_datetime(parts[2], "habit")
    interval = parse_duration(parts[3])
    try:
        streak = int(parts[4])
    except ValueError as exc:
        raise ParseError(f"Invalid habit streak: {parts[4]!r}") from exc
    return HabitRecord(name=parts[1], deadline=deadline, interval=interval, streak=streak)


def parse_line(line: str) -> Optional[Record]:
    """Decode one save line; returns ``None`` for records owned by other collaborators."""

    parts = line.rstrip("\r\n").split(DELIMITER)
    tag = parts[0]
    if tag == REMINDER_TAG:
        return parse_reminder(parts)
    if tag == HABIT_TAG:
        return parse_habit(parts)
    return None


__all__ = [
    "HabitRecord",
    "ReminderRecord",
    "format_duration",
    "habit_save_string",
    "parse_duration",
    "parse_line",
    "reminder_save_string",
]

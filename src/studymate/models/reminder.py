"""Named reminder backed by a one-time or recurring schedule."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from .datetime_arg import DateTimeArg
from .schedule import OneTimeSchedule, RecurringSchedule, Schedule, ScheduleKind


def format_interval(interval: timedelta) -> str:
    """Short human form of an interval, e.g. ``1d 2h`` or ``45m``."""

    total = int(interval.total_seconds())
    days, rest = divmod(total, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, seconds = divmod(rest, 60)
    parts = [
        f"{value}{unit}"
        for value, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"))
        if value
    ]
    return " ".join(parts) or "0s"


class Reminder:
    """A named reminder that owns exactly one schedule.

    Reminders are created through :class:`~studymate.services.reminders.ReminderList`;
    the schedule is built here and never shared.
    """

    def __init__(self, name: str, schedule: Schedule) -> None:
        self._name = name
        self._schedule = schedule

    @classmethod
    def one_time(cls, name: str, remind_at: DateTimeArg, *, fired: bool = False) -> "Reminder":
        return cls(name, OneTimeSchedule(remind_at, fired=fired))

    @classmethod
    def recurring(
        cls, name: str, remind_at: DateTimeArg, interval: timedelta, *, active: bool = True
    ) -> "Reminder":
        return cls(name, RecurringSchedule(remind_at, interval, active=active))

    @property
    def name(self) -> str:
        return self._name

    @property
    def schedule(self) -> Schedule:
        return self._schedule

    @property
    def kind(self) -> ScheduleKind:
        return self._schedule.kind

    @property
    def remind_at(self) -> DateTimeArg:
        return self._schedule.remind_at

    @property
    def interval(self) -> Optional[timedelta]:
        return self._schedule.interval

    @property
    def is_recurring(self) -> bool:
        return self._schedule.is_recurring

    @property
    def is_active(self) -> bool:
        return self._schedule.is_active

    def set_active(self, active: bool) -> None:
        self._schedule.set_active(active)

    def is_due(self, now: datetime) -> bool:
        return self._schedule.is_due(now)

    def fire(self, now: datetime) -> None:
        self._schedule.fire(now)

    def snooze(self, duration: timedelta, now: datetime) -> None:
        self._schedule.snooze(duration, now)

    def to_save_string(self) -> str:
        # Import here to avoid circular imports at module import time
        from ..services.formatting import reminder_save_string

        return reminder_save_string(self)

    def __str__(self) -> str:
        marker = "X" if self.is_active else " "
        when = f"{self.remind_at.date.isoformat()} {self.remind_at.time.strftime('%H:%M')}"
        if self.is_recurring:
            return f"[R][{marker}] {self._name} (every {format_interval(self.interval)}, next: {when})"
        return f"[R][{marker}] {self._name} (at: {when})"

    def __repr__(self) -> str:
        return f"Reminder(name={self._name!r}, schedule={self._schedule!r})"


class IndexedReminder:
    """A reminder paired with its 1-based position in the list, for display."""

    __slots__ = ("index", "reminder")

    def __init__(self, index: int, reminder: Reminder) -> None:
        self.index = index
        self.reminder = reminder

    def __str__(self) -> str:
        return f"{self.index}. {self.reminder}"


__all__ = ["IndexedReminder", "Reminder", "format_interval"]

"""One-time and recurring trigger schedules for reminders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union

from ..errors import InvalidSnoozeError, UnsupportedOperationError
from .datetime_arg import DateTimeArg, shift


class ScheduleKind(str, Enum):
    """Discriminant for the two schedule variants."""

    ONE_TIME = "one_time"
    RECURRING = "recurring"


def _require_complete(remind_at: DateTimeArg) -> None:
    if not remind_at.is_complete:
        raise ValueError(f"Reminder time {str(remind_at)!r} needs both a date and a time")


@dataclass
class OneTimeSchedule:
    """Fires once at ``remind_at``; stays quiet until re-armed."""

    remind_at: DateTimeArg
    fired: bool = False

    kind = ScheduleKind.ONE_TIME

    def __post_init__(self) -> None:
        _require_complete(self.remind_at)

    @property
    def is_recurring(self) -> bool:
        return False

    @property
    def interval(self) -> Optional[timedelta]:
        return None

    @property
    def is_active(self) -> bool:
        return not self.fired

    def set_active(self, active: bool) -> None:
        self.fired = not active

    def is_due(self, now: datetime) -> bool:
        return not self.fired and now >= self.remind_at.to_datetime()

    def fire(self, now: datetime) -> None:
        self.fired = True

    def snooze(self, duration: timedelta, now: datetime) -> None:
        """Push the trigger back by ``duration`` and re-arm.

        Raises:
            InvalidSnoozeError: the new trigger would not be in the future
        """
        new_trigger = shift(self.remind_at.to_datetime(), duration)
        if new_trigger <= now:
            raise InvalidSnoozeError(
                f"Snooze duration too short! New reminder time ({new_trigger.isoformat()}) "
                "is not in the future."
            )
        self.remind_at = DateTimeArg.from_datetime(new_trigger)
        self.fired = False


@dataclass
class RecurringSchedule:
    """Fires every ``interval`` starting at ``remind_at`` while switched on."""

    remind_at: DateTimeArg
    interval: timedelta
    active: bool = True

    kind = ScheduleKind.RECURRING

    def __post_init__(self) -> None:
        _require_complete(self.remind_at)
        if self.interval <= timedelta(0):
            raise ValueError(f"Recurring interval must be positive, got {self.interval}")
        shift(self.remind_at.to_datetime(), self.interval)

    @property
    def is_recurring(self) -> bool:
        return True

    @property
    def is_active(self) -> bool:
        return self.active

    def set_active(self, active: bool) -> None:
        self.active = active

    def is_due(self, now: datetime) -> bool:
        return self.active and now >= self.remind_at.to_datetime()

    def fire(self, now: datetime) -> None:
        """Advance to the first slot strictly after ``now``.

        Missed slots collapse into a single jump, however long the gap. When
        that slot lies past the latest representable date the schedule is
        switched off and keeps its last trigger.
        """
        trigger = self.remind_at.to_datetime()
        if trigger > now:
            return
        steps = (now - trigger) // self.interval + 1
        try:
            next_trigger = trigger + steps * self.interval
        except OverflowError:
            self.active = False
            return
        self.remind_at = DateTimeArg.from_datetime(next_trigger)

    def snooze(self, duration: timedelta, now: datetime) -> None:
        raise UnsupportedOperationError("Recurring reminders cannot be snoozed.")


Schedule = Union[OneTimeSchedule, RecurringSchedule]

__all__ = ["OneTimeSchedule", "RecurringSchedule", "Schedule", "ScheduleKind"]

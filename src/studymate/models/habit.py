"""Habit streak tracking with a grace window past each deadline."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from ..clock import SYSTEM_CLOCK, Clock
from .datetime_arg import DateTimeArg, shift

# Grace window is interval / GRACE_DENOMINATOR, plus GRACE_BUFFER.
GRACE_DENOMINATOR = 4
GRACE_BUFFER = timedelta(minutes=1)


class StreakResult(str, Enum):
    """Outcome of a streak increment attempt."""

    TOO_EARLY = "too_early"
    ON_TIME = "on_time"
    TOO_LATE = "too_late"


class Habit:
    """A recurring habit with a next deadline and a consecutive-completion streak.

    A completion counts once the deadline's minute has started and until the
    grace window (a quarter of the interval plus one minute) has passed. Every
    counted or late completion sets the next deadline one full interval from
    the moment of completion.
    """

    def __init__(
        self,
        name: str,
        deadline: DateTimeArg,
        interval: timedelta,
        streak: int = 1,
        *,
        clock: Clock = SYSTEM_CLOCK,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError(f"Habit interval must be positive, got {interval}")
        if streak < 1:
            raise ValueError(f"Habit streak must be at least 1, got {streak}")
        if not deadline.is_complete:
            raise ValueError(f"Habit deadline {str(deadline)!r} needs both a date and a time")
        shift(deadline.to_datetime(), max(interval, interval / GRACE_DENOMINATOR + GRACE_BUFFER))
        self._name = name
        self._deadline = deadline
        self._interval = interval
        self._streak = streak
        self._clock = clock

    @classmethod
    def create(cls, name: str, interval: timedelta, *, clock: Clock = SYSTEM_CLOCK) -> "Habit":
        """Start a new habit: first deadline one interval from now, streak 1."""

        deadline = DateTimeArg.from_datetime(shift(clock.now(), interval))
        return cls(name, deadline, interval, 1, clock=clock)

    @property
    def name(self) -> str:
        return self._name

    @property
    def deadline(self) -> DateTimeArg:
        return self._deadline

    @property
    def interval(self) -> timedelta:
        return self._interval

    @property
    def streak(self) -> int:
        return self._streak

    @property
    def grace_end(self) -> datetime:
        """Last instant at which a completion still counts as on time."""

        grace = self._interval / GRACE_DENOMINATOR + GRACE_BUFFER
        return shift(self._deadline.to_datetime(), grace)

    def inc_streak(self, now: Optional[datetime] = None) -> StreakResult:
        """Record a completion attempt at ``now`` (defaults to the habit's clock)."""

        if now is None:
            now = self._clock.now()

        deadline_minute = self._deadline.to_datetime().replace(second=0, microsecond=0)
        if now < deadline_minute:
            return StreakResult.TOO_EARLY

        next_deadline = shift(now, self._interval)
        if now > self.grace_end:
            self._streak = 1
            result = StreakResult.TOO_LATE
        else:
            self._streak += 1
            result = StreakResult.ON_TIME

        self._deadline = DateTimeArg.from_datetime(next_deadline)
        return result

    def to_save_string(self) -> str:
        # Import here to avoid circular imports at module import time
        from ..services.formatting import habit_save_string

        return habit_save_string(self)

    def __str__(self) -> str:
        deadline = self._deadline.to_datetime().strftime("%Y-%m-%d %H:%M")
        return f"{self._name} (next: {deadline}, streak: {self._streak})"

    def __repr__(self) -> str:
        return (
            f"Habit(name={self._name!r}, deadline={str(self._deadline)!r}, "
            f"interval={self._interval!r}, streak={self._streak})"
        )


__all__ = ["GRACE_BUFFER", "GRACE_DENOMINATOR", "Habit", "StreakResult"]

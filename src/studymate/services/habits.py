"""Bounded, ordered collection of habits."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..clock import SYSTEM_CLOCK, Clock
from ..errors import CapacityExceededError, InvalidIndexError
from ..logging_config import get_logger
from ..models.datetime_arg import DateTimeArg
from ..models.habit import Habit, StreakResult

MAX_HABITS = 10_000

logger = get_logger("habits")


class HabitList:
    """Owns the user's habits in insertion order."""

    def __init__(self, clock: Clock = SYSTEM_CLOCK, *, capacity: int = MAX_HABITS) -> None:
        self._habits: list[Habit] = []
        self._clock = clock
        self._capacity = capacity

    def __len__(self) -> int:
        return len(self._habits)

    @property
    def count(self) -> int:
        return len(self._habits)

    @property
    def capacity(self) -> int:
        return self._capacity

    def _check_capacity(self) -> None:
        if len(self._habits) >= self._capacity:
            raise CapacityExceededError("habits", self._capacity)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._habits):
            raise InvalidIndexError(index, len(self._habits))

    def add_habit(self, name: str, interval: timedelta) -> Habit:
        """Create a new habit due one interval from now and append it."""

        self._check_capacity()
        habit = Habit.create(name, interval, clock=self._clock)
        self._habits.append(habit)
        logger.info("Added habit", extra={"habit": habit.name, "count": len(self._habits)})
        return habit

    def restore_habit(
        self, name: str, deadline: DateTimeArg, interval: timedelta, streak: int
    ) -> Habit:
        """Append a habit reloaded from storage with its saved deadline and streak."""

        self._check_capacity()
        habit = Habit(name, deadline, interval, streak, clock=self._clock)
        self._habits.append(habit)
        logger.debug("Loaded habit %s", habit.name)
        return habit

    def get_habit(self, index: int) -> Habit:
        self._check_index(index)
        return self._habits[index]

    def habits(self) -> list[Habit]:
        return list(self._habits)

    def delete_habit(self, index: int) -> Habit:
        self._check_index(index)
        habit = self._habits.pop(index)
        logger.info("Deleted habit", extra={"habit": habit.name, "count": len(self._habits)})
        return habit

    def inc_streak(self, index: int, now: Optional[datetime] = None) -> StreakResult:
        """Attempt a completion for the habit at ``index``."""

        self._check_index(index)
        habit = self._habits[index]
        result = habit.inc_streak(now)
        logger.info(
            "Streak attempt",
            extra={"habit": habit.name, "result": result.value, "streak": habit.streak},
        )
        return result


__all__ = ["HabitList", "MAX_HABITS"]

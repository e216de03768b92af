"""Thread-safe, bounded collection of reminders."""

from __future__ import annotations

from datetime import datetime, timedelta
from threading import RLock
from typing import Iterable, Optional

from ..clock import SYSTEM_CLOCK, Clock
from ..errors import CapacityExceededError, InvalidIndexError
from ..logging_config import get_logger
from ..models.datetime_arg import DateTimeArg
from ..models.reminder import Reminder

MAX_REMINDERS = 10_000

logger = get_logger("reminders")


class ReminderList:
    """Owns the user's reminders in insertion order.

    Every public operation holds one lock, so the interactive session and the
    background scheduler never observe or produce a half-updated list.
    """

    def __init__(self, clock: Clock = SYSTEM_CLOCK, *, capacity: int = MAX_REMINDERS) -> None:
        self._reminders: list[Reminder] = []
        self._clock = clock
        self._capacity = capacity
        self._lock = RLock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._reminders)

    @property
    def count(self) -> int:
        return len(self)

    def _append(self, reminder: Reminder) -> Reminder:
        with self._lock:
            if len(self._reminders) >= self._capacity:
                raise CapacityExceededError("reminders", self._capacity)
            self._reminders.append(reminder)
            logger.info(
                "Added reminder",
                extra={"reminder": reminder.name, "recurring": reminder.is_recurring},
            )
            return reminder

    def add_reminder_one_time(
        self, name: str, remind_at: DateTimeArg, *, fired: bool = False
    ) -> Reminder:
        return self._append(Reminder.one_time(name, remind_at, fired=fired))

    def add_reminder_recurring(
        self, name: str, remind_at: DateTimeArg, interval: timedelta, *, active: bool = True
    ) -> Reminder:
        return self._append(Reminder.recurring(name, remind_at, interval, active=active))

    def _validated(self, indexes: Iterable[int]) -> list[int]:
        """Return unique indexes in descending order, or raise before any mutation."""

        unique = sorted(set(indexes), reverse=True)
        size = len(self._reminders)
        for index in unique:
            if not 0 <= index < size:
                raise InvalidIndexError(index, size)
        return unique

    def get_reminder(self, index: int) -> Reminder:
        with self._lock:
            self._validated([index])
            return self._reminders[index]

    def reminders(self) -> list[Reminder]:
        """Snapshot of the current reminders."""

        with self._lock:
            return list(self._reminders)

    def index_of(self, reminder: Reminder) -> Optional[int]:
        with self._lock:
            for position, candidate in enumerate(self._reminders):
                if candidate is reminder:
                    return position
            return None

    def delete(self, indexes: Iterable[int]) -> list[Reminder]:
        """Remove the reminders at ``indexes``; returned highest index first."""

        with self._lock:
            removed = [self._reminders.pop(index) for index in self._validated(indexes)]
            for reminder in removed:
                logger.info("Deleted reminder", extra={"reminder": reminder.name})
            return removed

    def _switch(self, indexes: Iterable[int], active: bool) -> tuple[list[Reminder], list[Reminder]]:
        with self._lock:
            changed: list[Reminder] = []
            unchanged: list[Reminder] = []
            for index in self._validated(indexes):
                reminder = self._reminders[index]
                if reminder.is_active == active:
                    unchanged.append(reminder)
                    continue
                reminder.set_active(active)
                changed.append(reminder)
                logger.info(
                    "Turned %s reminder", "on" if active else "off",
                    extra={"reminder": reminder.name},
                )
            return changed, unchanged

    def turn_on(self, indexes: Iterable[int]) -> tuple[list[Reminder], list[Reminder]]:
        """Activate reminders; returns (newly activated, already active)."""

        return self._switch(indexes, True)

    def turn_off(self, indexes: Iterable[int]) -> tuple[list[Reminder], list[Reminder]]:
        """Deactivate reminders; returns (newly deactivated, already inactive)."""

        return self._switch(indexes, False)

    def snooze(self, index: int, duration: timedelta, now: Optional[datetime] = None) -> Reminder:
        """Delay the one-time reminder at ``index`` by ``duration``.

        Raises:
            InvalidIndexError: ``index`` is out of range
            UnsupportedOperationError: the reminder is recurring
            InvalidSnoozeError: the new time would not be in the future
        """
        with self._lock:
            reminder = self.get_reminder(index)
            reminder.snooze(duration, now if now is not None else self._clock.now())
            logger.info(
                "Snoozed reminder",
                extra={"reminder": reminder.name, "remind_at": str(reminder.remind_at)},
            )
            return reminder

    def due(self, now: Optional[datetime] = None) -> list[Reminder]:
        """Reminders due at ``now`` without firing them."""

        with self._lock:
            now = now if now is not None else self._clock.now()
            return [reminder for reminder in self._reminders if reminder.is_due(now)]

    def fire_due(self, now: Optional[datetime] = None) -> list[Reminder]:
        """Collect every reminder due at ``now``, then fire them all.

        Collecting first keeps one reminder's firing from affecting whether
        another counts as due in the same pass.
        """
        with self._lock:
            now = now if now is not None else self._clock.now()
            batch = [reminder for reminder in self._reminders if reminder.is_due(now)]
            for reminder in batch:
                reminder.fire(now)
                if reminder.is_recurring and not reminder.is_active:
                    logger.warning(
                        "Switched off recurring reminder with no slot left before the latest "
                        "supported date",
                        extra={"reminder": reminder.name, "remind_at": str(reminder.remind_at)},
                    )
            return batch


__all__ = ["MAX_REMINDERS", "ReminderList"]

"""Background ticker that fires due reminders."""

from __future__ import annotations

import itertools
import logging
from datetime import datetime
from threading import Lock
from typing import TYPE_CHECKING, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .clock import Clock
from .models.reminder import Reminder
from .services.reminders import ReminderList

if TYPE_CHECKING:
    from .config import BaseConfig

logger = logging.getLogger("studymate.scheduler")

DEFAULT_TICK_SECONDS = 30
TICK_JOB_ID = "reminder_tick"

ReminderSink = Callable[[list[Reminder]], None]


class ReminderScheduler:
    """Periodically scans a reminder list and hands fired batches to a sink."""

    def __init__(
        self,
        reminders: ReminderList,
        interval_seconds: int = DEFAULT_TICK_SECONDS,
        *,
        clock: Optional[Clock] = None,
        sink: Optional[ReminderSink] = None,
    ):
        """Initialize the scheduler.

        Args:
            reminders: List scanned on every tick
            interval_seconds: Seconds between background ticks
            clock: Source of "now"; defaults to the list's clock
            sink: Receives each non-empty batch of fired reminders
        """
        if interval_seconds <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_seconds}")
        self.reminders = reminders
        self.interval_seconds = interval_seconds
        self.clock = clock or reminders.clock
        self.sink = sink
        self.scheduler: Optional[BackgroundScheduler] = None
        self.ticks = 0
        self._tick_numbers = itertools.count(1)
        self._state_lock = Lock()

    @property
    def running(self) -> bool:
        return self.scheduler is not None

    def start(self) -> None:
        """Start ticking in the background; a no-op when already running."""

        with self._state_lock:
            if self.scheduler is not None:
                logger.warning("Scheduler already running")
                return

            scheduler = BackgroundScheduler(daemon=True)
            scheduler.add_job(
                func=self._run_tick,
                trigger=IntervalTrigger(seconds=self.interval_seconds),
                id=TICK_JOB_ID,
                name="Reminder tick",
                next_run_time=datetime.now(),
                max_instances=1,
                coalesce=True,
                misfire_grace_time=None,
                replace_existing=True,
            )
            scheduler.start()
            self.scheduler = scheduler

        logger.info(f"Reminder scheduler started (every {self.interval_seconds}s)")

    def shutdown(self, wait: bool = True) -> None:
        """Stop ticking; a no-op when already stopped.

        An in-flight tick is allowed to finish when ``wait`` is true.
        """
        with self._state_lock:
            scheduler, self.scheduler = self.scheduler, None
        if scheduler is None:
            return
        scheduler.shutdown(wait=wait)
        logger.info("Reminder scheduler stopped")

    def tick(self) -> list[Reminder]:
        """Fire every reminder due now and return them in list order."""

        number = next(self._tick_numbers)
        self.ticks = number
        batch = self.reminders.fire_due(self.clock.now())
        if batch:
            logger.info(
                "Fired reminders",
                extra={"tick": number, "fired": [reminder.name for reminder in batch]},
            )
        return batch

    def _run_tick(self) -> None:
        try:
            batch = self.tick()
            if batch and self.sink is not None:
                self.sink(batch)
        except Exception as exc:
            logger.error(f"Reminder tick failed: {exc}", exc_info=True, extra={"tick": self.ticks})


def create_scheduler(
    reminders: ReminderList,
    config: BaseConfig,
    *,
    sink: Optional[ReminderSink] = None,
    auto_start: bool = False,
) -> ReminderScheduler:
    """Create and optionally start a reminder scheduler.

    Args:
        reminders: Reminder list to watch
        config: Application configuration supplying TICK_SECONDS
        sink: Consumer for fired batches
        auto_start: Whether to start the scheduler immediately

    Returns:
        ReminderScheduler instance
    """
    scheduler = ReminderScheduler(reminders, config.TICK_SECONDS, sink=sink)
    if auto_start:
        scheduler.start()
    return scheduler


__all__ = [
    "DEFAULT_TICK_SECONDS",
    "TICK_JOB_ID",
    "ReminderScheduler",
    "ReminderSink",
    "create_scheduler",
]

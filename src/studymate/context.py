"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .clock import SYSTEM_CLOCK, Clock
from .config import BaseConfig
from .services.habits import HabitList
from .services.reminders import ReminderList
from .services.storage import LoadReport, Storage


@dataclass
class AppContext:
    """Configuration, lists and storage shared by one session."""

    config: BaseConfig
    clock: Clock
    habits: HabitList
    reminders: ReminderList
    storage: Storage
    load_report: Optional[LoadReport] = None

    def save(self) -> None:
        self.storage.save(self.habits.habits(), self.reminders.reminders())


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    clock: Clock = SYSTEM_CLOCK,
    load: bool = True,
) -> AppContext:
    """Build the lists and storage, loading the save file when ``load`` is set."""

    if config is None:
        config = BaseConfig()

    habits = HabitList(clock)
    reminders = ReminderList(clock)
    storage = Storage(config.SAVE_FILE)

    ctx = AppContext(
        config=config,
        clock=clock,
        habits=habits,
        reminders=reminders,
        storage=storage,
    )
    if load:
        ctx.load_report = storage.load(habits, reminders)
    return ctx

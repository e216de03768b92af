"""StudyMate scheduling core: habit streaks and reminder schedules."""

from __future__ import annotations

from .clock import Clock, FixedClock, SystemClock
from .config import BaseConfig, DevConfig
from .context import AppContext, create_app_context
from .errors import (
    CapacityExceededError,
    InvalidIndexError,
    InvalidSnoozeError,
    StudyMateError,
    UnsupportedOperationError,
)
from .models import DateTimeArg, Habit, Reminder, StreakResult
from .scheduler import ReminderScheduler
from .services import HabitList, ReminderList, Storage

__all__ = [
    "AppContext",
    "BaseConfig",
    "CapacityExceededError",
    "Clock",
    "DateTimeArg",
    "DevConfig",
    "FixedClock",
    "Habit",
    "HabitList",
    "InvalidIndexError",
    "InvalidSnoozeError",
    "Reminder",
    "ReminderList",
    "ReminderScheduler",
    "Storage",
    "StreakResult",
    "StudyMateError",
    "SystemClock",
    "UnsupportedOperationError",
    "create_app_context",
]

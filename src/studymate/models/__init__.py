"""Domain objects for the scheduling core."""

from .datetime_arg import DateTimeArg
from .habit import Habit, StreakResult
from .reminder import IndexedReminder, Reminder
from .schedule import OneTimeSchedule, RecurringSchedule, Schedule, ScheduleKind

__all__ = [
    "DateTimeArg",
    "Habit",
    "IndexedReminder",
    "OneTimeSchedule",
    "RecurringSchedule",
    "Reminder",
    "Schedule",
    "ScheduleKind",
    "StreakResult",
]

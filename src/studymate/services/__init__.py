"""Service module exports."""

from . import formatting, habits, reminders, storage
from .habits import MAX_HABITS, HabitList
from .reminders import MAX_REMINDERS, ReminderList
from .storage import LoadReport, Storage

__all__ = [
    "formatting",
    "habits",
    "reminders",
    "storage",
    "HabitList",
    "LoadReport",
    "MAX_HABITS",
    "MAX_REMINDERS",
    "ReminderList",
    "Storage",
]

"""Line-oriented save file for habits and reminders."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Iterable

from ..errors import CapacityExceededError, StorageError
from ..logging_config import get_logger
from ..models.habit import Habit
from ..models.reminder import Reminder
from .formatting import HabitRecord, ReminderRecord, parse_line
from .habits import HabitList
from .reminders import ReminderList

logger = get_logger("storage")


@dataclass(slots=True)
class LoadReport:
    """Summary of one load pass."""

    habits: int = 0
    reminders: int = 0
    skipped: list[tuple[int, str]] = field(default_factory=list)
    foreign: int = 0


def _restore_reminder(record: ReminderRecord, reminders: ReminderList) -> Reminder:
    if record.recurring:
        return reminders.add_reminder_recurring(
            record.name, record.remind_at, record.interval, active=record.flag
        )
    return reminders.add_reminder_one_time(record.name, record.remind_at, fired=record.flag)


class Storage:
    """Reads and writes the plain-text save file.

    Lines with tags this core does not own (tasks, deadlines, events) are kept
    as-is and written back on the next save.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._foreign_lines: list[str] = []

    def load(self, habits: HabitList, reminders: ReminderList) -> LoadReport:
        """Populate the lists from the save file, creating it when missing."""

        report = LoadReport()
        if not self.path.exists():
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch()
            except OSError as exc:
                raise StorageError(f"Error creating save file: {exc}") from exc
            logger.info("Created empty save file", extra={"path": str(self.path)})
            return report

        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise StorageError(f"Error reading save file: {exc}") from exc

        self._foreign_lines = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                record = parse_line(line)
                if record is None:
                    self._foreign_lines.append(line)
                    report.foreign += 1
                elif isinstance(record, HabitRecord):
                    habits.restore_habit(
                        record.name, record.deadline, record.interval, record.streak
                    )
                    report.habits += 1
                else:
                    _restore_reminder(record, reminders)
                    report.reminders += 1
            except (ValueError, CapacityExceededError) as exc:
                logger.warning(
                    "Skipping invalid line %d: %s", number, exc, extra={"path": str(self.path)}
                )
                report.skipped.append((number, str(exc)))

        logger.info(
            "Loaded save file",
            extra={
                "path": str(self.path),
                "habits": report.habits,
                "reminders": report.reminders,
                "skipped": len(report.skipped),
            },
        )
        return report

    def save(self, habits: Iterable[Habit], reminders: Iterable[Reminder]) -> Path:
        """Write every record, replacing the save file atomically."""

        lines = list(self._foreign_lines)
        lines.extend(reminder.to_save_string() for reminder in reminders)
        lines.extend(habit.to_save_string() for habit in habits)

        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent, delete=False, suffix=".tmp"
            ) as fh:
                tmp_path = Path(fh.name)
                for line in lines:
                    fh.write(line + "\n")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Error writing save file: {exc}") from exc

        logger.info("Saved save file", extra={"path": str(self.path), "records": len(lines)})
        return self.path


__all__ = ["LoadReport", "Storage"]

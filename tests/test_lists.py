"""Tests for the habit and reminder list containers."""

from __future__ import annotations

from datetime import timedelta
from threading import Thread

import pytest

from studymate.errors import (
    CapacityExceededError,
    InvalidIndexError,
    InvalidSnoozeError,
    UnsupportedOperationError,
)
from studymate.models import DateTimeArg, StreakResult
from studymate.services import MAX_HABITS, MAX_REMINDERS, HabitList, ReminderList

DAY = timedelta(days=1)


class TestHabitList:
    """Tests for HabitList add/delete/streak operations."""

    def test_add_habit(self, habit_list, clock):
        habit = habit_list.add_habit("Exercise", DAY)

        assert habit_list.count == 1
        assert habit_list.get_habit(0) is habit
        assert habit.deadline.to_datetime() == clock.now() + DAY

    def test_habits_returns_copy(self, habit_list):
        habit_list.add_habit("Exercise", DAY)

        snapshot = habit_list.habits()
        snapshot.clear()

        assert len(habit_list) == 1

    def test_delete_habit_shifts_following(self, habit_list):
        for name in ("A", "B", "C"):
            habit_list.add_habit(name, DAY)

        removed = habit_list.delete_habit(1)

        assert removed.name == "B"
        assert [habit.name for habit in habit_list.habits()] == ["A", "C"]

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_invalid_index(self, habit_list, index):
        habit_list.add_habit("Exercise", DAY)

        with pytest.raises(InvalidIndexError):
            habit_list.delete_habit(index)
        with pytest.raises(IndexError):
            habit_list.inc_streak(index)

        assert habit_list.count == 1

    def test_inc_streak_returns_habit_outcome(self, habit_list, clock):
        habit_list.add_habit("Exercise", DAY)

        assert habit_list.inc_streak(0) is StreakResult.TOO_EARLY

        clock.advance(DAY)
        assert habit_list.inc_streak(0) is StreakResult.ON_TIME
        assert habit_list.get_habit(0).streak == 2

        clock.advance(DAY * 3)
        assert habit_list.inc_streak(0) is StreakResult.TOO_LATE
        assert habit_list.get_habit(0).streak == 1

    def test_capacity(self, clock):
        """The 10,001st habit is rejected and the count stays at 10,000."""
        habit_list = HabitList(clock)
        for number in range(MAX_HABITS):
            habit_list.add_habit(f"habit {number}", DAY)

        with pytest.raises(CapacityExceededError):
            habit_list.add_habit("one too many", DAY)
        with pytest.raises(CapacityExceededError):
            habit_list.restore_habit("one too many", habit_list.get_habit(0).deadline, DAY, 3)

        assert habit_list.count == MAX_HABITS

    def test_capacity_recovers_after_delete(self, clock):
        habit_list = HabitList(clock, capacity=2)
        habit_list.add_habit("A", DAY)
        habit_list.add_habit("B", DAY)

        with pytest.raises(CapacityExceededError) as excinfo:
            habit_list.add_habit("C", DAY)
        assert excinfo.value.capacity == 2

        habit_list.delete_habit(0)
        habit_list.add_habit("C", DAY)
        assert [habit.name for habit in habit_list.habits()] == ["B", "C"]


class TestReminderList:
    """Tests for ReminderList operations."""

    def _populate(self, reminder_list, at):
        for name in ("running", "running 5km", "running 10km", "running 15km"):
            reminder_list.add_reminder_one_time(name, at(hours=1))

    def test_add_one_time(self, reminder_list, at):
        reminder = reminder_list.add_reminder_one_time("running", at(hours=1))

        assert reminder_list.count == 1
        assert reminder_list.get_reminder(0) is reminder
        assert reminder.is_active
        assert not reminder.is_recurring

    def test_add_one_time_already_fired(self, reminder_list, at):
        reminder = reminder_list.add_reminder_one_time("running", at(minutes=-5), fired=True)

        assert not reminder.is_active
        assert reminder_list.due() == []

    def test_add_recurring(self, reminder_list, at):
        reminder = reminder_list.add_reminder_recurring("water", at(hours=1), timedelta(hours=2))

        assert reminder.is_recurring
        assert reminder.interval == timedelta(hours=2)

    def test_add_rejects_blank_time(self, reminder_list, at):
        with pytest.raises(ValueError):
            reminder_list.add_reminder_one_time("running", DateTimeArg(at().date))
        assert reminder_list.count == 0

    def test_delete_single(self, reminder_list, at):
        self._populate(reminder_list, at)

        reminder_list.delete({2})

        names = [reminder.name for reminder in reminder_list.reminders()]
        assert names == ["running", "running 5km", "running 15km"]

    def test_delete_multiple_processes_descending(self, reminder_list, at):
        self._populate(reminder_list, at)

        removed = reminder_list.delete([1, 3])

        assert [reminder.name for reminder in removed] == ["running 15km", "running 5km"]
        names = [reminder.name for reminder in reminder_list.reminders()]
        assert names == ["running", "running 10km"]

    def test_delete_validates_before_mutating(self, reminder_list, at):
        self._populate(reminder_list, at)

        with pytest.raises(InvalidIndexError):
            reminder_list.delete([0, 9])

        assert reminder_list.count == 4

    def test_turn_on_and_off(self, reminder_list, at):
        self._populate(reminder_list, at)

        changed, unchanged = reminder_list.turn_off([0, 1])
        assert {reminder.name for reminder in changed} == {"running", "running 5km"}
        assert unchanged == []

        changed, unchanged = reminder_list.turn_off([1, 2])
        assert [reminder.name for reminder in changed] == ["running 10km"]
        assert [reminder.name for reminder in unchanged] == ["running 5km"]

        changed, unchanged = reminder_list.turn_on([0, 3])
        assert [reminder.name for reminder in changed] == ["running"]
        assert [reminder.name for reminder in unchanged] == ["running 15km"]

    def test_snooze_one_time(self, reminder_list, at):
        reminder = reminder_list.add_reminder_one_time("tea", at(minutes=-5))
        reminder_list.fire_due()

        reminder_list.snooze(0, timedelta(minutes=15))

        assert reminder.remind_at == at(minutes=10)
        assert reminder.is_active

    def test_snooze_recurring_rejected(self, reminder_list, at):
        reminder_list.add_reminder_recurring("water", at(), timedelta(hours=1))

        with pytest.raises(UnsupportedOperationError):
            reminder_list.snooze(0, timedelta(minutes=15))

    def test_snooze_not_far_enough(self, reminder_list, at):
        reminder_list.add_reminder_one_time("tea", at(hours=-2))

        with pytest.raises(InvalidSnoozeError):
            reminder_list.snooze(0, timedelta(minutes=15))

    def test_index_of(self, reminder_list, at):
        self._populate(reminder_list, at)
        third = reminder_list.get_reminder(2)

        assert reminder_list.index_of(third) == 2
        reminder_list.delete([2])
        assert reminder_list.index_of(third) is None

    def test_due_does_not_fire(self, reminder_list, at):
        reminder_list.add_reminder_one_time("past", at(minutes=-5))
        reminder_list.add_reminder_one_time("future", at(minutes=5))

        assert [reminder.name for reminder in reminder_list.due()] == ["past"]
        assert [reminder.name for reminder in reminder_list.due()] == ["past"]

    def test_capacity(self, clock, at):
        reminder_list = ReminderList(clock)
        for number in range(MAX_REMINDERS):
            reminder_list.add_reminder_one_time(f"reminder {number}", at(hours=1))

        with pytest.raises(CapacityExceededError):
            reminder_list.add_reminder_recurring("one too many", at(hours=1), DAY)

        assert reminder_list.count == MAX_REMINDERS

    def test_concurrent_adds_are_all_kept(self, reminder_list, at):
        def add_many(prefix: str) -> None:
            for number in range(200):
                reminder_list.add_reminder_one_time(f"{prefix}{number}", at(hours=1))

        threads = [Thread(target=add_many, args=(prefix,)) for prefix in "abcd"]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert reminder_list.count == 800

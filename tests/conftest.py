"""Pytest configuration and shared fixtures for StudyMate tests.

This module provides a frozen clock, pre-built lists, and test data factories
for exercising the scheduling core without touching the wall clock or the
user's real save file.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from studymate.clock import FixedClock
from studymate.config import TestConfig
from studymate.context import create_app_context
from studymate.models import DateTimeArg
from studymate.services import HabitList, ReminderList

NOON = datetime(2025, 10, 12, 12, 0)


# =============================================================================
# Clock and configuration
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at noon on 2025-10-12."""

    return FixedClock(NOON)


@pytest.fixture
def test_config(tmp_path: Path) -> TestConfig:
    """Configuration rooted in a temporary data directory."""

    return TestConfig(tmp_path / "data")


@pytest.fixture
def app_context(test_config, clock):
    """Application context with empty lists and a fresh save file."""

    return create_app_context(test_config, clock=clock)


@pytest.fixture(autouse=True)
def _reset_studymate_logging():
    """Drop handlers installed by setup_logging so files are released between tests."""

    yield
    for name in ("studymate", "apscheduler"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)


# =============================================================================
# Lists and factories
# =============================================================================


@pytest.fixture
def habit_list(clock) -> HabitList:
    return HabitList(clock)


@pytest.fixture
def reminder_list(clock) -> ReminderList:
    return ReminderList(clock)


@pytest.fixture
def at():
    """Build a DateTimeArg relative to the frozen clock.

    Returns:
        Callable: ``at(minutes=-5)`` gives a DateTimeArg five minutes before noon
    """

    def _at(**offset: float) -> DateTimeArg:
        return DateTimeArg.from_datetime(NOON + timedelta(**offset))

    return _at

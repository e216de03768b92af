"""Substitutable sources of the current local time."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current naive local date-time."""

    def now(self) -> datetime:  # pragma: no cover - interface
        ...


class SystemClock:
    """Wall-clock time of the running process."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock frozen at a settable instant, for deterministic tests."""

    def __init__(self, instant: datetime) -> None:
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward by ``delta`` and return the new instant."""

        self._instant = self._instant + delta
        return self._instant


SYSTEM_CLOCK = SystemClock()

__all__ = ["Clock", "FixedClock", "SystemClock", "SYSTEM_CLOCK"]

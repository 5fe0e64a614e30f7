"""
Injectable time sources.

Every "is this in the past?" decision reads the current instant through a
``Clock`` so tests can pin "now" instead of depending on execution time.
"""

from __future__ import annotations

from typing import Optional, Protocol

import pendulum
from pendulum import Date, DateTime


class Clock(Protocol):
    """Protocol describing the time source needed by the engine."""

    def now(self) -> DateTime:
        """Return the current instant."""

    def today(self) -> Date:
        """Return the current calendar day."""


class SystemClock:
    """
    Wall-clock time in a fixed timezone, or the device's local zone when
    no timezone is configured.
    """

    def __init__(self, timezone: Optional[str] = None) -> None:
        self.timezone = timezone

    def now(self) -> DateTime:
        if self.timezone:
            return pendulum.now(self.timezone)
        return pendulum.now()

    def today(self) -> Date:
        return self.now().date()


class FixedClock:
    """A clock frozen at a given instant. Call ``advance`` to move it."""

    def __init__(self, instant: DateTime) -> None:
        self._instant = instant

    def now(self) -> DateTime:
        return self._instant

    def today(self) -> Date:
        return self._instant.date()

    def advance(self, **delta: int) -> None:
        """Move the clock forward, e.g. ``advance(minutes=30)``."""
        self._instant = self._instant.add(**delta)

"""
Shared fixtures. "Now" is pinned to Monday 2024-11-25 10:15 in Berlin.
"""

import pendulum
import pytest

from bookingslots.domain.clock import FixedClock
from bookingslots.services.availability import AvailabilityEngine

TZ = "Europe/Berlin"


@pytest.fixture
def now():
    return pendulum.datetime(2024, 11, 25, 10, 15, tz=TZ)


@pytest.fixture
def clock(now):
    return FixedClock(now)


@pytest.fixture
def today(clock):
    return clock.today()


@pytest.fixture
def engine(clock):
    return AvailabilityEngine(clock)

"""
Time-unit helpers shared by the availability engine.

Slots are plain ``"HH:mm"`` strings; everything else works in minutes from
midnight so that interval tests stay integer comparisons.
"""

from datetime import date as std_date
from typing import Tuple

import pendulum
from pendulum import Date

MINUTES_PER_DAY = 24 * 60

# Index matches ``isoweekday() % 7`` (Sunday first)
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

SHORT_WEEKDAY_NAMES: Tuple[str, ...] = tuple(name[:3] for name in WEEKDAY_NAMES)


def parse_hhmm(value: str) -> Tuple[int, int]:
    """
    Split an ``"HH:mm"`` string into hours and minutes.

    Raises:
        ValueError: If the string is not a valid 24-hour time of day
    """
    parts = value.strip().split(":")
    if len(parts) < 2 or not all(part.isdigit() for part in parts[:2]):
        raise ValueError(f"Invalid time of day: '{value}' (expected HH:mm)")

    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Time of day out of range: '{value}'")
    return hours, minutes


def slot_to_minutes(slot: str) -> int:
    """Convert an ``"HH:mm"`` slot to its minute of the day."""
    hours, minutes = parse_hhmm(slot)
    return hours * 60 + minutes


def minutes_to_slot(minute_of_day: int) -> str:
    """Convert a minute of the day back to an ``"HH:mm"`` slot string."""
    if not 0 <= minute_of_day < MINUTES_PER_DAY:
        raise ValueError(f"Minute of day must be in [0, {MINUTES_PER_DAY}), got {minute_of_day}")
    return f"{minute_of_day // 60:02d}:{minute_of_day % 60:02d}"


def to_12_hour(slot: str) -> str:
    """
    Format a 24-hour slot for display, e.g. ``"13:30"`` -> ``"1:30 PM"``.
    """
    hours, minutes = parse_hhmm(slot)
    hour12 = hours % 12 or 12
    suffix = "AM" if hours < 12 else "PM"
    return f"{hour12}:{minutes:02d} {suffix}"


def build_slot_grid(first_slot: str, last_slot: str, interval_minutes: int) -> Tuple[str, ...]:
    """
    Build an ascending grid of slot strings, both bounds inclusive.
    """
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be greater than zero")

    start = slot_to_minutes(first_slot)
    end = slot_to_minutes(last_slot)
    if end < start:
        raise ValueError(f"last_slot {last_slot} is before first_slot {first_slot}")

    return tuple(
        minutes_to_slot(minute)
        for minute in range(start, end + 1, interval_minutes)
    )


# 08:00 through 22:00 every 30 minutes (29 slots)
SLOT_GRID: Tuple[str, ...] = build_slot_grid("08:00", "22:00", 30)


def to_date(value: std_date) -> Date:
    """
    Reduce a date or datetime to its calendar day as a pendulum ``Date``.

    The time component (and any timezone) is dropped, the wall-clock day is kept.
    """
    return pendulum.date(value.year, value.month, value.day)


def weekday_name(value: std_date) -> str:
    """Full English weekday name used as the key of a weekly schedule."""
    return WEEKDAY_NAMES[value.isoweekday() % 7]


def short_weekday_name(value: std_date) -> str:
    return SHORT_WEEKDAY_NAMES[value.isoweekday() % 7]

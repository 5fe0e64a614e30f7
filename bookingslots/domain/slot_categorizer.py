"""
Part-of-day buckets for available slots and the "already past" check.
"""

from datetime import date as std_date
from typing import Dict, List, Sequence

from .clock import Clock
from .models import Category, CategorizedSlots
from .time_utils import parse_hhmm, to_date

MORNING_START_HOUR = 6
EVENING_START_HOUR = 12
NIGHT_START_HOUR = 18


def slot_hour_category(slot: str) -> Category:
    """
    Category of a slot by its hour alone.

    06:00-11:59 is morning, 12:00-17:59 evening. Everything else, including
    the small hours before 06:00, is night.
    """
    hours, _ = parse_hhmm(slot)
    if MORNING_START_HOUR <= hours < EVENING_START_HOUR:
        return Category.MORNING
    if EVENING_START_HOUR <= hours < NIGHT_START_HOUR:
        return Category.EVENING
    return Category.NIGHT


def categorize(slots: Sequence[str]) -> CategorizedSlots:
    """Split slots into morning, evening and night, keeping their order."""
    buckets: Dict[Category, List[str]] = {category: [] for category in Category}

    for slot in slots:
        buckets[slot_hour_category(slot)].append(slot)

    return CategorizedSlots(
        morning=tuple(buckets[Category.MORNING]),
        evening=tuple(buckets[Category.EVENING]),
        night=tuple(buckets[Category.NIGHT]),
    )


def ordered_all_slots(categorized: CategorizedSlots) -> List[str]:
    """All slots in display order: morning, then evening, then night."""
    return [*categorized.morning, *categorized.evening, *categorized.night]


def category_start_index(categorized: CategorizedSlots, category: Category) -> int:
    """Index of the first slot of a category within ``ordered_all_slots``."""
    if category is Category.MORNING:
        return 0
    if category is Category.EVENING:
        return len(categorized.morning)
    return len(categorized.morning) + len(categorized.evening)


def slot_category(categorized: CategorizedSlots, slot: str) -> Category:
    """Category of a slot by bucket membership; unknown slots count as night."""
    if slot in categorized.morning:
        return Category.MORNING
    if slot in categorized.evening:
        return Category.EVENING
    return Category.NIGHT


def category_at_index(categorized: CategorizedSlots, index: int) -> Category:
    """
    Category of the slot at a position of the unified slot list.

    The index is clamped into range, so a scroll position past either end
    maps to the first or last slot. An empty list is treated as morning.
    """
    all_slots = ordered_all_slots(categorized)
    if not all_slots:
        return Category.MORNING

    clamped = max(0, min(index, len(all_slots) - 1))
    return slot_category(categorized, all_slots[clamped])


class PastFilter:
    """
    Marks slots that have already started today as disabled.

    Nothing is cached: every call reads the clock, so slots become disabled
    as time passes.
    """

    def __init__(self, clock: Clock):
        self.clock = clock

    def is_slot_past(self, slot: str, selected_date: std_date) -> bool:
        """Check if a slot on the selected date starts before now."""
        if to_date(selected_date) != self.clock.today():
            return False

        hours, minutes = parse_hhmm(slot)
        now = self.clock.now()
        slot_time = now.set(hour=hours, minute=minutes, second=0, microsecond=0)
        return slot_time < now

    def is_date_past(self, value: std_date) -> bool:
        return to_date(value) < self.clock.today()

"""
Domain layer - Pure availability logic without external dependencies.
"""

from .clock import Clock, FixedClock, SystemClock
from .hours_resolver import ANYONE, HoursResolver, resolve_day_hours
from .models import (
    Break,
    BusinessProfile,
    CategorizedSlots,
    Category,
    DaySchedule,
    StaffMember,
    WeeklySchedule,
)
from .slot_categorizer import PastFilter, categorize, ordered_all_slots
from .slot_filter import SlotFilter
from .time_utils import SLOT_GRID
from .week_calendar import WeekCalendar

__all__ = [
    "ANYONE",
    "SLOT_GRID",
    "Break",
    "BusinessProfile",
    "CategorizedSlots",
    "Category",
    "Clock",
    "DaySchedule",
    "FixedClock",
    "HoursResolver",
    "PastFilter",
    "SlotFilter",
    "StaffMember",
    "SystemClock",
    "WeekCalendar",
    "WeeklySchedule",
    "categorize",
    "ordered_all_slots",
    "resolve_day_hours",
]

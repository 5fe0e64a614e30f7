"""
Domain models for weekly opening hours and slot categories.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .time_utils import MINUTES_PER_DAY, WEEKDAY_NAMES, minutes_to_slot


class Category(str, Enum):
    """Part of the day a slot is listed under."""
    MORNING = "morning"
    EVENING = "evening"
    NIGHT = "night"


@dataclass(frozen=True)
class Break:
    """
    A pause inside opening hours, in minutes from midnight.

    The interval is half-open: ``end_minute`` itself is bookable again.
    """
    start_minute: int
    end_minute: int

    def contains(self, minute: int) -> bool:
        """Check if a minute of the day falls inside the break."""
        return self.start_minute <= minute < self.end_minute

    def __str__(self) -> str:
        return f"{_format_minute(self.start_minute)} - {_format_minute(self.end_minute)}"


@dataclass(frozen=True)
class DaySchedule:
    """
    Operating hours for one weekday.

    Invariant (only checked for open days): the day opens before it closes
    and every break lies within the opening hours.
    """
    is_open: bool
    open_minute: int = 0
    close_minute: int = 0
    breaks: Tuple[Break, ...] = ()

    def __post_init__(self):
        # Accept any iterable of breaks but store an immutable tuple
        object.__setattr__(self, "breaks", tuple(self.breaks))

        if not self.is_open:
            return

        if not 0 <= self.open_minute < self.close_minute <= MINUTES_PER_DAY:
            raise ValueError(
                f"Opening time {_format_minute(self.open_minute)} must be before "
                f"closing time {_format_minute(self.close_minute)}"
            )

        for pause in self.breaks:
            if not self.open_minute <= pause.start_minute < pause.end_minute <= self.close_minute:
                raise ValueError(
                    f"Break {pause} must be a non-empty interval within opening hours "
                    f"{_format_minute(self.open_minute)} - {_format_minute(self.close_minute)}"
                )

    @classmethod
    def closed(cls) -> "DaySchedule":
        return cls(is_open=False)

    def is_within_hours(self, minute: int) -> bool:
        """Check if a minute of the day is inside opening hours and outside every break."""
        if not self.open_minute <= minute < self.close_minute:
            return False
        return not any(pause.contains(minute) for pause in self.breaks)


@dataclass(frozen=True)
class WeeklySchedule:
    """
    Opening hours keyed by full English weekday name ("Sunday".."Saturday").

    A weekday may be missing entirely, which is different from being closed.
    """
    days: Mapping[str, DaySchedule] = field(default_factory=dict)

    def __post_init__(self):
        unknown = [name for name in self.days if name not in WEEKDAY_NAMES]
        if unknown:
            raise ValueError(f"Unknown weekday name(s): {', '.join(sorted(unknown))}")
        object.__setattr__(self, "days", MappingProxyType(dict(self.days)))

    def day(self, name: str) -> Optional[DaySchedule]:
        """Get the schedule for a weekday, or None if the day is not listed."""
        return self.days.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.days

    def __len__(self) -> int:
        return len(self.days)


@dataclass(frozen=True)
class CategorizedSlots:
    """Available slots split into the three part-of-day buckets."""
    morning: Tuple[str, ...] = ()
    evening: Tuple[str, ...] = ()
    night: Tuple[str, ...] = ()

    def bucket(self, category: Category) -> Tuple[str, ...]:
        return getattr(self, category.value)

    def is_empty(self) -> bool:
        return not (self.morning or self.evening or self.night)


@dataclass
class StaffMember:
    """
    A bookable staff member. ``working_hours`` is None when the staff
    member has not set up a schedule.
    """
    id: str
    name: str
    working_hours: Optional[WeeklySchedule] = None


@dataclass
class BusinessProfile:
    """The schedules a booking screen works with."""
    business_id: int
    name: str = ""
    business_hours: Optional[WeeklySchedule] = None
    staff: List[StaffMember] = field(default_factory=list)

    def find_staff(self, staff_id: str) -> Optional[StaffMember]:
        """Find a staff member by id."""
        for member in self.staff:
            if member.id == str(staff_id):
                return member
        return None


def _format_minute(minute: int) -> str:
    # 24:00 is a valid closing time but not a valid slot
    if minute == MINUTES_PER_DAY:
        return "24:00"
    if 0 <= minute < MINUTES_PER_DAY:
        return minutes_to_slot(minute)
    return str(minute)

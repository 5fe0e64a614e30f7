"""
Application service tying the availability components together.

The booking screens only talk to ``AvailabilityEngine``; it delegates to the
domain-level resolver, filter and categorizer and adds the one piece of
orchestration that spans them: picking the first bookable date.
"""

from __future__ import annotations

import logging
from datetime import date as std_date
from typing import TYPE_CHECKING, List, Optional, Sequence

from pendulum import Date

from ..domain.clock import Clock, SystemClock
from ..domain.hours_resolver import HoursResolver
from ..domain.models import CategorizedSlots, WeeklySchedule
from ..domain.slot_categorizer import PastFilter, categorize
from ..domain.slot_filter import SlotFilter
from ..domain.time_utils import SLOT_GRID, to_date
from ..domain.week_calendar import WeekCalendar

if TYPE_CHECKING:
    from ..config import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 30


class AvailabilityEngine:
    """
    Single entry point for slot availability.

    All methods are pure reads over the schedules passed in; the only
    ambient input is the injected clock.
    """

    def __init__(
        self,
        clock: Clock,
        *,
        grid: Sequence[str] = SLOT_GRID,
        week_starts_on: str = "sunday",
        locale: str = "en",
        horizon_days: int = DEFAULT_HORIZON_DAYS,
    ) -> None:
        if horizon_days < 0:
            raise ValueError("horizon_days must not be negative")

        self.clock = clock
        self.horizon_days = horizon_days
        self.calendar = WeekCalendar(clock, week_starts_on=week_starts_on, locale=locale)
        self.hours_resolver = HoursResolver(clock)
        self.slot_filter = SlotFilter(grid)
        self.past_filter = PastFilter(clock)

    @classmethod
    def from_config(cls, config: "AppConfig", clock: Optional[Clock] = None) -> "AvailabilityEngine":
        """Build an engine from application configuration."""
        return cls(
            clock or SystemClock(config.timezone),
            grid=config.slots.build_grid(),
            week_starts_on=config.week_starts_on,
            locale=config.locale,
            horizon_days=config.auto_select_horizon_days,
        )

    def available_slots(
        self,
        value: std_date,
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule],
    ) -> List[str]:
        """Slots of the grid bookable on a date, in ascending order."""
        return self.slot_filter.available_slots(
            value,
            staff_id,
            staff_schedule,
            business_schedule,
        )

    def categorized_slots(
        self,
        value: std_date,
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule],
    ) -> CategorizedSlots:
        """Available slots split into morning, evening and night."""
        return categorize(
            self.available_slots(value, staff_id, staff_schedule, business_schedule)
        )

    def is_date_bookable(
        self,
        value: std_date,
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule],
    ) -> bool:
        return self.hours_resolver.is_date_bookable(
            value,
            staff_id,
            staff_schedule,
            business_schedule,
        )

    def is_slot_past(self, slot: str, selected_date: std_date) -> bool:
        return self.past_filter.is_slot_past(slot, selected_date)

    def first_bookable_date(
        self,
        *,
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule],
    ) -> Optional[Date]:
        """
        Scan today and the following ``horizon_days`` days for a bookable date.

        Returns None if nothing in the horizon is bookable.
        """
        today = self.clock.today()

        for offset in range(self.horizon_days + 1):
            candidate = today.add(days=offset)
            if self.is_date_bookable(candidate, staff_id, staff_schedule, business_schedule):
                return candidate

        logger.debug(
            "No bookable date within %d days of %s for staff %s",
            self.horizon_days,
            today,
            staff_id,
        )
        return None

    def auto_select_date(
        self,
        *,
        current: std_date,
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule],
    ) -> Date:
        """
        Decide which date should be selected after the schedules or staff change.

        Keeps ``current`` when it is today and bookable, otherwise moves to the
        first bookable date from today on. When the business hours are not
        loaded yet, or nothing is bookable within the horizon, ``current`` is
        returned unchanged.
        """
        current_day = to_date(current)

        if business_schedule is None:
            return current_day

        today = self.clock.today()
        if current_day == today and self.is_date_bookable(
            today, staff_id, staff_schedule, business_schedule
        ):
            return current_day

        first = self.first_bookable_date(
            staff_id=staff_id,
            staff_schedule=staff_schedule,
            business_schedule=business_schedule,
        )
        if first is None:
            return current_day

        if first != current_day:
            logger.debug("Auto-selected %s (was %s)", first, current_day)
        return first

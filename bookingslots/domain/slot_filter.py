"""
Filtering of the fixed slot grid down to the bookable slots of a day.

Pure domain logic: no clock, no I/O. Whether a slot is already in the past
is decided separately by the categorizer.
"""

import logging
from datetime import date as std_date
from typing import List, Optional, Sequence

from .hours_resolver import ANYONE, resolve_day_hours
from .models import WeeklySchedule
from .time_utils import SLOT_GRID, slot_to_minutes

logger = logging.getLogger(__name__)


class SlotFilter:
    """
    Produces the slots of the grid that fall inside opening hours.

    Algorithm:
    1. Pick the authoritative schedule (staff when a staff member is chosen,
       business otherwise)
    2. Resolve that schedule for the weekday of the date
    3. Keep each grid slot with ``open <= slot < close`` that is in no break
    """

    def __init__(self, grid: Sequence[str] = SLOT_GRID):
        self.grid = tuple(grid)

    def available_slots(
        self,
        value: std_date,
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule]
    ) -> List[str]:
        """
        Find the bookable slots on a date.

        Args:
            value: The selected calendar date
            staff_id: A staff id, or ``"anyone"``
            staff_schedule: Working hours of the chosen staff member
            business_schedule: Opening hours of the business

        Returns:
            Subsequence of the grid, in grid order
        """
        schedule = self._authoritative_schedule(staff_id, staff_schedule, business_schedule)
        if schedule is None:
            return []

        day = resolve_day_hours(schedule, value)
        if day is None or not day.is_open:
            return []

        return [
            slot for slot in self.grid
            if day.is_within_hours(slot_to_minutes(slot))
        ]

    @staticmethod
    def _authoritative_schedule(
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule]
    ) -> Optional[WeeklySchedule]:
        """
        Staff hours are mandatory once a staff member is chosen: a staff member
        without hours has no slots, even if the business is open.
        """
        if staff_id != ANYONE:
            if staff_schedule is None:
                logger.debug("Staff %s has no working hours, no slots available", staff_id)
            return staff_schedule
        return business_schedule

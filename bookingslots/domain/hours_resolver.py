"""
Resolution of weekly schedules to the hours of a single calendar day.
"""

import logging
from datetime import date as std_date
from typing import Optional

from .clock import Clock
from .models import DaySchedule, WeeklySchedule
from .time_utils import to_date, weekday_name

logger = logging.getLogger(__name__)

# Sentinel staff id meaning "no preference, any staff member"
ANYONE = "anyone"


def resolve_day_hours(
    schedule: Optional[WeeklySchedule],
    value: std_date
) -> Optional[DaySchedule]:
    """
    Get the hours that apply on a given date.

    Returns None when there is no schedule or the weekday is not listed.
    The day is returned as stored; business and staff hours are never merged.
    """
    if schedule is None:
        return None
    return schedule.day(weekday_name(value))


class HoursResolver:
    """
    Decides which calendar days can be picked in the date strip.
    """

    def __init__(self, clock: Clock):
        self.clock = clock

    def is_date_bookable(
        self,
        value: std_date,
        staff_id: str,
        staff_schedule: Optional[WeeklySchedule],
        business_schedule: Optional[WeeklySchedule]
    ) -> bool:
        """
        Check if a date can be selected.

        Past days are never bookable. Otherwise a day is bookable unless a
        schedule explicitly marks it closed: the staff member's schedule is
        checked first (when a specific staff member is chosen), then the
        business schedule. A missing day or a missing schedule does not close
        the date.
        """
        day = to_date(value)
        if day < self.clock.today():
            return False

        if staff_id != ANYONE:
            staff_day = resolve_day_hours(staff_schedule, day)
            if staff_day is not None and not staff_day.is_open:
                logger.debug("%s closed for staff %s", day, staff_id)
                return False

        business_day = resolve_day_hours(business_schedule, day)
        if business_day is not None and not business_day.is_open:
            logger.debug("%s closed for business", day)
            return False

        return True

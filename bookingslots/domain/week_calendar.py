"""
Seven-day week windows for the date picker.
"""

from datetime import date as std_date
from typing import List, Sequence

from pendulum import Date

from .clock import Clock
from .time_utils import short_weekday_name, to_date

# isoweekday() of the first day of the week
WEEK_STARTS = {
    "sunday": 7,
    "monday": 1,
}


class WeekCalendar:
    """
    Computes the week strip shown above the slot picker.

    Weeks start on Sunday unless configured otherwise, and every method
    uses that convention consistently.
    """

    def __init__(self, clock: Clock, week_starts_on: str = "sunday", locale: str = "en"):
        if week_starts_on not in WEEK_STARTS:
            raise ValueError(
                f"week_starts_on must be one of {sorted(WEEK_STARTS)}, got '{week_starts_on}'"
            )
        self.clock = clock
        self.week_starts_on = week_starts_on
        self.locale = locale

    def week_days_containing(self, value: std_date) -> List[Date]:
        """Return the 7 consecutive dates of the week containing ``value``, ascending."""
        day = to_date(value)
        offset = (day.isoweekday() - WEEK_STARTS[self.week_starts_on]) % 7
        first = day.subtract(days=offset)
        return [first.add(days=i) for i in range(7)]

    def current_week(self) -> List[Date]:
        return self.week_days_containing(self.clock.today())

    def format_week_range(self, week: Sequence[std_date]) -> str:
        """
        Render a week as ``"Oct 18 - Oct 24, 2026"``.

        Returns an empty string for an empty week.
        """
        if not week:
            return ""
        first = to_date(week[0])
        last = to_date(week[-1])
        return f"{first.format('MMM D', locale=self.locale)} - {last.format('MMM D, YYYY', locale=self.locale)}"

    def shift_week(self, week: Sequence[std_date], delta_weeks: int) -> List[Date]:
        """
        Move the week window by ``delta_weeks``.

        Moving backwards never shows a week that starts before today: in that
        case the current week is returned instead.
        """
        anchor = to_date(week[0]) if week else self.clock.today()
        shifted = self.week_days_containing(anchor.add(weeks=delta_weeks))

        if delta_weeks < 0 and shifted[0] < self.clock.today():
            return self.current_week()
        return shifted

    def day_label(self, value: std_date) -> str:
        """Short label for the week strip, e.g. ``"Sun 18"``."""
        day = to_date(value)
        return f"{short_weekday_name(day)} {day.day}"

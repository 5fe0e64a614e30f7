"""
Tests for domain models.
"""

import pytest

from bookingslots.domain.models import (
    Break,
    BusinessProfile,
    CategorizedSlots,
    Category,
    DaySchedule,
    StaffMember,
    WeeklySchedule,
)

from schedules import open_day


class TestBreak:
    """Tests for Break model."""

    def test_contains_is_half_open(self):
        """Test that a break covers its start but not its end."""
        pause = Break(start_minute=720, end_minute=780)  # 12:00-13:00

        assert pause.contains(720)
        assert pause.contains(750)
        assert not pause.contains(780)
        assert not pause.contains(719)

    def test_str(self):
        """Test the string form of a break."""
        assert str(Break(720, 780)) == "12:00 - 13:00"


class TestDaySchedule:
    """Tests for DaySchedule model."""

    def test_create_open_day(self):
        """Test creating a valid open day."""
        day = open_day("09:00", "17:00", ("12:00", "13:00"))

        assert day.is_open
        assert day.open_minute == 540
        assert day.close_minute == 1020
        assert day.breaks == (Break(720, 780),)

    def test_breaks_stored_as_tuple(self):
        """Test that breaks are stored as a tuple."""
        day = DaySchedule(is_open=True, open_minute=540, close_minute=1020, breaks=[Break(600, 630)])
        assert isinstance(day.breaks, tuple)

    def test_inverted_hours_raise_error(self):
        """Test that an open day closing before it opens is rejected."""
        with pytest.raises(ValueError, match="Opening time 17:00 must be before closing time 09:00"):
            DaySchedule(is_open=True, open_minute=1020, close_minute=540)

    def test_empty_hours_raise_error(self):
        """Test that empty opening hours raise an error."""
        with pytest.raises(ValueError, match="must be before"):
            DaySchedule(is_open=True, open_minute=540, close_minute=540)

    def test_break_outside_hours_raises_error(self):
        """Test that a break outside opening hours raises an error."""
        with pytest.raises(ValueError, match="within opening hours"):
            open_day("09:00", "17:00", ("16:30", "17:30"))

    def test_empty_break_raises_error(self):
        """Test that an empty break raises an error."""
        with pytest.raises(ValueError, match="non-empty"):
            DaySchedule(is_open=True, open_minute=540, close_minute=1020, breaks=(Break(600, 600),))

    def test_closed_day_is_not_validated(self):
        """Closed days come with zeroed times from the API."""
        day = DaySchedule(is_open=False, open_minute=0, close_minute=0, breaks=(Break(0, 0),))
        assert not day.is_open

    def test_close_at_midnight(self):
        """Test a day that closes at midnight."""
        day = DaySchedule(is_open=True, open_minute=1200, close_minute=1440)
        assert day.is_within_hours(1410)

    def test_is_within_hours(self):
        """Test checking minutes against opening hours."""
        day = open_day("09:00", "17:00", ("12:00", "13:00"))

        assert day.is_within_hours(540)      # opening is inclusive
        assert not day.is_within_hours(1020)  # closing is exclusive
        assert not day.is_within_hours(720)
        assert day.is_within_hours(780)


class TestWeeklySchedule:
    """Tests for WeeklySchedule model."""

    def test_day_lookup(self):
        """Test looking up a weekday."""
        monday = open_day("09:00", "17:00")
        schedule = WeeklySchedule(days={"Monday": monday})

        assert schedule.day("Monday") is monday
        assert schedule.day("Tuesday") is None
        assert "Monday" in schedule
        assert len(schedule) == 1

    def test_unknown_weekday_raises_error(self):
        """Test that an unknown weekday name raises an error."""
        with pytest.raises(ValueError, match="Unknown weekday name"):
            WeeklySchedule(days={"monday": open_day("09:00", "17:00")})

    def test_days_are_read_only(self):
        """Test that the days mapping cannot be changed."""
        schedule = WeeklySchedule(days={"Monday": open_day("09:00", "17:00")})
        with pytest.raises(TypeError):
            schedule.days["Tuesday"] = DaySchedule.closed()

    def test_source_dict_is_copied(self):
        """Test that later changes to the source dict are not seen."""
        source = {"Monday": open_day("09:00", "17:00")}
        schedule = WeeklySchedule(days=source)
        source["Tuesday"] = DaySchedule.closed()

        assert "Tuesday" not in schedule


class TestCategorizedSlots:
    """Tests for CategorizedSlots model."""

    def test_bucket(self):
        """Test reading a category bucket."""
        slots = CategorizedSlots(morning=("09:00",), evening=("13:00",), night=())

        assert slots.bucket(Category.MORNING) == ("09:00",)
        assert slots.bucket(Category.EVENING) == ("13:00",)
        assert slots.bucket(Category.NIGHT) == ()
        assert not slots.is_empty()

    def test_empty(self):
        """Test detecting empty categorized slots."""
        assert CategorizedSlots().is_empty()


class TestBusinessProfile:
    """Tests for BusinessProfile model."""

    def test_find_staff(self):
        """Test finding a staff member by id."""
        member = StaffMember(id="7", name="Amira")
        business = BusinessProfile(business_id=1, staff=[member])

        assert business.find_staff("7") is member
        assert business.find_staff(7) is member
        assert business.find_staff("8") is None

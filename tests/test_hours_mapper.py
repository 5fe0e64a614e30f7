"""
Tests for mapping API payloads onto schedules.
"""

import json
import logging

import pytest

from bookingslots.adapters.business_source import JsonBusinessSource
from bookingslots.adapters.hours_mapper import (
    normalize_day_name,
    parse_business_hours,
    parse_business_profile,
    parse_staff_list,
    parse_time_to_minutes,
)
from bookingslots.domain.exceptions import ScheduleDataError
from bookingslots.domain.hours_resolver import ANYONE
from bookingslots.domain.models import Break


def _row(day, opening="09:00", closing="17:00", closed=False, breaks=()):
    return {
        "day": day,
        "closed": closed,
        "opening_time": opening,
        "closing_time": closing,
        "break_hours": [{"start": start, "end": end} for start, end in breaks],
    }


class TestParseTime:
    """Tests for parse_time_to_minutes."""

    def test_valid_times(self):
        """Test parsing valid times of day."""
        assert parse_time_to_minutes("09:30") == 570
        assert parse_time_to_minutes("17:00:00") == 1020
        assert parse_time_to_minutes("9") == 540
        assert parse_time_to_minutes("24:00") == 1440

    def test_missing_time_is_midnight(self):
        """Test that a missing time counts as midnight."""
        assert parse_time_to_minutes(None) == 0
        assert parse_time_to_minutes("") == 0

    @pytest.mark.parametrize("value", ["ab:cd", "25:00", "24:30", "10:75", 930])
    def test_invalid_times(self, value):
        """Test that malformed times raise an error."""
        with pytest.raises(ScheduleDataError):
            parse_time_to_minutes(value)

    def test_day_names(self):
        """Test normalizing weekday names."""
        assert normalize_day_name("monday") == "Monday"
        assert normalize_day_name(" SUNDAY ") == "Sunday"
        assert normalize_day_name("funday") is None
        assert normalize_day_name(None) is None


class TestParseBusinessHours:
    """Tests for parse_business_hours."""

    def test_no_hours(self):
        """Test that no hours rows give no schedule."""
        assert parse_business_hours(None) is None
        assert parse_business_hours([]) is None

    def test_unlisted_days_are_closed(self):
        """Test that days without a row are closed."""
        schedule = parse_business_hours([_row("monday", breaks=[("12:00", "13:00")])])

        assert len(schedule) == 7
        monday = schedule.day("Monday")
        assert monday.is_open
        assert (monday.open_minute, monday.close_minute) == (540, 1020)
        assert monday.breaks == (Break(720, 780),)
        assert not schedule.day("Tuesday").is_open

    def test_closed_flag(self):
        """Test that the closed flag closes a day."""
        schedule = parse_business_hours([_row("Sunday", opening=None, closing=None, closed=True)])
        assert not schedule.day("Sunday").is_open

    def test_break_without_bounds_is_skipped(self, caplog):
        """Test that a break row with null bounds does not reject an open day."""
        with caplog.at_level(logging.WARNING, logger="bookingslots.adapters.hours_mapper"):
            schedule = parse_business_hours([
                _row("monday", breaks=[(None, None), ("12:00", "13:00")]),
            ])

        monday = schedule.day("Monday")
        assert monday.is_open
        assert monday.breaks == (Break(720, 780),)
        assert "missing bound" in caplog.text

    def test_zero_length_break_is_skipped(self):
        """Test that zeroed breaks, as sent for closed days, are dropped."""
        schedule = parse_business_hours([
            _row("monday", breaks=[("00:00", "00:00")]),
            {"day": "saturday", "closed": True, "break_hours": [{"start": None}]},
        ])

        assert schedule.day("Monday").breaks == ()
        assert schedule.day("Saturday").breaks == ()

    def test_unknown_day_is_skipped(self, caplog):
        """Test that rows with an unknown day are skipped."""
        with caplog.at_level(logging.WARNING, logger="bookingslots.adapters.hours_mapper"):
            schedule = parse_business_hours([_row("funday"), _row("friday")])

        assert schedule.day("Friday").is_open
        assert "funday" in caplog.text

    def test_inverted_hours_raise(self):
        """Test that closing before opening raises an error."""
        with pytest.raises(ScheduleDataError, match="Invalid hours for Monday"):
            parse_business_hours([_row("monday", opening="18:00", closing="09:00")])

    def test_break_outside_hours_raises(self):
        """Test that a break outside opening hours raises an error."""
        with pytest.raises(ScheduleDataError, match="Invalid hours for Tuesday"):
            parse_business_hours([_row("tuesday", breaks=[("08:00", "10:00")])])

    def test_malformed_time_raises(self):
        """Test that a malformed opening time raises an error."""
        with pytest.raises(ScheduleDataError, match="Invalid time of day"):
            parse_business_hours([_row("monday", opening="nine")])


class TestParseBusinessProfile:
    """Tests for business and staff mapping."""

    def test_staff_filtered_by_invitation(self):
        """Test that only staff who accepted their invitation are kept."""
        staff = parse_staff_list([
            {"id": 7, "name": "Amira", "invitation_status": "accepted", "working_hours": None},
            {"id": 8, "name": "Lea", "invitation_status": "pending", "working_hours": None},
            {"id": 9, "name": "Jonas", "working_hours": None},
        ])

        assert [member.id for member in staff] == ["7"]

    def test_staff_defaults(self):
        """Test the fallback staff id and name."""
        staff = parse_staff_list([{"user_id": 15, "invitation_status": "accepted", "working_hours": []}])

        assert staff[0].id == "15"
        assert staff[0].name == "Staff Member"
        assert staff[0].working_hours is None

    def test_profile(self):
        """Test mapping a business details payload."""
        profile = parse_business_profile({
            "business": {
                "id": "42",
                "business_name": "Lotus",
                "hours": [_row("monday")],
                "staff": [{"id": 7, "name": "Amira", "invitation_status": "accepted", "working_hours": [_row("tuesday")]}],
            }
        })

        assert profile.business_id == 42
        assert profile.name == "Lotus"
        assert profile.business_hours.day("Monday").is_open
        assert profile.find_staff("7").working_hours.day("Tuesday").is_open

    def test_hours_drive_availability(self, engine, today):
        """Test that hours sent under "hours" open days for anyone."""
        profile = parse_business_profile({
            "business": {"id": 1, "hours": [_row("monday"), _row("tuesday")]},
        })

        assert profile.business_hours is not None
        assert engine.available_slots(today, ANYONE, None, profile.business_hours)[0] == "09:00"
        assert engine.auto_select_date(
            current=today.add(days=3),
            staff_id=ANYONE,
            staff_schedule=None,
            business_schedule=profile.business_hours,
        ) == today

    def test_legacy_business_hours_key(self):
        """Test reading hours from the older business_hours key."""
        profile = parse_business_profile({"id": 1, "business_hours": [_row("friday")]})

        assert profile.business_hours.day("Friday").is_open

    def test_invalid_business_id(self):
        """Test that a non-numeric business id raises an error."""
        with pytest.raises(ScheduleDataError, match="Invalid business id"):
            parse_business_profile({"id": "abc"})


class TestJsonBusinessSource:
    """Tests for loading a business from a JSON file."""

    def test_load_api_envelope(self, tmp_path):
        """Test loading a business wrapped in the API envelope."""
        path = tmp_path / "business.json"
        path.write_text(json.dumps({
            "success": True,
            "data": {"business": {"id": 5, "hours": [_row("monday")], "staff": []}},
        }), encoding="utf-8")

        profile = JsonBusinessSource(path).load()

        assert profile.business_id == 5
        assert profile.business_hours.day("Monday").is_open

    def test_load_bare_business(self, tmp_path):
        """Test loading a bare business object."""
        path = tmp_path / "business.json"
        path.write_text(json.dumps({"id": 5, "business_hours": None}), encoding="utf-8")

        profile = JsonBusinessSource(path).load()

        assert profile.business_hours is None
        assert profile.staff == []

    def test_missing_file(self, tmp_path):
        """Test loading a file that does not exist."""
        with pytest.raises(FileNotFoundError):
            JsonBusinessSource(tmp_path / "missing.json").load()

    def test_invalid_json(self, tmp_path):
        """Test loading malformed JSON."""
        path = tmp_path / "business.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ScheduleDataError, match="Invalid JSON"):
            JsonBusinessSource(path).load()

    def test_non_object_root(self, tmp_path):
        """Test loading JSON whose root is not an object."""
        path = tmp_path / "business.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ScheduleDataError, match="object at the root"):
            JsonBusinessSource(path).load()

"""
Mapping of the booking API's hours payload onto domain schedules.

The API sends one row per weekday::

    {"day": "monday", "closed": false,
     "opening_time": "09:00", "closing_time": "17:00",
     "break_hours": [{"start": "12:00", "end": "13:00"}]}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..domain.exceptions import ScheduleDataError
from ..domain.models import Break, BusinessProfile, DaySchedule, StaffMember, WeeklySchedule
from ..domain.time_utils import WEEKDAY_NAMES

logger = logging.getLogger(__name__)

_DAY_LOOKUP = {name.lower(): name for name in WEEKDAY_NAMES}


def parse_time_to_minutes(value: Optional[str]) -> int:
    """
    Convert an ``"HH:mm"`` (or ``"HH:mm:ss"``) string to minutes from midnight.

    Missing or empty values count as midnight.

    Raises:
        ScheduleDataError: If the value is not a time of day
    """
    if not value:
        return 0
    if not isinstance(value, str):
        raise ScheduleDataError(f"Time must be a string, got {value!r}")

    parts = value.strip().split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    except ValueError as exc:
        raise ScheduleDataError(f"Invalid time of day: '{value}'") from exc

    # 24:00 is accepted as end of day
    if not (0 <= hours <= 24 and 0 <= minutes <= 59) or (hours == 24 and minutes):
        raise ScheduleDataError(f"Time of day out of range: '{value}'")
    return hours * 60 + minutes


def normalize_day_name(value: Optional[str]) -> Optional[str]:
    """Map ``"monday"``, ``"MONDAY"`` etc. to ``"Monday"``; None if unknown."""
    if not value:
        return None
    return _DAY_LOOKUP.get(value.strip().lower())


def parse_breaks(items: Optional[Iterable[Mapping[str, Any]]], day: Any = None) -> List[Break]:
    """
    Convert the ``break_hours`` of one weekday row.

    Rows missing a bound, or with an empty interval, block nothing and are
    skipped with a warning.
    """
    breaks: List[Break] = []
    for item in items or []:
        start, end = item.get("start"), item.get("end")
        if not start or not end:
            logger.warning("Skipping break with missing bound on %r: %r", day, dict(item))
            continue

        start_minute = parse_time_to_minutes(start)
        end_minute = parse_time_to_minutes(end)
        if start_minute >= end_minute:
            logger.warning("Skipping empty break %s - %s on %r", start, end, day)
            continue

        breaks.append(Break(start_minute=start_minute, end_minute=end_minute))
    return breaks


def parse_day_row(row: Mapping[str, Any]) -> DaySchedule:
    """Convert one weekday row of the API payload into a ``DaySchedule``."""
    breaks = parse_breaks(row.get("break_hours"), row.get("day"))

    return DaySchedule(
        is_open=not row.get("closed", False),
        open_minute=parse_time_to_minutes(row.get("opening_time")),
        close_minute=parse_time_to_minutes(row.get("closing_time")),
        breaks=tuple(breaks),
    )


def parse_business_hours(rows: Optional[Iterable[Mapping[str, Any]]]) -> Optional[WeeklySchedule]:
    """
    Convert the weekly hours payload into a ``WeeklySchedule``.

    Returns None when no hours were sent at all. Otherwise every weekday
    starts out closed and the rows in the payload open the days they list.

    Raises:
        ScheduleDataError: If a row has malformed or inconsistent times
    """
    if not rows:
        return None

    days: Dict[str, DaySchedule] = {name: DaySchedule.closed() for name in WEEKDAY_NAMES}

    for row in rows:
        day_name = normalize_day_name(row.get("day"))
        if day_name is None:
            logger.warning("Skipping hours row with unknown day: %r", row.get("day"))
            continue

        try:
            days[day_name] = parse_day_row(row)
        except ValueError as exc:
            raise ScheduleDataError(f"Invalid hours for {day_name}: {exc}") from exc

    return WeeklySchedule(days=days)


def parse_staff_member(row: Mapping[str, Any]) -> StaffMember:
    """Convert a staff payload entry; ids are kept as strings."""
    staff_id = row.get("id") or row.get("user_id") or 0
    return StaffMember(
        id=str(staff_id),
        name=row.get("name") or "Staff Member",
        working_hours=parse_business_hours(row.get("working_hours")),
    )


def parse_staff_list(rows: Optional[Iterable[Mapping[str, Any]]]) -> List[StaffMember]:
    """
    Convert the staff list, keeping only members who accepted their invitation.
    """
    members: List[StaffMember] = []
    for row in rows or []:
        if row.get("invitation_status") != "accepted":
            logger.debug("Skipping staff %r: invitation not accepted", row.get("id"))
            continue
        members.append(parse_staff_member(row))
    return members


def parse_business_profile(payload: Mapping[str, Any]) -> BusinessProfile:
    """
    Convert a business payload (``{"business": {...}}`` or the bare business
    object) into a ``BusinessProfile``.

    Weekly hours are read from ``hours``, as the business details endpoint
    sends them, or from ``business_hours`` in older exports.
    """
    business = payload.get("business", payload)
    if not isinstance(business, Mapping):
        raise ScheduleDataError("Business payload must be a mapping.")

    try:
        business_id = int(business.get("id") or 0)
    except (TypeError, ValueError) as exc:
        raise ScheduleDataError(f"Invalid business id: {business.get('id')!r}") from exc

    return BusinessProfile(
        business_id=business_id,
        name=business.get("business_name") or business.get("name") or "",
        business_hours=parse_business_hours(business.get("hours") or business.get("business_hours")),
        staff=parse_staff_list(business.get("staff")),
    )

"""
Selection state of a booking screen and the request it submits.
"""

from __future__ import annotations

import logging
from datetime import date as std_date
from typing import List, Literal, Optional, Sequence

from pendulum import Date
from pydantic import BaseModel, Field

from ..domain.exceptions import SelectionError
from ..domain.hours_resolver import ANYONE
from ..domain.models import BusinessProfile, CategorizedSlots, Category, WeeklySchedule
from ..domain.slot_categorizer import (
    category_at_index,
    category_start_index,
    ordered_all_slots,
    slot_category,
)
from ..domain.time_utils import to_date
from .availability import AvailabilityEngine

logger = logging.getLogger(__name__)


class BookingRequest(BaseModel):
    """Appointment payload sent to the booking API."""
    business_id: int
    appointment_type: Literal["service", "subscription"]
    payment_method: Literal["pay_now", "pay_later"]
    service_ids: List[int] = Field(min_length=1)
    appointment_date: str  # YYYY-MM-DD
    appointment_time: str  # HH:mm, as listed in the slot grid
    notes: Optional[str] = None
    staff_id: Optional[int] = None
    subscription_id: Optional[int] = None

    def to_payload(self) -> dict:
        """Request body with unset optional fields left out."""
        return self.model_dump(exclude_none=True)


class BookingSession:
    """
    Holds what the customer has picked so far: date, week strip, staff
    member, time slot and the highlighted slot category.

    The time slot starts unset, is only set by selecting a slot that is
    available and not past, and is cleared whenever the staff member changes.
    """

    def __init__(self, engine: AvailabilityEngine, business: BusinessProfile) -> None:
        self.engine = engine
        self.business = business

        today = engine.clock.today()
        self.selected_date: Date = today
        self.week: List[Date] = engine.calendar.week_days_containing(today)
        self.selected_staff_id: str = ANYONE
        self.selected_time_slot: Optional[str] = None
        self.selected_category: Category = Category.MORNING

        self.refresh()

    @property
    def staff_schedule(self) -> Optional[WeeklySchedule]:
        """Working hours of the selected staff member, None for "anyone"."""
        if self.selected_staff_id == ANYONE:
            return None
        member = self.business.find_staff(self.selected_staff_id)
        if member is None:
            logger.debug("Unknown staff member %s selected", self.selected_staff_id)
            return None
        return member.working_hours

    def refresh(self) -> None:
        """
        Re-run date auto-selection. Call after the business hours or staff
        list have been (re)loaded.
        """
        chosen = self.engine.auto_select_date(
            current=self.selected_date,
            staff_id=self.selected_staff_id,
            staff_schedule=self.staff_schedule,
            business_schedule=self.business.business_hours,
        )
        if chosen != self.selected_date:
            self.selected_date = chosen
            self.week = self.engine.calendar.week_days_containing(chosen)

    def update_business(self, business: BusinessProfile) -> None:
        """Swap in freshly loaded business data."""
        self.business = business
        self.refresh()

    def select_staff(self, staff_id: str) -> None:
        """Choose a staff member (or ``"anyone"``); the chosen slot is cleared."""
        self.selected_staff_id = str(staff_id)
        self.selected_time_slot = None
        self.refresh()

    def is_date_disabled(self, value: std_date) -> bool:
        return not self.engine.is_date_bookable(
            value,
            self.selected_staff_id,
            self.staff_schedule,
            self.business.business_hours,
        )

    def select_date(self, value: std_date) -> bool:
        """
        Select a date and move the week strip to it.

        Returns False, leaving the selection untouched, for past or closed dates.
        """
        if self.is_date_disabled(value):
            return False

        self.selected_date = to_date(value)
        self.week = self.engine.calendar.week_days_containing(self.selected_date)
        return True

    def previous_week(self) -> List[Date]:
        self.week = self.engine.calendar.shift_week(self.week, -1)
        return self.week

    def next_week(self) -> List[Date]:
        self.week = self.engine.calendar.shift_week(self.week, 1)
        return self.week

    def week_range_label(self) -> str:
        return self.engine.calendar.format_week_range(self.week)

    def available_slots(self) -> List[str]:
        return self.engine.available_slots(
            self.selected_date,
            self.selected_staff_id,
            self.staff_schedule,
            self.business.business_hours,
        )

    def categorized_slots(self) -> CategorizedSlots:
        return self.engine.categorized_slots(
            self.selected_date,
            self.selected_staff_id,
            self.staff_schedule,
            self.business.business_hours,
        )

    def is_slot_disabled(self, slot: str) -> bool:
        return self.engine.is_slot_past(slot, self.selected_date)

    def select_slot(self, slot: str) -> bool:
        """
        Select a time slot and highlight its category.

        Returns False for slots that have already started or are not
        available on the selected date.
        """
        if self.is_slot_disabled(slot):
            return False

        categorized = self.categorized_slots()
        if slot not in ordered_all_slots(categorized):
            return False

        self.selected_time_slot = slot
        self.selected_category = slot_category(categorized, slot)
        return True

    def select_category(self, category: Category) -> int:
        """
        Highlight a category tab.

        Returns the index of the category's first slot, where the slot list
        should scroll to.
        """
        self.selected_category = Category(category)
        return category_start_index(self.categorized_slots(), self.selected_category)

    def sync_category_to_index(self, index: int) -> Category:
        """Highlight the category of the slot visible at a scroll position."""
        self.selected_category = category_at_index(self.categorized_slots(), index)
        return self.selected_category

    def build_booking_request(
        self,
        *,
        service_ids: Sequence[int],
        payment_method: str = "pay_now",
        notes: Optional[str] = None,
        subscription_id: Optional[int] = None,
    ) -> BookingRequest:
        """
        Validate the selection and build the appointment payload.

        Raises:
            SelectionError: If no time slot or no service has been selected
        """
        if not self.selected_time_slot:
            raise SelectionError(
                "Time Slot Required",
                "Please select a time slot to proceed with booking.",
            )
        if not service_ids:
            raise SelectionError(
                "No Service Selected",
                "Please select at least one service to proceed with checkout.",
            )

        staff_id: Optional[int] = None
        if self.selected_staff_id != ANYONE:
            try:
                staff_id = int(self.selected_staff_id)
            except ValueError as exc:
                raise SelectionError(
                    "Invalid Staff Member",
                    f"Staff id '{self.selected_staff_id}' is not a number.",
                ) from exc

        cleaned_notes = notes.strip() if notes else ""

        return BookingRequest(
            business_id=self.business.business_id,
            appointment_type="subscription" if subscription_id else "service",
            payment_method=payment_method,
            service_ids=list(service_ids),
            appointment_date=self.selected_date.format("YYYY-MM-DD"),
            appointment_time=self.selected_time_slot,
            notes=cleaned_notes or None,
            staff_id=staff_id,
            subscription_id=subscription_id or None,
        )

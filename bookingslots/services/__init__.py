"""
Service layer helpers that orchestrate the availability domain logic.
"""

from .availability import AvailabilityEngine
from .booking_session import BookingRequest, BookingSession

__all__ = ["AvailabilityEngine", "BookingRequest", "BookingSession"]

"""
Adapters layer - Booking API payloads.
"""

from .business_source import JsonBusinessSource
from .hours_mapper import parse_business_hours, parse_business_profile, parse_time_to_minutes

__all__ = [
    "JsonBusinessSource",
    "parse_business_hours",
    "parse_business_profile",
    "parse_time_to_minutes",
]

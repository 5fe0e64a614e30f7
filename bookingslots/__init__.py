"""
bookingslots - appointment availability and slot selection for salon bookings.
"""

__version__ = "0.1.0"

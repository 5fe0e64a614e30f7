"""
Loads business and staff hours from a JSON export of the booking API.
"""

import json
import logging
from pathlib import Path

from ..domain.exceptions import ScheduleDataError
from ..domain.models import BusinessProfile
from .hours_mapper import parse_business_profile

logger = logging.getLogger(__name__)


class JsonBusinessSource:
    """
    Reads a business detail response saved as JSON.

    The file has the same shape as the API response, either the full
    ``{"success": true, "data": {"business": {...}}}`` envelope or just the
    business object.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> BusinessProfile:
        """
        Load and map the business.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ScheduleDataError: If the file is not valid JSON or has malformed hours
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Business file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise ScheduleDataError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise ScheduleDataError("Business file must contain an object at the root level.")

        # Unwrap the API envelope
        if isinstance(payload.get("data"), dict):
            payload = payload["data"]

        profile = parse_business_profile(payload)
        logger.debug(
            "Loaded business %s with %d staff member(s) from %s",
            profile.business_id,
            len(profile.staff),
            self.path,
        )
        return profile

"""Earthquake data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

NUMERIC_FIELDS = ("magnitude", "depth", "latitude", "longitude", "gap", "rms")
STRING_FIELDS = ("id", "location", "time")


@dataclass(frozen=True)
class EarthquakeRecord:
    """A single validated earthquake observation from the CSV feed."""

    id: str
    magnitude: float
    depth: float
    latitude: float
    longitude: float
    location: str
    time: str
    gap: float = 0.0
    rms: float = 0.0

    @property
    def timestamp(self) -> datetime | None:
        """The raw ``time`` value as an aware UTC datetime, if it parses.

        Accepts ISO 8601 (``2024-01-15T12:00:00.000Z``) and epoch
        milliseconds.
        """
        raw = self.time.strip()
        try:
            if raw.lstrip("-").isdigit():
                return datetime.fromtimestamp(int(raw) / 1000, tz=timezone.utc)
            result = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except (ValueError, OverflowError, OSError):
            return None
        if result.tzinfo is None:
            result = result.replace(tzinfo=timezone.utc)
        return result

    @property
    def magnitude_band(self) -> str:
        if self.magnitude >= 5.0:
            return "high"
        if self.magnitude >= 3.0:
            return "medium"
        return "low"

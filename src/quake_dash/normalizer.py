"""Turn raw CSV rows into validated EarthquakeRecord objects.

Rows missing any required value are dropped silently; the remaining rows keep
their input order.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from quake_dash.models import EarthquakeRecord

# Feed column -> record field
REQUIRED_NUMERIC_COLUMNS = {
    "mag": "magnitude",
    "depth": "depth",
    "latitude": "latitude",
    "longitude": "longitude",
}
REQUIRED_TEXT_COLUMNS = ("place", "time")
REQUIRED_COLUMNS = tuple(REQUIRED_NUMERIC_COLUMNS) + REQUIRED_TEXT_COLUMNS


def _finite_or_none(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _text_or_none(value: str | None) -> str | None:
    if value is None or not str(value).strip():
        return None
    return str(value)


def normalize_row(row: Mapping[str, str | None]) -> EarthquakeRecord | None:
    """Build a record from one raw row, or return None if it is rejected."""
    numbers = {}
    for column, field in REQUIRED_NUMERIC_COLUMNS.items():
        number = _finite_or_none(row.get(column))
        if number is None:
            return None
        numbers[field] = number

    location = _text_or_none(row.get("place"))
    time = _text_or_none(row.get("time"))
    if location is None or time is None:
        return None

    return EarthquakeRecord(
        id=row.get("id") or "",
        location=location,
        time=time,
        gap=_finite_or_none(row.get("gap")) or 0.0,
        rms=_finite_or_none(row.get("rms")) or 0.0,
        **numbers,
    )


def normalize(raw_rows: Iterable[Mapping[str, str | None]]) -> list[EarthquakeRecord]:
    """Normalize raw rows, dropping the ones that fail validation."""
    records = []
    for row in raw_rows:
        record = normalize_row(row)
        if record is not None:
            records.append(record)
    return records

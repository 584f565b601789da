"""Summary statistics over the full record set."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from quake_dash.models import EarthquakeRecord


@dataclass(frozen=True)
class Summary:
    count: int
    max_magnitude: float
    avg_magnitude: float
    avg_depth: float


def summarize(records: Sequence[EarthquakeRecord]) -> Summary:
    """Count, max magnitude, and mean magnitude/depth of ``records``.

    Means are computed at full precision and rounded to 2 decimals. An empty
    set yields zeros everywhere.
    """
    count = len(records)
    if count == 0:
        return Summary(count=0, max_magnitude=0.0, avg_magnitude=0.0, avg_depth=0.0)

    return Summary(
        count=count,
        max_magnitude=max(r.magnitude for r in records),
        avg_magnitude=round(sum(r.magnitude for r in records) / count, 2),
        avg_depth=round(sum(r.depth for r in records) / count, 2),
    )

"""Load the USGS CSV earthquake feed from a URL or a local file."""

from __future__ import annotations

import csv
import io
import logging
import time
from pathlib import Path

import httpx

from quake_dash.config import DEFAULT_TIMEOUT_SECONDS
from quake_dash.errors import IngestionFailure
from quake_dash.models import EarthquakeRecord
from quake_dash.normalizer import REQUIRED_COLUMNS, normalize

logger = logging.getLogger(__name__)

BASE_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

FEEDS = {
    "hour": f"{BASE_URL}/all_hour.csv",
    "day": f"{BASE_URL}/all_day.csv",
    "week": f"{BASE_URL}/all_week.csv",
    "month": f"{BASE_URL}/all_month.csv",
}


def resolve_source(source: str) -> str:
    """Map a period name to its feed URL; URLs and paths pass through.

    A bare word that is neither a known period nor an existing file is
    treated as a mistyped period.
    """
    if source in FEEDS:
        return FEEDS[source]
    if "://" in source:
        if not source.startswith(("http://", "https://")):
            raise ValueError(f"Unsupported feed scheme in '{source}'. Use http(s) or a file path.")
        return source
    path = Path(source)
    if len(path.parts) > 1 or path.suffix.lower() == ".csv" or path.is_file():
        return source
    raise ValueError(f"Unknown feed period '{source}'. Choose from: {list(FEEDS)}")


def fetch_feed(source: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Return the raw feed text.

    Args:
        source: Period name, http(s) URL, or local file path.
        timeout: HTTP timeout in seconds.

    Raises:
        IngestionFailure: The feed could not be retrieved.
    """
    location = resolve_source(source)

    if location.startswith(("http://", "https://")):
        try:
            resp = httpx.get(location, timeout=timeout, follow_redirects=True)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise IngestionFailure(location, f"HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise IngestionFailure(location, f"request failed: {exc}") from exc
        return resp.text

    try:
        return Path(location).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IngestionFailure(location, f"cannot read file: {exc}") from exc


def parse_feed(text: str, source: str = "<feed>") -> list[dict[str, str | None]]:
    """Parse CSV text with a header row into raw row mappings.

    Blank lines are skipped. The header must carry every required column.
    """
    if not text or not text.strip():
        raise IngestionFailure(source, "empty payload")

    reader = csv.DictReader(io.StringIO(text))
    try:
        header = reader.fieldnames or []
        missing = [col for col in REQUIRED_COLUMNS if col not in header]
        if missing:
            raise IngestionFailure(source, f"missing columns: {', '.join(missing)}")
        return list(reader)
    except csv.Error as exc:
        raise IngestionFailure(source, f"malformed CSV: {exc}") from exc


def load_records(source: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> list[EarthquakeRecord]:
    """Fetch, parse, and normalize the feed in one pass.

    Raises:
        IngestionFailure: Nothing could be loaded; no partial data is returned.
    """
    t0 = time.monotonic()
    location = resolve_source(source)

    rows = parse_feed(fetch_feed(location, timeout=timeout), source=location)
    records = normalize(rows)

    duration_ms = round((time.monotonic() - t0) * 1000, 1)
    logger.info(
        "Loaded %d earthquake records (%d rows rejected)",
        len(records), len(rows) - len(records),
        extra={
            "feed": location,
            "record_count": len(records),
            "rejected_count": len(rows) - len(records),
            "duration_ms": duration_ms,
        },
    )
    return records

"""Shared "currently selected record" cell.

One ``SelectionStore`` is created per session and handed to every view, so
the chart and the table always agree on what is selected. Identity is by
record ``id``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from quake_dash.models import EarthquakeRecord

logger = logging.getLogger(__name__)


class SelectionStore:
    """Holds at most one selected record; last write wins."""

    def __init__(self) -> None:
        self._current: EarthquakeRecord | None = None

    def select(self, record: EarthquakeRecord) -> None:
        self._current = record
        logger.debug("Selected earthquake %s", record.id)

    def current(self) -> EarthquakeRecord | None:
        return self._current

    def clear(self) -> None:
        self._current = None

    def is_selected(self, record: EarthquakeRecord) -> bool:
        return self._current is not None and self._current.id == record.id

    def resolve(self, records: Iterable[EarthquakeRecord]) -> EarthquakeRecord | None:
        """Return the record in ``records`` matching the selection, if any.

        A selection left over from an earlier load is kept as is; this just
        finds nothing for it.
        """
        if self._current is None:
            return None
        return next((r for r in records if r.id == self._current.id), None)

"""Derived views over the normalized record set.

``project`` computes the visible table slice for a set of view parameters:
filter by location, stable sort, then paginate. ``cap`` bounds the number of
points handed to the chart. Both are pure and never mutate their inputs.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from quake_dash.config import CHART_MAX_POINTS, PAGE_SIZE
from quake_dash.models import NUMERIC_FIELDS, STRING_FIELDS, EarthquakeRecord

SORT_FIELDS = NUMERIC_FIELDS + STRING_FIELDS
SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class ViewParameters:
    """Search/sort/page state for one view."""

    search: str = ""
    sort_field: str = "magnitude"
    sort_direction: str = "desc"
    page: int = 1
    page_size: int = PAGE_SIZE

    def __post_init__(self) -> None:
        _check_sort(self.sort_field, self.sort_direction)

    def update(
        self,
        search: str | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
        page: int | None = None,
    ) -> None:
        """Change only the given parameters."""
        _check_sort(
            sort_field if sort_field is not None else self.sort_field,
            sort_direction if sort_direction is not None else self.sort_direction,
        )
        if search is not None:
            self.search = search
        if sort_field is not None:
            self.sort_field = sort_field
        if sort_direction is not None:
            self.sort_direction = sort_direction
        if page is not None:
            self.page = page

    def toggle_sort(self, sort_field: str) -> None:
        """Column-header click: flip direction on the same field, else sort the new field descending."""
        if sort_field == self.sort_field:
            self.update(sort_direction="asc" if self.sort_direction == "desc" else "desc")
        else:
            self.update(sort_field=sort_field, sort_direction="desc")

    def clamp_page(self, total_pages: int) -> None:
        self.page = min(max(self.page, 1), max(total_pages, 1))


def _check_sort(sort_field: str, sort_direction: str) -> None:
    if sort_field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field '{sort_field}'. Choose from: {list(SORT_FIELDS)}")
    if sort_direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction '{sort_direction}'. Choose from: {list(SORT_DIRECTIONS)}")


@dataclass(frozen=True)
class ProjectedPage:
    """The slice a view renders, plus pagination metadata."""

    page: tuple[EarthquakeRecord, ...]
    total_count: int
    total_pages: int
    page_number: int
    page_size: int

    @property
    def first_index(self) -> int:
        """1-based position of the first row shown, 0 when the page is empty."""
        if not self.page:
            return 0
        return (self.page_number - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.page:
            return 0
        return self.first_index + len(self.page) - 1


def project(records: Sequence[EarthquakeRecord], params: ViewParameters) -> ProjectedPage:
    """Filter by location, sort, and paginate ``records`` for one view.

    Sorting is stable in both directions, so ties keep their filter-stage
    order. A page outside ``[1, total_pages]`` yields an empty slice.
    """
    needle = params.search.lower()
    filtered = [r for r in records if needle in r.location.lower()]

    ordered = sorted(
        filtered,
        key=lambda r: getattr(r, params.sort_field),
        reverse=params.sort_direction == "desc",
    )

    total_count = len(ordered)
    total_pages = max(1, math.ceil(total_count / params.page_size))

    if params.page < 1:
        page: list[EarthquakeRecord] = []
    else:
        start = (params.page - 1) * params.page_size
        page = ordered[start:start + params.page_size]

    return ProjectedPage(
        page=tuple(page),
        total_count=total_count,
        total_pages=total_pages,
        page_number=params.page,
        page_size=params.page_size,
    )


def cap(records: Sequence[EarthquakeRecord], limit: int = CHART_MAX_POINTS) -> list[EarthquakeRecord]:
    """First ``limit`` records in their original order (chart rendering bound)."""
    return list(records[:limit])

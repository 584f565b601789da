"""Table rendering for the earthquake dashboard.

Turns one projected page into a styled DataFrame: magnitude cells are
coloured by band and the selected row is highlighted.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd
from pandas.io.formats.style import Styler

from quake_dash.chart import records_to_frame
from quake_dash.models import EarthquakeRecord
from quake_dash.projection import ViewParameters
from quake_dash.selection import SelectionStore

TABLE_COLUMNS = {
    "magnitude": "Magnitude",
    "location": "Location",
    "depth": "Depth (km)",
    "time": "Time",
}

BAND_COLORS = {"high": "#ff6b6b", "medium": "#ffa94d", "low": "#5ce66b"}
SELECTED_ROW_STYLE = "background-color: rgba(0, 199, 200, 0.35); font-weight: 700"


def header_label(field: str, params: ViewParameters) -> str:
    """Column header text, with an arrow on the active sort column."""
    label = TABLE_COLUMNS[field]
    if field != params.sort_field:
        return label
    return f"{label} {'↑' if params.sort_direction == 'asc' else '↓'}"


def _format_date(record: EarthquakeRecord) -> str:
    ts = record.timestamp
    return ts.astimezone().strftime("%Y-%m-%d") if ts is not None else record.time


def page_frame(page: Sequence[EarthquakeRecord]) -> pd.DataFrame:
    """Display columns for one page, with human-readable headers."""
    df = records_to_frame(page)[list(TABLE_COLUMNS)].copy()
    df["time"] = [_format_date(r) for r in page]
    df.columns = list(TABLE_COLUMNS.values())
    return df


def row_styles(page: Sequence[EarthquakeRecord], selection: SelectionStore) -> pd.DataFrame:
    """CSS for every cell of the page, same shape as ``page_frame``."""
    styles = []
    for record in page:
        row = SELECTED_ROW_STYLE if selection.is_selected(record) else ""
        cells = [row] * len(TABLE_COLUMNS)
        badge = f"color: {BAND_COLORS[record.magnitude_band]}; font-weight: 700"
        cells[0] = f"{row}; {badge}" if row else badge
        styles.append(cells)
    return pd.DataFrame(styles, columns=list(TABLE_COLUMNS.values()))


def style_page(page: Sequence[EarthquakeRecord], selection: SelectionStore) -> Styler:
    """Styled page for ``st.dataframe``."""
    styles = row_styles(page, selection)
    return (
        page_frame(page)
        .style.apply(lambda _: styles, axis=None)
        .format({"Magnitude": "{:.1f}", "Depth (km)": "{:.2f}"})
    )

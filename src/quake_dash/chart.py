"""Scatter chart rendering for the earthquake dashboard.

Plots any two numeric record fields against each other. The point set is
capped for rendering cost, and the selected earthquake is drawn as its own
highlighted trace on top.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict

import pandas as pd
import plotly.graph_objects as go

from quake_dash.config import CHART_MAX_POINTS
from quake_dash.models import NUMERIC_FIELDS, EarthquakeRecord
from quake_dash.projection import cap
from quake_dash.selection import SelectionStore

AXIS_LABELS = {
    "magnitude": "Magnitude",
    "depth": "Depth (km)",
    "latitude": "Latitude",
    "longitude": "Longitude",
    "gap": "Gap",
    "rms": "RMS",
}

POINT_COLOR = "#ADD8E6"
SELECTED_COLOR = "#FF0000"
POINT_SIZE = 10
SELECTED_SIZE = 16

# Dark theme to match the dashboard page
DARK_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(color="#FFFFFF"),
    margin=dict(l=10, r=10, t=10, b=10),
    height=520,
    showlegend=False,
)
GRID_STYLE = dict(gridcolor="#333333", griddash="dash", zeroline=False)

FRAME_COLUMNS = [
    "id", "magnitude", "depth", "latitude", "longitude",
    "location", "time", "gap", "rms",
]


def records_to_frame(records: Sequence[EarthquakeRecord]) -> pd.DataFrame:
    """One row per record, one column per record field."""
    return pd.DataFrame([asdict(r) for r in records], columns=FRAME_COLUMNS)


def _format_date(record: EarthquakeRecord) -> str:
    ts = record.timestamp
    return f"{ts:%Y-%m-%d}" if ts is not None else record.time


def build_hover_text(records: Sequence[EarthquakeRecord]) -> list[str]:
    """Tooltip per point: location, magnitude, depth, date."""
    return [
        f"<b>Location:</b> {r.location}<br>"
        f"<b>Magnitude:</b> {r.magnitude}<br>"
        f"<b>Depth:</b> {r.depth} km<br>"
        f"<b>Time:</b> {_format_date(r)}"
        for r in records
    ]


def _scatter_trace(
    records: Sequence[EarthquakeRecord],
    x_field: str,
    y_field: str,
    color: str,
    size: int,
) -> go.Scatter:
    df = records_to_frame(records)
    return go.Scatter(
        x=df[x_field],
        y=df[y_field],
        mode="markers",
        marker=dict(color=color, size=size, line=dict(width=0)),
        customdata=df["id"],
        text=build_hover_text(records),
        hoverinfo="text",
    )


def build_scatter(
    records: Sequence[EarthquakeRecord],
    x_field: str = "magnitude",
    y_field: str = "depth",
    selection: SelectionStore | None = None,
    max_points: int = CHART_MAX_POINTS,
) -> go.Figure:
    """Build the scatter chart.

    Args:
        records: Full normalized record set; only the first ``max_points``
            are plotted.
        x_field/y_field: Numeric record fields for the axes.
        selection: Shared selection. It is resolved against the full set,
            so it is highlighted even when it falls beyond the cap.
    """
    for axis in (x_field, y_field):
        if axis not in NUMERIC_FIELDS:
            raise ValueError(f"Unknown axis field '{axis}'. Choose from: {list(NUMERIC_FIELDS)}")

    fig = go.Figure()
    fig.update_layout(**DARK_LAYOUT)
    fig.update_xaxes(title_text=AXIS_LABELS[x_field], **GRID_STYLE)
    fig.update_yaxes(title_text=AXIS_LABELS[y_field], **GRID_STYLE)

    points = cap(records, max_points)
    if not points:
        return fig

    fig.add_trace(_scatter_trace(points, x_field, y_field, POINT_COLOR, POINT_SIZE))

    match = selection.resolve(records) if selection is not None else None
    if match is not None:
        fig.add_trace(_scatter_trace([match], x_field, y_field, SELECTED_COLOR, SELECTED_SIZE))

    return fig


def selected_ids(event: object) -> list[str]:
    """Record ids from a Streamlit plotly selection event.

    ``customdata`` may arrive as a scalar or a one-element list depending on
    the Plotly version.
    """
    points = []
    selection = getattr(event, "selection", None)
    if selection is None and isinstance(event, dict):
        selection = event.get("selection")
    if selection:
        points = selection.get("points", []) if isinstance(selection, dict) else getattr(selection, "points", [])

    ids = []
    for point in points:
        custom = point.get("customdata")
        if isinstance(custom, (list, tuple)):
            custom = custom[0] if custom else None
        if custom is not None:
            ids.append(str(custom))
    return ids

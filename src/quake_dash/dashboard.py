"""Streamlit dashboard for the earthquake CSV feed.

Stats cards, a scatter chart, a searchable/sortable/paginated table, and a
details panel. Chart and table share one SelectionStore in session state.

Run with ``quake-dash dashboard`` or ``streamlit run dashboard.py``.
"""

from __future__ import annotations

import logging

import streamlit as st

from quake_dash.chart import AXIS_LABELS, build_scatter, selected_ids
from quake_dash.config import Settings
from quake_dash.errors import IngestionFailure
from quake_dash.feed import load_records
from quake_dash.logging_config import configure_logging
from quake_dash.models import NUMERIC_FIELDS, EarthquakeRecord
from quake_dash.projection import ViewParameters, project
from quake_dash.selection import SelectionStore
from quake_dash.stats import summarize
from quake_dash.table import TABLE_COLUMNS, header_label, style_page

logger = logging.getLogger(__name__)

# ── Page config ───────────────────────────────────────────────────────────
st.set_page_config(page_title="Earthquake Data Dashboard", layout="wide")

try:
    SETTINGS = Settings.from_env()
    LOG_LEVEL = SETTINGS.log_level_number
except ValueError as exc:
    st.error(f"Invalid environment setting: {exc}")
    st.stop()

st.markdown("""
<style>
    .stApp { background: #121212; color: #e0e0e0; }
    .dash-title { text-align: center; font-size: 2.4rem; font-weight: 900; color: #ffffff; margin: 0 0 1.5rem 0; }
    .stat-card {
        border: 1px solid #00c7c8;
        box-shadow: -3px 6px 6px #00c7c8;
        border-radius: 20px;
        padding: 1.2rem;
        text-align: center;
    }
    .stat-card .value { font-size: 2rem; font-weight: 900; color: #ffffff; }
    .stat-card.red .value { color: #ff6b6b; }
    .stat-card.orange .value { color: #ffa94d; }
    .stat-card.green .value { color: #5ce66b; }
    .stat-card .label { font-size: 0.9rem; color: #ffffff; margin-top: 0.4rem; }
    .section-title { font-size: 1.3rem; font-weight: 700; color: #ffffff; margin: 0.5rem 0 1rem 0; }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def _init_logging() -> None:
    configure_logging(LOG_LEVEL)


@st.cache_data(show_spinner="Loading earthquake data...")
def load_data(feed: str, timeout: float) -> list[EarthquakeRecord]:
    return load_records(feed, timeout=timeout)


def _session_state() -> tuple[SelectionStore, ViewParameters]:
    if "selection" not in st.session_state:
        st.session_state["selection"] = SelectionStore()
    if "table_view" not in st.session_state:
        st.session_state["table_view"] = ViewParameters()
    return st.session_state["selection"], st.session_state["table_view"]


def _apply_event(key: str, ids: list[str], records: list[EarthquakeRecord], selection: SelectionStore) -> bool:
    """Select the record behind a chart/table event, once per distinct event.

    Streamlit replays the last widget event on every rerun, so an event is
    only applied when it differs from the one seen before.
    """
    if ids == st.session_state.get(key):
        return False
    st.session_state[key] = ids
    match = next((r for r in records if ids and r.id == ids[0]), None)
    if match is None:
        return False
    selection.select(match)
    return True


def _format_time(record: EarthquakeRecord, fmt: str) -> str:
    ts = record.timestamp
    return ts.astimezone().strftime(fmt) if ts is not None else record.time


_init_logging()
selection, table_view = _session_state()

try:
    records = load_data(SETTINGS.feed, SETTINGS.timeout_seconds)
except IngestionFailure as exc:
    logger.error("Ingestion failed: %s", exc, extra={"feed": exc.source})
    st.markdown('<div class="dash-title">Error Loading Data</div>', unsafe_allow_html=True)
    st.error("Failed to load earthquake data")
    st.caption(exc.reason)
    st.stop()

st.markdown('<div class="dash-title">Earthquake Data Dashboard</div>', unsafe_allow_html=True)

# ── Statistics ────────────────────────────────────────────────────────────
summary = summarize(records)
cards = [
    ("white",  "Total Earthquakes", f"{summary.count}"),
    ("red",    "Max Magnitude",     f"{summary.max_magnitude}"),
    ("orange", "Avg Magnitude",     f"{summary.avg_magnitude:.2f}"),
    ("green",  "Avg Depth",         f"{summary.avg_depth:.2f} km"),
]
for col, (color, label, value) in zip(st.columns(len(cards)), cards):
    col.markdown(f"""
    <div class="stat-card {color}">
        <div class="value">{value}</div>
        <div class="label">{label}</div>
    </div>
    """, unsafe_allow_html=True)

st.markdown("")
col_chart, col_table = st.columns(2, gap="large")

# ── Chart ─────────────────────────────────────────────────────────────────
with col_chart:
    st.markdown('<div class="section-title">Earthquake Visualization</div>', unsafe_allow_html=True)
    col_x, col_y = st.columns(2)
    x_field = col_x.selectbox(
        "X axis", NUMERIC_FIELDS, index=NUMERIC_FIELDS.index("magnitude"),
        format_func=AXIS_LABELS.get, key="chart_x",
    )
    y_field = col_y.selectbox(
        "Y axis", NUMERIC_FIELDS, index=NUMERIC_FIELDS.index("depth"),
        format_func=AXIS_LABELS.get, key="chart_y",
    )

    fig = build_scatter(records, x_field, y_field, selection=selection)
    chart_event = st.plotly_chart(
        fig, use_container_width=True, on_select="rerun",
        selection_mode="points", key="chart",
    )
    if _apply_event("_chart_event", selected_ids(chart_event), records, selection):
        st.rerun()

# ── Table ─────────────────────────────────────────────────────────────────
with col_table:
    st.markdown('<div class="section-title">Earthquake Data</div>', unsafe_allow_html=True)
    search = st.text_input("Search by location...", value=table_view.search, key="table_search")
    table_view.update(search=search)

    # Clicking a header sorts by it; clicking the active one flips direction.
    for col, field in zip(st.columns(len(TABLE_COLUMNS)), TABLE_COLUMNS):
        if col.button(header_label(field, table_view), key=f"sort_{field}", use_container_width=True):
            table_view.toggle_sort(field)
            st.rerun()

    result = project(records, table_view)
    if not 1 <= table_view.page <= result.total_pages:
        table_view.clamp_page(result.total_pages)
        result = project(records, table_view)

    table_event = st.dataframe(
        style_page(result.page, selection),
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key=f"table_{table_view.page}",
    )
    rows = table_event.selection.rows if table_event else []
    row_ids = [result.page[i].id for i in rows if i < len(result.page)]
    if _apply_event("_table_event", row_ids, records, selection):
        st.rerun()

    st.caption(
        f"Showing {result.first_index} to {result.last_index} of {result.total_count} entries"
    )
    col_prev, col_page, col_next = st.columns([1, 2, 1])
    if col_prev.button("Previous", disabled=table_view.page <= 1, use_container_width=True):
        table_view.update(page=table_view.page - 1)
        st.rerun()
    col_page.markdown(f"Page {table_view.page} of {result.total_pages}")
    if col_next.button("Next", disabled=table_view.page >= result.total_pages, use_container_width=True):
        table_view.update(page=table_view.page + 1)
        st.rerun()

# ── Details ───────────────────────────────────────────────────────────────
current = selection.current()
if current is not None:
    st.markdown('<div class="section-title">Selected Earthquake Details</div>', unsafe_allow_html=True)
    col_a, col_b = st.columns(2)
    col_a.markdown(f"**Location:** {current.location}")
    col_a.markdown(f"**Magnitude:** {current.magnitude}")
    col_a.markdown(f"**Depth:** {current.depth} km")
    col_b.markdown(f"**Time:** {_format_time(current, '%Y-%m-%d %H:%M:%S %Z')}")
    col_b.markdown(f"**Coordinates:** {current.latitude}, {current.longitude}")

"""Command-line interface for the earthquake dashboard."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from quake_dash.config import Settings
from quake_dash.errors import IngestionFailure
from quake_dash.feed import load_records
from quake_dash.logging_config import configure_logging
from quake_dash.models import EarthquakeRecord
from quake_dash.projection import SORT_DIRECTIONS, SORT_FIELDS, ViewParameters, project
from quake_dash.stats import summarize

console = Console()

BAND_COLORS = {"high": "red", "medium": "yellow", "low": "green"}

feed_option = click.option(
    "--feed",
    default=None,
    help="Feed period (hour, day, week, month), URL, or CSV path. Defaults to $QUAKE_DASH_FEED.",
)


def _load(settings: Settings, feed: str | None) -> list[EarthquakeRecord]:
    try:
        return load_records(feed or settings.feed, timeout=settings.timeout_seconds)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--feed") from exc
    except IngestionFailure as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option("--log-level", default=None, help="Logging level. Defaults to $QUAKE_DASH_LOG_LEVEL or INFO.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Earthquake feed dashboard."""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(f"Invalid environment setting: {exc}") from exc
    if log_level:
        settings = Settings(feed=settings.feed, timeout_seconds=settings.timeout_seconds, log_level=log_level)
    try:
        configure_logging(settings.log_level_number)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level") from exc
    ctx.obj = settings


@cli.command()
@feed_option
@click.pass_obj
def stats(settings: Settings, feed: str | None) -> None:
    """Print summary statistics for the feed."""
    summary = summarize(_load(settings, feed))

    table = Table(title="Statistics Overview")
    table.add_column("Total Earthquakes", justify="right")
    table.add_column("Max Magnitude", justify="right", style="red")
    table.add_column("Avg Magnitude", justify="right", style="yellow")
    table.add_column("Avg Depth", justify="right", style="green")
    table.add_row(
        str(summary.count),
        f"{summary.max_magnitude}",
        f"{summary.avg_magnitude:.2f}",
        f"{summary.avg_depth:.2f} km",
    )
    console.print(table)


@cli.command(name="table")
@feed_option
@click.option("--search", default="", help="Case-insensitive location substring.")
@click.option("--sort", "sort_field", type=click.Choice(SORT_FIELDS), default="magnitude", show_default=True)
@click.option("--direction", type=click.Choice(SORT_DIRECTIONS), default="desc", show_default=True)
@click.option("--page", type=int, default=1, show_default=True)
@click.pass_obj
def table_cmd(
    settings: Settings,
    feed: str | None,
    search: str,
    sort_field: str,
    direction: str,
    page: int,
) -> None:
    """Print one page of the earthquake table."""
    records = _load(settings, feed)
    params = ViewParameters(search=search, sort_field=sort_field, sort_direction=direction, page=page)
    result = project(records, params)

    table = Table(title="Earthquake Data")
    table.add_column("Magnitude", justify="right")
    table.add_column("Location")
    table.add_column("Depth (km)", justify="right")
    table.add_column("Time")
    for q in result.page:
        color = BAND_COLORS[q.magnitude_band]
        ts = q.timestamp
        table.add_row(
            f"[bold {color}]{q.magnitude}[/]",
            q.location,
            f"{q.depth}",
            f"{ts:%Y-%m-%d %H:%M UTC}" if ts is not None else q.time,
        )
    console.print(table)
    console.print(
        f"Showing {result.first_index} to {result.last_index} of {result.total_count} entries "
        f"- page {params.page} of {result.total_pages}"
    )


@cli.command()
@feed_option
@click.option("--port", type=int, default=None, help="Streamlit server port.")
@click.pass_obj
def dashboard(settings: Settings, feed: str | None, port: int | None) -> None:
    """Launch the Streamlit dashboard."""
    script = Path(__file__).with_name("dashboard.py")
    cmd = [sys.executable, "-m", "streamlit", "run", str(script)]
    if port is not None:
        cmd += ["--server.port", str(port)]

    env = dict(os.environ)
    env["QUAKE_DASH_FEED"] = feed or settings.feed
    env["QUAKE_DASH_LOG_LEVEL"] = settings.log_level

    click.echo(f"Starting dashboard for feed '{env['QUAKE_DASH_FEED']}'")
    raise SystemExit(subprocess.call(cmd, env=env))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

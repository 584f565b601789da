"""Tests for the quake-dash command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from quake_dash import cli as cli_module
from quake_dash.cli import cli

SAMPLE_CSV = """\
id,mag,depth,latitude,longitude,place,time,gap,rms
ak1,3.1,35.2,61.5,-150.1,"15 km N of Anchorage, Alaska",2024-01-15T12:00:00.000Z,45,0.5
ci1,5.2,8.1,35.7,-117.6,"Ridgecrest, CA",2024-01-15T11:00:00.000Z,,0.2
ak2,1.0,12.0,60.1,-152.0,"Cook Inlet, Alaska",2024-01-14T08:00:00.000Z,80,0.3
bad,,1.0,0.0,0.0,"Nowhere",2024-01-14T08:00:00.000Z,,
"""


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli_module, "configure_logging", lambda level: None)


@pytest.fixture
def feed_file(tmp_path):
    path = tmp_path / "all_month.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return str(path)


class TestStats:
    def test_prints_summary(self, feed_file):
        result = CliRunner().invoke(cli, ["stats", "--feed", feed_file])
        assert result.exit_code == 0, result.output
        assert "Statistics Overview" in result.output
        assert "5.2" in result.output
        assert "3.10" in result.output

    def test_feed_from_environment(self, feed_file, monkeypatch):
        monkeypatch.setenv("QUAKE_DASH_FEED", feed_file)
        result = CliRunner().invoke(cli, ["stats"])
        assert result.exit_code == 0, result.output
        assert "Statistics Overview" in result.output

    def test_ingestion_failure_exits_nonzero(self, tmp_path):
        result = CliRunner().invoke(cli, ["stats", "--feed", str(tmp_path / "missing.csv")])
        assert result.exit_code == 1
        assert "Failed to load earthquake data" in result.output

    def test_unknown_period_is_usage_error(self):
        result = CliRunner().invoke(cli, ["stats", "--feed", "weekk"])
        assert result.exit_code == 2
        assert "Unknown feed period" in result.output


class TestTable:
    def test_default_sort(self, feed_file):
        result = CliRunner().invoke(cli, ["table", "--feed", feed_file])
        assert result.exit_code == 0, result.output
        assert result.output.index("Ridgecrest") < result.output.index("Anchorage")
        assert "Showing 1 to 3 of 3 entries - page 1 of 1" in result.output

    def test_search(self, feed_file):
        result = CliRunner().invoke(cli, ["table", "--feed", feed_file, "--search", "alaska"])
        assert result.exit_code == 0, result.output
        assert "Ridgecrest" not in result.output
        assert "of 2 entries" in result.output

    def test_out_of_range_page(self, feed_file):
        result = CliRunner().invoke(cli, ["table", "--feed", feed_file, "--page", "5"])
        assert result.exit_code == 0, result.output
        assert "Showing 0 to 0 of 3 entries - page 5 of 1" in result.output

    def test_invalid_sort_field(self, feed_file):
        result = CliRunner().invoke(cli, ["table", "--feed", feed_file, "--sort", "color"])
        assert result.exit_code == 2


class TestEnvironment:
    def test_bad_timeout_is_usage_error(self, feed_file, monkeypatch):
        monkeypatch.setenv("QUAKE_DASH_TIMEOUT", "fast")
        result = CliRunner().invoke(cli, ["stats", "--feed", feed_file])
        assert result.exit_code == 2
        assert "QUAKE_DASH_TIMEOUT must be a number" in result.output


class TestLogLevel:
    def test_unknown_level_rejected(self, feed_file):
        result = CliRunner().invoke(cli, ["--log-level", "chatty", "stats", "--feed", feed_file])
        assert result.exit_code == 2
        assert "Unknown log level" in result.output

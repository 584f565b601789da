"""Tests for the earthquake record model."""

from __future__ import annotations

from datetime import datetime, timezone

from quake_dash.models import EarthquakeRecord


def _make_record(mag=4.5, time="2024-01-15T12:00:00.000Z"):
    return EarthquakeRecord(
        id="us7000test1", magnitude=mag, depth=10.0, latitude=34.0,
        longitude=-118.5, location="10km NE of Somewhere", time=time,
        gap=30.0, rms=0.4,
    )


class TestEarthquakeRecord:
    def test_timestamp_iso(self):
        ts = _make_record().timestamp
        assert ts == datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def test_timestamp_epoch_millis(self):
        ts = _make_record(time="1700000000000").timestamp
        assert ts == datetime.fromtimestamp(1700000000, tz=timezone.utc)

    def test_timestamp_naive_assumed_utc(self):
        ts = _make_record(time="2024-01-15T12:00:00").timestamp
        assert ts.tzinfo == timezone.utc

    def test_timestamp_unparseable(self):
        assert _make_record(time="yesterday").timestamp is None

    def test_magnitude_band(self):
        assert _make_record(mag=5.0).magnitude_band == "high"
        assert _make_record(mag=3.0).magnitude_band == "medium"
        assert _make_record(mag=2.9).magnitude_band == "low"

    def test_defaults_for_gap_and_rms(self):
        quake = EarthquakeRecord(
            id="x", magnitude=1.0, depth=1.0, latitude=0.0, longitude=0.0,
            location="Somewhere", time="2024-01-01T00:00:00Z",
        )
        assert quake.gap == 0.0
        assert quake.rms == 0.0

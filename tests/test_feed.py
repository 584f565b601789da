"""Tests for loading the CSV feed."""

from __future__ import annotations

import httpx
import pytest

from quake_dash.errors import IngestionFailure
from quake_dash.feed import FEEDS, fetch_feed, load_records, parse_feed, resolve_source

SAMPLE_CSV = """\
time,latitude,longitude,depth,mag,magType,nst,gap,dmin,rms,net,id,updated,place,type
2024-01-15T12:00:00.000Z,61.5,-150.1,35.2,3.1,ml,,45,,0.52,ak,ak0241,2024-01-15T12:10:00.000Z,"15 km N of Anchorage, Alaska",earthquake
2024-01-15T11:00:00.000Z,35.7,-117.6,8.1,5.2,mw,40,,0.05,0.2,ci,ci4001,2024-01-15T11:30:00.000Z,"5 km SW of Ridgecrest, CA",earthquake
2024-01-15T10:00:00.000Z,19.4,-155.3,2.0,,md,12,120,,0.1,hv,hv7001,2024-01-15T10:05:00.000Z,"Volcano, Hawaii",earthquake

2024-01-15T09:00:00.000Z,-33.0,-70.5,100.0,1.0,ml,,abc,,,us,us9001,2024-01-15T09:30:00.000Z,"Valparaiso, Chile",earthquake
"""

FEED_URL = "https://example.test/all_month.csv"


class TestResolveSource:
    def test_period_name(self):
        assert resolve_source("month") == FEEDS["month"]
        assert FEEDS["month"].endswith("/all_month.csv")

    def test_url_and_path_pass_through(self):
        assert resolve_source(FEED_URL) == FEED_URL
        assert resolve_source("data/all_month.csv") == "data/all_month.csv"

    def test_unsupported_scheme(self):
        with pytest.raises(ValueError, match="Unsupported feed scheme"):
            resolve_source("ftp://example.test/feed.csv")

    @pytest.mark.parametrize("source", ["weekk", "Month", "yesterday"])
    def test_unknown_period(self, source):
        with pytest.raises(ValueError, match="Unknown feed period"):
            resolve_source(source)

    def test_bare_name_of_existing_file(self, tmp_path, monkeypatch):
        (tmp_path / "quakes").write_text(SAMPLE_CSV)
        monkeypatch.chdir(tmp_path)
        assert resolve_source("quakes") == "quakes"


class TestParseFeed:
    def test_rows_keyed_by_header(self):
        rows = parse_feed(SAMPLE_CSV)
        assert len(rows) == 4
        assert rows[0]["id"] == "ak0241"
        assert rows[0]["place"] == "15 km N of Anchorage, Alaska"

    @pytest.mark.parametrize("payload", ["", "   \n\n"])
    def test_empty_payload(self, payload):
        with pytest.raises(IngestionFailure, match="empty payload"):
            parse_feed(payload)

    def test_missing_required_columns(self):
        with pytest.raises(IngestionFailure, match="missing columns: mag"):
            parse_feed("<html><body>Not Found</body></html>\n")

    def test_header_only(self):
        assert parse_feed("id,mag,depth,latitude,longitude,place,time,gap,rms\n") == []


class TestFetchFeed:
    def test_http_fetch(self, httpx_mock):
        httpx_mock.add_response(url=FEED_URL, text=SAMPLE_CSV)
        assert fetch_feed(FEED_URL) == SAMPLE_CSV

    def test_http_error_status(self, httpx_mock):
        httpx_mock.add_response(url=FEED_URL, status_code=500)
        with pytest.raises(IngestionFailure, match="HTTP 500") as exc_info:
            fetch_feed(FEED_URL)
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_transport_error(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=FEED_URL)
        with pytest.raises(IngestionFailure, match="request failed"):
            fetch_feed(FEED_URL)

    def test_local_file(self, tmp_path):
        path = tmp_path / "all_month.csv"
        path.write_text(SAMPLE_CSV, encoding="utf-8")
        assert fetch_feed(str(path)) == SAMPLE_CSV

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestionFailure, match="cannot read file"):
            fetch_feed(str(tmp_path / "nope.csv"))


class TestLoadRecords:
    def test_normalizes_and_drops_bad_rows(self, httpx_mock):
        httpx_mock.add_response(url=FEED_URL, text=SAMPLE_CSV)
        records = load_records(FEED_URL)
        assert [r.id for r in records] == ["ak0241", "ci4001", "us9001"]

    def test_optional_fields(self, httpx_mock):
        httpx_mock.add_response(url=FEED_URL, text=SAMPLE_CSV)
        records = {r.id: r for r in load_records(FEED_URL)}
        assert records["ak0241"].gap == 45.0
        assert records["ci4001"].gap == 0.0
        assert records["us9001"].gap == 0.0
        assert records["us9001"].rms == 0.0

    def test_failure_yields_no_records(self, httpx_mock):
        httpx_mock.add_response(url=FEED_URL, status_code=404)
        with pytest.raises(IngestionFailure):
            load_records(FEED_URL)

    def test_error_carries_source(self, tmp_path):
        missing = str(tmp_path / "missing.csv")
        with pytest.raises(IngestionFailure) as exc_info:
            load_records(missing)
        assert exc_info.value.source == missing

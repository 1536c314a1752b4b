"""Tests for the fetch and build Prefect flows."""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path
from typing import Any
from unittest.mock import Mock, patch

import pytest

from weather_series.datasources.forecast import ForecastCache
from weather_series.errors import RateLimitError
from weather_series.flows import build, fetch
from weather_series.loader import LoadState
from weather_series.prefs import Preferences, PreferenceStore
from weather_series.reference.cities import get_city
from weather_series.schemas import Period
from weather_series.store import DataStore

TOKYO = get_city("tokyo")


def _ok(payload: dict[str, Any]) -> Mock:
    resp = Mock()
    resp.status_code = 200
    resp.ok = True
    resp.json.return_value = payload
    return resp


class TestSummarize:
    def test_counts(self, forecast_response: dict[str, Any]) -> None:
        state = LoadState(token=1, response=forecast_response)
        assert fetch.summarize(state) == {"hourly_points": 72, "daily_points": 3}

    def test_error(self) -> None:
        state = LoadState(token=1, error=RateLimitError())
        assert fetch.summarize(state) == {
            "error": "Too many requests. Please wait a moment and try again."
        }

    def test_partial_response(self) -> None:
        state = LoadState(token=1, response={"hourly": None})
        assert fetch.summarize(state) == {"hourly_points": 0, "daily_points": 0}


class TestFetchFlow:
    """The fetch flow loads through the cache into the store."""

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_fetch_caches_response(
        self,
        mock_get: Mock,
        forecast_response: dict[str, Any],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        ds = DataStore(tmp_path)
        monkeypatch.setattr(fetch, "store", ds)
        mock_get.return_value = _ok(forecast_response)

        result = fetch.fetch_forecast_flow()

        assert result == {"city": "tokyo", "period": "7d", "hourly_points": 72, "daily_points": 3}
        assert ForecastCache(ds).get(TOKYO.lat, TOKYO.lon, Period.DAILY_7D) == forecast_response

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_fetch_uses_arguments_over_prefs(
        self,
        mock_get: Mock,
        forecast_response: dict[str, Any],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(fetch, "store", DataStore(tmp_path))
        mock_get.return_value = _ok(forecast_response)

        result = fetch.fetch_forecast_flow(city_id="naha", period=Period.HOURLY_48H)

        assert result["city"] == "naha"
        assert result["period"] == "48h"
        params = mock_get.call_args.kwargs["params"]
        assert params["latitude"] == get_city("naha").lat
        assert params["forecast_days"] == 3

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_fetch_requests_reference_timezone(
        self,
        mock_get: Mock,
        forecast_response: dict[str, Any],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(fetch, "store", DataStore(tmp_path))
        monkeypatch.setattr(
            fetch, "settings", fetch.settings.model_copy(update={"reference_timezone": "UTC"})
        )
        mock_get.return_value = _ok(forecast_response)

        fetch.fetch_forecast_flow()

        assert mock_get.call_args.kwargs["params"]["timezone"] == "UTC"

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_fetch_error_is_reported(
        self, mock_get: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(fetch, "store", DataStore(tmp_path))
        resp = Mock()
        resp.status_code = 429
        resp.ok = False
        mock_get.return_value = resp

        result = fetch.fetch_forecast_flow()

        assert result["error"].startswith("Too many requests")
        assert mock_get.call_count == 1


class TestChartTitle:
    def test_single_metric(self) -> None:
        assert build.chart_title(Preferences()) == "Tokyo - Temperature (7 days)"

    def test_several_metrics(self) -> None:
        prefs = Preferences("osaka", ("precipitation", "windspeed_10m"), Period.HOURLY_48H)
        assert build.chart_title(prefs) == "Osaka - 2 metrics (48 hours)"


class TestWriteSite:
    def test_write_site(self, tmp_path: Path) -> None:
        site_dir = tmp_path / "site"
        result = build.write_site("<html><body>Test</body></html>", site_dir)
        assert result == site_dir / "index.html"
        assert result.read_text() == "<html><body>Test</body></html>"
        assert not (site_dir / "chart.json").exists()


class TestBuildFlow:
    """The build flow renders the cached forecast for the saved preferences."""

    @pytest.fixture
    def site(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[DataStore, Path]:
        ds = DataStore(tmp_path / "data")
        site_dir = tmp_path / "site"
        monkeypatch.setattr(build, "store", ds)
        monkeypatch.setattr(build, "SITE_DIR", site_dir)
        monkeypatch.setattr(build, "today_in_reference_zone", lambda *_args: "2026-10-17")
        return ds, site_dir

    def test_no_cached_forecast(self, site: tuple[DataStore, Path]) -> None:
        _, site_dir = site
        result = build.build_chart_flow()
        assert result["error"] == build.NO_DATA_MESSAGE
        page = (site_dir / "index.html").read_text()
        assert 'role="alert"' in page

    def test_fetch_error_page(
        self, site: tuple[DataStore, Path], forecast_response: dict[str, Any]
    ) -> None:
        ds, site_dir = site
        ForecastCache(ds).put(TOKYO.lat, TOKYO.lon, Period.DAILY_7D, forecast_response)

        result = build.build_chart_flow(fetch_error="The connection timed out.")

        assert result["error"] == "The connection timed out."
        assert "The connection timed out." in (site_dir / "index.html").read_text()

    def test_builds_daily_page(
        self, site: tuple[DataStore, Path], forecast_response: dict[str, Any]
    ) -> None:
        ds, site_dir = site
        ForecastCache(ds).put(TOKYO.lat, TOKYO.lon, Period.DAILY_7D, forecast_response)

        result = build.build_chart_flow()

        # 10/16 is before today and is filtered out
        assert result["points"] == 2
        assert result["series_units"] == {"Max temperature": "°C", "Min temperature": "°C"}
        page = (site_dir / "index.html").read_text()
        assert "Tokyo - Temperature (7 days)" in page
        assert "Today (10/17)" in page
        assert "10/16" not in page

        payload = json.loads((site_dir / "chart.json").read_text())
        assert payload["period"] == "7d"
        assert [p["timestamp"] for p in payload["points"]] == ["2026-10-17", "2026-10-18"]
        assert payload["points"][0]["values"] == {"Max temperature": 22.0, "Min temperature": 12.0}

    def test_expired_cache_still_renders(
        self, site: tuple[DataStore, Path], forecast_response: dict[str, Any]
    ) -> None:
        ds, _ = site
        ForecastCache(ds, ttl=timedelta(minutes=-1)).put(
            TOKYO.lat, TOKYO.lon, Period.DAILY_7D, forecast_response
        )
        assert "error" not in build.build_chart_flow()

    def test_empty_response_is_empty_state(self, site: tuple[DataStore, Path]) -> None:
        ds, site_dir = site
        ForecastCache(ds).put(TOKYO.lat, TOKYO.lon, Period.DAILY_7D, {})

        result = build.build_chart_flow()

        assert "error" not in result
        assert result["points"] == 0
        page = (site_dir / "index.html").read_text()
        assert "No data to display." in page
        assert 'role="alert"' not in page

    def test_uses_saved_units(
        self, site: tuple[DataStore, Path], forecast_response: dict[str, Any]
    ) -> None:
        ds, site_dir = site
        PreferenceStore(ds).update(
            metric_ids=["windspeed_10m", "precipitation"], temp_unit="F", wind_unit="m/s"
        )
        ForecastCache(ds).put(TOKYO.lat, TOKYO.lon, Period.DAILY_7D, forecast_response)

        result = build.build_chart_flow()

        assert result["series_units"] == {"Wind speed": "m/s", "Precipitation": "mm"}
        payload = json.loads((site_dir / "chart.json").read_text())
        # 36 km/h -> 10 m/s; negative precipitation kept raw in data, clamped on display
        assert payload["points"][0]["values"]["Wind speed"] == 10.0
        assert payload["points"][1]["values"]["Precipitation"] == -0.1
        assert "-0.1" not in (site_dir / "index.html").read_text()

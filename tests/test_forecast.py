"""Tests for the Open-Meteo forecast client and response cache."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from weather_series.datasources.forecast import ForecastCache, build_params, cache_path, fetch_forecast
from weather_series.errors import ForecastTimeoutError, RateLimitError, TransportError
from weather_series.schemas import Period
from weather_series.store import DataStore


def _response(status: int = 200, payload: object = None, text: str = "") -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.text = text
    resp.reason = "Reason"
    resp.json.return_value = payload if payload is not None else {"hourly": {"time": []}}
    return resp


class TestBuildParams:
    def test_daily_window(self) -> None:
        params = build_params(35.6762, 139.6503, Period.DAILY_7D)
        assert params["forecast_days"] == 7
        assert params["timezone"] == "Asia/Tokyo"
        assert params["hourly"] == "temperature_2m,apparent_temperature,precipitation,windspeed_10m"
        assert params["daily"] == (
            "temperature_2m_max,temperature_2m_min,precipitation_sum,windspeed_10m_max"
        )

    def test_hourly_window_requests_three_days(self) -> None:
        assert build_params(0, 0, Period.HOURLY_48H)["forecast_days"] == 3

    def test_timezone_override(self) -> None:
        assert build_params(0, 0, Period.DAILY_7D, timezone="UTC")["timezone"] == "UTC"


class TestFetchForecast:
    """HTTP status and transport errors map to the error taxonomy."""

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_success(self, mock_get: Mock) -> None:
        payload = {"daily": {"time": ["2026-10-17"], "precipitation_sum": [1.0]}}
        mock_get.return_value = _response(payload=payload)

        result = fetch_forecast(35.6762, 139.6503, Period.DAILY_7D)

        assert result == payload
        mock_get.assert_called_once()
        call_kwargs = mock_get.call_args.kwargs
        assert call_kwargs["params"]["latitude"] == 35.6762
        assert call_kwargs["params"]["longitude"] == 139.6503
        assert call_kwargs["timeout"] == 10

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_timezone_passed_through(self, mock_get: Mock) -> None:
        mock_get.return_value = _response()
        fetch_forecast(0, 0, Period.HOURLY_48H, timezone="Europe/Paris")
        assert mock_get.call_args.kwargs["params"]["timezone"] == "Europe/Paris"

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_rate_limited(self, mock_get: Mock) -> None:
        mock_get.return_value = _response(status=429)
        with pytest.raises(RateLimitError) as exc_info:
            fetch_forecast(0, 0)
        assert exc_info.value.status_code == 429
        assert "Too many requests" in exc_info.value.message

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_server_error(self, mock_get: Mock) -> None:
        mock_get.return_value = _response(status=503, text="maintenance")
        with pytest.raises(TransportError) as exc_info:
            fetch_forecast(0, 0)
        assert not isinstance(exc_info.value, RateLimitError)
        assert exc_info.value.status_code == 503
        assert "(503)" in exc_info.value.message
        assert "maintenance" in exc_info.value.message

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_timeout(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.Timeout("slow")
        with pytest.raises(ForecastTimeoutError):
            fetch_forecast(0, 0)

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_connection_error(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(TransportError) as exc_info:
            fetch_forecast(0, 0)
        assert exc_info.value.status_code is None
        assert exc_info.value.retryable is True

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_unreadable_body(self, mock_get: Mock) -> None:
        resp = _response()
        resp.json.side_effect = ValueError("no json")
        mock_get.return_value = resp
        with pytest.raises(TransportError, match="unreadable"):
            fetch_forecast(0, 0)

    @patch("weather_series.datasources.forecast.forecast.session.get")
    def test_partial_body_is_not_an_error(self, mock_get: Mock) -> None:
        mock_get.return_value = _response(payload={"latitude": 1.0})
        assert fetch_forecast(0, 0) == {"latitude": 1.0}


class TestForecastCache:
    """Minutes-long cache keyed by rounded coordinates and period."""

    def test_cache_path_rounds_coordinates(self) -> None:
        assert cache_path(35.67621234, 139.65, Period.DAILY_7D) == Path(
            "live/forecast/35.6762_139.6500_7d.json"
        )

    def test_put_then_get(self, tmp_path: Path) -> None:
        cache = ForecastCache(DataStore(tmp_path))
        cache.put(35.6762, 139.6503, Period.HOURLY_48H, {"hourly": {"time": ["t"]}})
        assert cache.get(35.6762, 139.6503, Period.HOURLY_48H) == {"hourly": {"time": ["t"]}}

    def test_keyed_by_period(self, tmp_path: Path) -> None:
        cache = ForecastCache(DataStore(tmp_path))
        cache.put(1.0, 2.0, Period.HOURLY_48H, {"a": 1})
        assert cache.get(1.0, 2.0, Period.DAILY_7D) is None

    def test_expired_entry(self, tmp_path: Path) -> None:
        cache = ForecastCache(DataStore(tmp_path), ttl=timedelta(minutes=5))
        cache.put(1.0, 2.0, Period.DAILY_7D, {"a": 1})
        later = datetime.now(UTC) + timedelta(minutes=6)
        assert cache.get(1.0, 2.0, Period.DAILY_7D, now=later) is None

    def test_miss(self, tmp_path: Path) -> None:
        assert ForecastCache(DataStore(tmp_path)).get(1.0, 2.0, Period.DAILY_7D) is None

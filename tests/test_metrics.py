"""Tests for the reference catalogs (metrics, cities, options)."""

from __future__ import annotations

import pytest

from weather_series.reference.cities import CITIES, DEFAULT_CITY, get_city
from weather_series.reference.metrics import (
    LABEL_TO_METRIC,
    MAX_TEMPERATURE_LABEL,
    METRICS,
    MIN_TEMPERATURE_LABEL,
    MetricId,
    daily_fields,
    get_metric,
    hourly_fields,
)
from weather_series.reference.options import FORECAST_DAYS, PERIOD_OPTIONS, START_DATE_LABEL
from weather_series.schemas import Period


class TestMetricCatalog:
    def test_closed_catalog(self) -> None:
        assert set(METRICS) == {
            MetricId.TEMPERATURE,
            MetricId.APPARENT_TEMPERATURE,
            MetricId.PRECIPITATION,
            MetricId.WIND_SPEED,
        }

    def test_catalog_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            METRICS["humidity"] = None  # type: ignore[index]

    def test_get_metric(self) -> None:
        metric = get_metric("windspeed_10m")
        assert metric is not None
        assert metric.label == "Wind speed"
        assert metric.daily_field == "windspeed_10m_max"
        assert get_metric("humidity") is None

    def test_temperature_has_daily_pair(self) -> None:
        metric = METRICS[MetricId.TEMPERATURE]
        assert metric.daily_pair == ("temperature_2m_max", "temperature_2m_min")

    def test_apparent_temperature_has_no_daily_field(self) -> None:
        metric = METRICS[MetricId.APPARENT_TEMPERATURE]
        assert metric.daily_field is None
        assert metric.daily_pair is None


class TestLabelIndex:
    def test_every_series_name_maps_back(self) -> None:
        assert LABEL_TO_METRIC["Temperature"] == MetricId.TEMPERATURE
        assert LABEL_TO_METRIC[MAX_TEMPERATURE_LABEL] == MetricId.TEMPERATURE
        assert LABEL_TO_METRIC[MIN_TEMPERATURE_LABEL] == MetricId.TEMPERATURE
        assert LABEL_TO_METRIC["Apparent temperature"] == MetricId.APPARENT_TEMPERATURE
        assert LABEL_TO_METRIC["Precipitation"] == MetricId.PRECIPITATION
        assert LABEL_TO_METRIC["Wind speed"] == MetricId.WIND_SPEED


class TestRequestFields:
    def test_hourly(self) -> None:
        assert hourly_fields() == [
            "temperature_2m",
            "apparent_temperature",
            "precipitation",
            "windspeed_10m",
        ]

    def test_daily(self) -> None:
        assert daily_fields() == [
            "temperature_2m_max",
            "temperature_2m_min",
            "precipitation_sum",
            "windspeed_10m_max",
        ]


class TestCities:
    def test_five_cities(self) -> None:
        assert [c.id for c in CITIES] == ["tokyo", "osaka", "sapporo", "fukuoka", "naha"]

    def test_lookup_and_fallback(self) -> None:
        assert get_city("sapporo").name == "Sapporo"
        assert get_city("nowhere") == DEFAULT_CITY
        assert DEFAULT_CITY.id == "tokyo"


class TestOptions:
    def test_period_options(self) -> None:
        assert PERIOD_OPTIONS[Period.HOURLY_48H] == "48 hours"
        assert PERIOD_OPTIONS[Period.DAILY_7D] == "7 days"
        assert FORECAST_DAYS[Period.HOURLY_48H] == 3
        assert FORECAST_DAYS[Period.DAILY_7D] == 7

    def test_single_start_option(self) -> None:
        assert START_DATE_LABEL == "Today (from now)"

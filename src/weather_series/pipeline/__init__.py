"""Forecast -> chart data pipeline.

Pure and synchronous; every stage returns new values:

    raw response
      -> normalize (per metric)     pipeline/normalize.py
      -> merge (by timestamp)       pipeline/merge.py
      -> filter_from (today on)     pipeline/dates.py
      -> apply_units                pipeline/convert.py
      -> ConvertedChart

Malformed or partial responses degrade to empty/partial series; nothing in
the pipeline raises for bad data.

Public API:
  - build_chart_data: run the whole pipeline
  - normalize, merge, filter_from, apply_units: individual stages
  - convert_temperature, convert_wind, display_unit_for, clamp_precipitation
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from weather_series.pipeline.convert import ConvertedChart, apply_units
from weather_series.pipeline.dates import filter_from, today_in_reference_zone
from weather_series.pipeline.merge import merge
from weather_series.pipeline.normalize import normalize
from weather_series.pipeline.units import (
    clamp_precipitation,
    convert_temperature,
    convert_wind,
    display_unit_for,
)
from weather_series.reference.metrics import DEFAULT_METRIC
from weather_series.schemas import Period, TempUnit, WindUnit

logger = logging.getLogger(__name__)


def selected_or_default(metric_ids: Sequence[str]) -> list[str]:
    """Never hand an empty selection to the merger."""
    return list(metric_ids) if metric_ids else [str(DEFAULT_METRIC)]


def build_chart_data(
    response: dict[str, Any] | None,
    metric_ids: Sequence[str],
    period: Period,
    temp_unit: TempUnit = TempUnit.CELSIUS,
    wind_unit: WindUnit = WindUnit.KMH,
    reference_date: str | None = None,
) -> ConvertedChart:
    """
    Turn a raw forecast response into chart-ready, unit-converted data.

    Args:
        response: Decoded Open-Meteo forecast JSON (may be partial).
        metric_ids: Selected metrics; empty means the default metric.
        period: 48h hourly or 7d daily window.
        temp_unit: Temperature display unit.
        wind_unit: Wind display unit.
        reference_date: ``YYYY-MM-DD`` "today"; computed in the reference
            zone when omitted.

    Returns:
        ConvertedChart with points and the series -> unit table.
    """
    metrics = selected_or_default(metric_ids)
    today = reference_date or today_in_reference_zone()

    merged = merge(response, metrics, period)
    current = filter_from(merged, today)
    logger.debug(
        "chart data: %d merged, %d from %s, metrics=%s, period=%s",
        len(merged),
        len(current),
        today,
        metrics,
        period,
    )
    return apply_units(current, metrics, temp_unit, wind_unit)


__all__ = [
    "ConvertedChart",
    "apply_units",
    "build_chart_data",
    "clamp_precipitation",
    "convert_temperature",
    "convert_wind",
    "display_unit_for",
    "filter_from",
    "merge",
    "normalize",
    "selected_or_default",
    "today_in_reference_zone",
]

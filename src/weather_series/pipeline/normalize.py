"""Normalize one metric of a raw Open-Meteo response into chart points.

Open-Meteo returns separate ``hourly`` and ``daily`` blocks, each with a
shared ``time`` array and one parallel array per variable. Not every metric
has a daily aggregate, so the 7-day window needs three strategies:

  - temperature: daily max/min pair -> two series
  - precipitation, wind speed: single daily field -> one series
  - apparent temperature: no daily field -> first hourly reading per day

Short arrays and explicit nulls are both treated as a missing value.
Nothing here raises on malformed input; missing data yields empty or
partial output.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from weather_series.reference.metrics import (
    MAX_TEMPERATURE_LABEL,
    MIN_TEMPERATURE_LABEL,
    MetricDescriptor,
    get_metric,
)
from weather_series.schemas import ChartPoint, Period

HOURLY_POINT_LIMIT = 48
DAILY_POINT_LIMIT = 7


def format_label(timestamp: str, period: Period) -> str:
    """Display label: ``M/D H:00`` for hourly points, ``M/D`` for daily."""
    try:
        dt = datetime.fromisoformat(timestamp)
    except (TypeError, ValueError):
        return str(timestamp)
    if period == Period.HOURLY_48H:
        return f"{dt.month}/{dt.day} {dt.hour}:00"
    return f"{dt.month}/{dt.day}"


def _block(response: dict[str, Any] | None, name: str) -> dict[str, Any] | None:
    if not isinstance(response, dict):
        return None
    block = response.get(name)
    return block if isinstance(block, dict) else None


def _series(block: dict[str, Any], field: str) -> list[Any]:
    values = block.get(field)
    return values if isinstance(values, list) else []


def _value_at(values: list[Any], i: int) -> float | None:
    if i >= len(values):
        return None
    v = values[i]
    if isinstance(v, bool) or not isinstance(v, int | float):
        return None
    return v


def _hourly_points(hourly: dict[str, Any], metric: MetricDescriptor) -> list[ChartPoint]:
    times = _series(hourly, "time")[:HOURLY_POINT_LIMIT]
    values = _series(hourly, metric.hourly_field)
    return [
        ChartPoint(
            timestamp=t,
            label=format_label(t, Period.HOURLY_48H),
            values={metric.label: _value_at(values, i)},
        )
        for i, t in enumerate(times)
        if isinstance(t, str)
    ]


def _daily_pair_points(daily: dict[str, Any], pair: tuple[str, str]) -> list[ChartPoint]:
    max_field, min_field = pair
    maxes = _series(daily, max_field)
    mins = _series(daily, min_field)
    return [
        ChartPoint(
            timestamp=t,
            label=format_label(t, Period.DAILY_7D),
            values={
                MAX_TEMPERATURE_LABEL: _value_at(maxes, i),
                MIN_TEMPERATURE_LABEL: _value_at(mins, i),
            },
        )
        for i, t in enumerate(_series(daily, "time"))
        if isinstance(t, str)
    ]


def _daily_single_points(
    daily: dict[str, Any], field: str, metric: MetricDescriptor
) -> list[ChartPoint]:
    values = _series(daily, field)
    return [
        ChartPoint(
            timestamp=t,
            label=format_label(t, Period.DAILY_7D),
            values={metric.label: _value_at(values, i)},
        )
        for i, t in enumerate(_series(daily, "time"))
        if isinstance(t, str)
    ]


def _daily_from_hourly(hourly: dict[str, Any], metric: MetricDescriptor) -> list[ChartPoint]:
    """One point per calendar day, taken from the first hourly reading of that day.

    The point's timestamp is the ``YYYY-MM-DD`` day so it lines up with
    genuine daily series when merged.
    """
    values = _series(hourly, metric.hourly_field)
    points: list[ChartPoint] = []
    current_day = ""
    for i, t in enumerate(_series(hourly, "time")):
        if not isinstance(t, str):
            continue
        day = t[:10]
        if day == current_day:
            continue
        current_day = day
        points.append(
            ChartPoint(
                timestamp=day,
                label=format_label(t, Period.DAILY_7D),
                values={metric.label: _value_at(values, i)},
            )
        )
        if len(points) == DAILY_POINT_LIMIT:
            break
    return points


def normalize(response: dict[str, Any] | None, metric_id: str, period: Period) -> list[ChartPoint]:
    """
    Convert one metric of a forecast response into an aligned point sequence.

    Args:
        response: Decoded Open-Meteo forecast JSON.
        metric_id: One of the catalog metric ids.
        period: 48-hour hourly window or 7-day daily window.

    Returns:
        Chart points in response order. Empty if the metric is unknown or
        the block for ``period`` is absent.
    """
    metric = get_metric(metric_id)
    if metric is None:
        return []

    hourly = _block(response, "hourly")
    daily = _block(response, "daily")

    if period == Period.HOURLY_48H:
        return _hourly_points(hourly, metric) if hourly is not None else []

    if daily is None:
        return []
    if metric.daily_pair is not None:
        return _daily_pair_points(daily, metric.daily_pair)
    if metric.daily_field is not None:
        return _daily_single_points(daily, metric.daily_field, metric)
    if hourly is not None:
        return _daily_from_hourly(hourly, metric)
    return []

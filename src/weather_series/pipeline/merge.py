"""Merge several metrics' normalized series into one chart sequence."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from weather_series.pipeline.normalize import normalize
from weather_series.schemas import ChartPoint, Period


def merge_points(series: Sequence[Sequence[ChartPoint]]) -> list[ChartPoint]:
    """Combine point sequences by timestamp.

    Points sharing a timestamp get the union of their ``values``. A series
    with no point at some timestamp simply has no key there; no null is
    filled in. Output is sorted ascending by timestamp string.
    """
    by_time: dict[str, ChartPoint] = {}
    for points in series:
        for p in points:
            existing = by_time.get(p.timestamp)
            if existing is None:
                by_time[p.timestamp] = ChartPoint(p.timestamp, p.label, dict(p.values))
            else:
                by_time[p.timestamp] = ChartPoint(
                    existing.timestamp, existing.label, {**existing.values, **p.values}
                )
    return [by_time[t] for t in sorted(by_time)]


def merge(
    response: dict[str, Any] | None,
    metric_ids: Sequence[str],
    period: Period,
) -> list[ChartPoint]:
    """
    Normalize each selected metric and merge the results.

    A single metric is returned as normalized, without going through the
    merge step.
    """
    if not metric_ids:
        return []
    if len(metric_ids) == 1:
        return normalize(response, metric_ids[0], period)
    return merge_points([normalize(response, m, period) for m in metric_ids])

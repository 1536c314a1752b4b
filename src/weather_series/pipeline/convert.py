"""Apply unit conversion across merged chart points."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from weather_series.pipeline.units import convert_value, display_unit_for
from weather_series.reference.metrics import DEFAULT_METRIC, LABEL_TO_METRIC
from weather_series.schemas import ChartPoint, TempUnit, WindUnit


@dataclass(frozen=True)
class ConvertedChart:
    """Converted points plus the unit label for every series seen."""

    data: list[ChartPoint] = field(default_factory=list)
    series_units: dict[str, str] = field(default_factory=dict)


def metric_for_series(series_name: str, metric_ids: Sequence[str]) -> str:
    """Map a series name back to its metric id.

    Unknown names fall back to the first selected metric.
    """
    metric_id = LABEL_TO_METRIC.get(series_name)
    if metric_id is not None:
        return metric_id
    return metric_ids[0] if metric_ids else DEFAULT_METRIC


def apply_units(
    points: Sequence[ChartPoint],
    metric_ids: Sequence[str],
    temp_unit: TempUnit,
    wind_unit: WindUnit,
) -> ConvertedChart:
    """Convert every value to the selected units and collect series units."""
    if not points:
        return ConvertedChart()

    series_units: dict[str, str] = {}
    converted: list[ChartPoint] = []
    for p in points:
        values: dict[str, float | None] = {}
        for name, v in p.values.items():
            metric_id = metric_for_series(name, metric_ids)
            series_units[name] = display_unit_for(metric_id, temp_unit, wind_unit)
            values[name] = convert_value(metric_id, v, temp_unit, wind_unit)
        converted.append(ChartPoint(p.timestamp, p.label, values))
    return ConvertedChart(data=converted, series_units=series_units)

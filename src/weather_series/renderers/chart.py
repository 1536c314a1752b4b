"""Forecast chart renderer.

Draws the converted chart points as an inline SVG line chart (one polyline
per series) plus a data table. Precipitation is clamped at zero wherever a
value is read for display: the axis range, the point tooltips and the
plotted/tabulated values all go through ``display_value``.
"""

from __future__ import annotations

from collections.abc import Sequence

from weather_series.pipeline.units import clamp_precipitation
from weather_series.reference.metrics import LABEL_TO_METRIC, MetricId
from weather_series.reference.options import PERIOD_OPTIONS
from weather_series.renderers import render_template
from weather_series.schemas import ChartPoint, Period

# Hue-separated series colors (blue, purple, green, orange)
COLORS = ["#007AFF", "#AF52DE", "#34C759", "#FF9F0A"]

WIDTH = 640
HEIGHT = 260
PAD_X = 48
PAD_Y = 24


def series_names(points: Sequence[ChartPoint]) -> list[str]:
    """Every series key seen, in first-seen order."""
    names: list[str] = []
    for p in points:
        for name in p.values:
            if name not in names:
                names.append(name)
    return names


def display_value(name: str, value: float | None) -> float | None:
    """Value as shown to the user; precipitation never goes below zero."""
    if LABEL_TO_METRIC.get(name) == MetricId.PRECIPITATION:
        return clamp_precipitation(value)
    return value


def _format_value(value: float | None, unit: str) -> str:
    if value is None:
        return "—"
    return f"{value:g} {unit}".strip()


def _y_range(points: Sequence[ChartPoint], names: list[str]) -> tuple[float, float]:
    values = [
        v
        for p in points
        for name in names
        if (v := display_value(name, p.values.get(name))) is not None
    ]
    if not values:
        return 0.0, 1.0
    lo, hi = min(values), max(values)
    if lo == hi:
        return lo - 1, hi + 1
    return lo, hi


def _build_series(
    points: Sequence[ChartPoint],
    names: list[str],
    series_units: dict[str, str],
) -> list[dict[str, object]]:
    """Polyline segments and markers per series, in SVG coordinates."""
    y_min, y_max = _y_range(points, names)
    n = len(points)
    step = (WIDTH - 2 * PAD_X) / max(n - 1, 1)

    def x_at(i: int) -> float:
        return PAD_X + i * step

    def y_at(v: float) -> float:
        return HEIGHT - PAD_Y - (v - y_min) / (y_max - y_min) * (HEIGHT - 2 * PAD_Y)

    series = []
    for idx, name in enumerate(names):
        unit = series_units.get(name, "")
        segments: list[str] = []
        current: list[str] = []
        markers = []
        for i, p in enumerate(points):
            v = display_value(name, p.values.get(name))
            if v is None:
                # Gap in the line for missing data
                if current:
                    segments.append(" ".join(current))
                    current = []
                continue
            x, y = x_at(i), y_at(v)
            current.append(f"{x:.1f},{y:.1f}")
            markers.append(
                {"x": f"{x:.1f}", "y": f"{y:.1f}", "title": f"{p.label} {name}: {_format_value(v, unit)}"}
            )
        if current:
            segments.append(" ".join(current))
        series.append(
            {
                "name": name,
                "unit": unit,
                "color": COLORS[idx % len(COLORS)],
                "segments": segments,
                "markers": markers,
            }
        )
    return series


def build_chart_html(
    points: Sequence[ChartPoint],
    period: Period,
    series_units: dict[str, str],
    from_date: str,
    title: str = "",
) -> str:
    """
    Build the chart fragment for converted chart points.

    Args:
        points: Unit-converted points from the pipeline.
        period: Window the points belong to.
        series_units: Series name -> unit label.
        from_date: Display text for the first day shown.
        title: Heading, e.g. ``Tokyo - Temperature (7 days)``.

    Returns:
        HTML fragment. With no points this is the empty state with a
        refresh hint rather than an error.
    """
    names = series_names(points)
    y_min, y_max = _y_range(points, names)
    single_unit = series_units.get(names[0], "") if len(names) == 1 else None

    rows = [
        {
            "label": p.label,
            "cells": [
                _format_value(display_value(name, p.values.get(name)), series_units.get(name, ""))
                for name in names
            ],
        }
        for p in points
    ]

    return render_template(
        "chart.html.j2",
        title=title,
        period_label=PERIOD_OPTIONS[period],
        from_date=from_date,
        empty=not points,
        width=WIDTH,
        height=HEIGHT,
        pad_x=PAD_X,
        pad_y=PAD_Y,
        y_max_label=_format_value(round(y_max, 1), single_unit or ""),
        y_min_label=_format_value(round(y_min, 1), single_unit or ""),
        first_label=points[0].label if points else "",
        last_label=points[-1].label if points else "",
        series=_build_series(points, names, series_units),
        names=names,
        units=[series_units.get(name, "") for name in names],
        rows=rows,
    )


def build_error_html(message: str) -> str:
    """Error fragment with a retry hint."""
    return render_template("error.html.j2", message=message)

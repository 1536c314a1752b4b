"""Unit conversion for chart values.

Pure functions, no I/O. Open-Meteo returns Celsius, km/h and millimetres;
everything else is derived here.
"""

from __future__ import annotations

import math

from weather_series.reference.metrics import TEMPERATURE_METRICS, MetricId
from weather_series.schemas import TempUnit, WindUnit


def _round_half_up(x: float) -> int:
    # Halves go up (2.5 -> 3, -2.5 -> -2), not to the nearest even integer
    return math.floor(x + 0.5)


def convert_temperature(celsius: float | None, unit: TempUnit) -> float | None:
    """Convert Celsius to ``unit``; Fahrenheit is rounded to a whole degree."""
    if celsius is None:
        return None
    if unit == TempUnit.FAHRENHEIT:
        return _round_half_up(celsius * 9 / 5 + 32)
    return celsius


def convert_wind(kmh: float | None, unit: WindUnit) -> float | None:
    """Convert km/h to ``unit``; m/s is rounded to one decimal place."""
    if kmh is None:
        return None
    if unit == WindUnit.MS:
        return _round_half_up(kmh / 3.6 * 10) / 10
    return kmh


def clamp_precipitation(mm: float | None) -> float | None:
    """Precipitation is never displayed below zero (upstream noise)."""
    if mm is None:
        return None
    return max(0.0, mm)


def display_unit_for(metric_id: str, temp_unit: TempUnit, wind_unit: WindUnit) -> str:
    """Unit label shown for a metric under the selected unit preferences."""
    if metric_id in TEMPERATURE_METRICS:
        return "°F" if temp_unit == TempUnit.FAHRENHEIT else "°C"
    if metric_id == MetricId.WIND_SPEED:
        return str(wind_unit)
    return "mm"


def convert_value(
    metric_id: str,
    value: float | None,
    temp_unit: TempUnit,
    wind_unit: WindUnit,
) -> float | None:
    """Convert one raw value according to the metric it belongs to."""
    if value is None:
        return None
    if metric_id in TEMPERATURE_METRICS:
        return convert_temperature(value, temp_unit)
    if metric_id == MetricId.WIND_SPEED:
        return convert_wind(value, wind_unit)
    return value

"""Shared fixtures: small Open-Meteo-shaped forecast responses."""

from __future__ import annotations

from typing import Any

import pytest


def hourly_times(days: list[str], hours: range = range(24)) -> list[str]:
    """ISO hourly timestamps for each day, e.g. ``2026-10-17T05:00``."""
    return [f"{d}T{h:02d}:00" for d in days for h in hours]


@pytest.fixture
def forecast_response() -> dict[str, Any]:
    """Three days of hourly data plus a three-day daily block."""
    days = ["2026-10-16", "2026-10-17", "2026-10-18"]
    times = hourly_times(days)
    n = len(times)
    return {
        "latitude": 35.68,
        "longitude": 139.69,
        "timezone": "Asia/Tokyo",
        "hourly": {
            "time": times,
            "temperature_2m": [float(i % 24) for i in range(n)],
            "apparent_temperature": [float(i % 24) - 1 for i in range(n)],
            "precipitation": [0.0] * n,
            "windspeed_10m": [36.0] * n,
        },
        "daily": {
            "time": days,
            "temperature_2m_max": [20.0, 22.0, 24.0],
            "temperature_2m_min": [10.0, 12.0, 14.0],
            "precipitation_sum": [0.0, 1.5, -0.1],
            "windspeed_10m_max": [18.0, 36.0, 54.0],
        },
    }

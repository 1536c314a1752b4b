"""
Domain models for weather series.

Enums for the user-selectable options, the chart point produced by the
pipeline, and the payload handed to the rendering surface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Period(StrEnum):
    """Requested window: 48 hourly points or 7 daily points."""

    HOURLY_48H = "48h"
    DAILY_7D = "7d"


class TempUnit(StrEnum):
    """Temperature display unit."""

    CELSIUS = "C"
    FAHRENHEIT = "F"


class WindUnit(StrEnum):
    """Wind speed display unit."""

    KMH = "km/h"
    MS = "m/s"


@dataclass(frozen=True)
class ChartPoint:
    """One timestamp's worth of values across all displayed series.

    ``timestamp`` is the raw ISO time (or ``YYYY-MM-DD`` for daily points)
    and is the only field used for ordering and filtering. ``label`` is
    display text.
    """

    timestamp: str
    label: str
    values: dict[str, float | None] = field(default_factory=dict)


class City(BaseModel):
    """A selectable city with Open-Meteo coordinates."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class ChartPayload(BaseModel):
    """Everything the rendering surface needs for one chart."""

    period: Period
    from_date: str
    series_units: dict[str, str] = Field(default_factory=dict)
    points: list[dict[str, object]] = Field(default_factory=list)

    @classmethod
    def from_points(
        cls,
        points: list[ChartPoint],
        period: Period,
        series_units: dict[str, str],
        from_date: str,
    ) -> ChartPayload:
        """Build a payload from pipeline output."""
        return cls(
            period=period,
            from_date=from_date,
            series_units=dict(series_units),
            points=[
                {"timestamp": p.timestamp, "label": p.label, "values": dict(p.values)}
                for p in points
            ],
        )

"""Closed catalog of chartable weather metrics.

Each metric names the Open-Meteo hourly field it is read from and, for the
7-day window, either a single daily aggregate field, a max/min pair, or
nothing (derived from hourly data).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class MetricId(StrEnum):
    """Metric identifiers (match the Open-Meteo hourly variable names)."""

    TEMPERATURE = "temperature_2m"
    APPARENT_TEMPERATURE = "apparent_temperature"
    PRECIPITATION = "precipitation"
    WIND_SPEED = "windspeed_10m"


@dataclass(frozen=True)
class MetricDescriptor:
    """Static description of one metric."""

    id: MetricId
    label: str
    base_unit: str
    hourly_field: str
    daily_field: str | None = None
    daily_pair: tuple[str, str] | None = None  # (max field, min field)


# Series names for the daily max/min temperature pair
MAX_TEMPERATURE_LABEL = "Max temperature"
MIN_TEMPERATURE_LABEL = "Min temperature"

METRICS: MappingProxyType[MetricId, MetricDescriptor] = MappingProxyType(
    {
        MetricId.TEMPERATURE: MetricDescriptor(
            id=MetricId.TEMPERATURE,
            label="Temperature",
            base_unit="°C",
            hourly_field="temperature_2m",
            daily_pair=("temperature_2m_max", "temperature_2m_min"),
        ),
        MetricId.APPARENT_TEMPERATURE: MetricDescriptor(
            id=MetricId.APPARENT_TEMPERATURE,
            label="Apparent temperature",
            base_unit="°C",
            hourly_field="apparent_temperature",
        ),
        MetricId.PRECIPITATION: MetricDescriptor(
            id=MetricId.PRECIPITATION,
            label="Precipitation",
            base_unit="mm",
            hourly_field="precipitation",
            daily_field="precipitation_sum",
        ),
        MetricId.WIND_SPEED: MetricDescriptor(
            id=MetricId.WIND_SPEED,
            label="Wind speed",
            base_unit="km/h",
            hourly_field="windspeed_10m",
            daily_field="windspeed_10m_max",
        ),
    }
)

DEFAULT_METRIC = MetricId.TEMPERATURE

TEMPERATURE_METRICS = frozenset({MetricId.TEMPERATURE, MetricId.APPARENT_TEMPERATURE})


def _build_label_index() -> MappingProxyType[str, MetricId]:
    index: dict[str, MetricId] = {}
    for metric in METRICS.values():
        index[metric.label] = metric.id
        if metric.daily_pair is not None:
            index[MAX_TEMPERATURE_LABEL] = metric.id
            index[MIN_TEMPERATURE_LABEL] = metric.id
    return MappingProxyType(index)


#: Series name -> metric id, for mapping merged chart keys back to units.
LABEL_TO_METRIC = _build_label_index()


def get_metric(metric_id: str) -> MetricDescriptor | None:
    """Return the descriptor for ``metric_id``, or None if unknown."""
    try:
        return METRICS[MetricId(metric_id)]
    except ValueError:
        return None


def hourly_fields() -> list[str]:
    """Hourly variables to request from Open-Meteo."""
    return [m.hourly_field for m in METRICS.values()]


def daily_fields() -> list[str]:
    """Daily variables to request from Open-Meteo."""
    fields: list[str] = []
    for m in METRICS.values():
        if m.daily_pair is not None:
            fields.extend(m.daily_pair)
        elif m.daily_field is not None:
            fields.append(m.daily_field)
    return fields

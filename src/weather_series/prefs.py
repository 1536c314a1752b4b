"""User preferences: city, metrics, period and units.

Preferences are stored as a small JSON object in the DataStore. Loading
never fails: each field is checked by its own ``ensure_*`` function and
anything missing, unknown or malformed is replaced by the default.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from weather_series.reference.cities import CITIES_BY_ID, DEFAULT_CITY
from weather_series.reference.metrics import DEFAULT_METRIC, METRICS
from weather_series.schemas import Period, TempUnit, WindUnit

if TYPE_CHECKING:
    from weather_series.store import DataStore

PREFS_PATH = Path("state/prefs.json")

_VALID_METRIC_IDS = frozenset(str(m) for m in METRICS)


@dataclass(frozen=True)
class Preferences:
    """Validated user preferences."""

    city_id: str = DEFAULT_CITY.id
    metric_ids: tuple[str, ...] = field(default_factory=lambda: (str(DEFAULT_METRIC),))
    period: Period = Period.DAILY_7D
    temp_unit: TempUnit = TempUnit.CELSIUS
    wind_unit: WindUnit = WindUnit.KMH

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["metric_ids"] = list(self.metric_ids)
        data["period"] = str(self.period)
        data["temp_unit"] = str(self.temp_unit)
        data["wind_unit"] = str(self.wind_unit)
        return data


DEFAULT_PREFERENCES = Preferences()


def ensure_city_id(value: Any) -> str:
    if isinstance(value, str) and value in CITIES_BY_ID:
        return value
    return DEFAULT_PREFERENCES.city_id


def ensure_metric_ids(value: Any) -> tuple[str, ...]:
    """Keep known metric ids in order; an empty result means the default."""
    if not isinstance(value, list | tuple):
        return DEFAULT_PREFERENCES.metric_ids
    kept: list[str] = []
    for item in value:
        if isinstance(item, str) and item in _VALID_METRIC_IDS and item not in kept:
            kept.append(item)
    return tuple(kept) if kept else DEFAULT_PREFERENCES.metric_ids


def ensure_period(value: Any) -> Period:
    try:
        return Period(value)
    except ValueError:
        return DEFAULT_PREFERENCES.period


def ensure_temp_unit(value: Any) -> TempUnit:
    try:
        return TempUnit(value)
    except ValueError:
        return DEFAULT_PREFERENCES.temp_unit


def ensure_wind_unit(value: Any) -> WindUnit:
    try:
        return WindUnit(value)
    except ValueError:
        return DEFAULT_PREFERENCES.wind_unit


def parse_preferences(raw: Any) -> Preferences:
    """Build Preferences from untrusted data, defaulting each bad field."""
    if not isinstance(raw, dict):
        return DEFAULT_PREFERENCES
    return Preferences(
        city_id=ensure_city_id(raw.get("city_id")),
        metric_ids=ensure_metric_ids(raw.get("metric_ids")),
        period=ensure_period(raw.get("period")),
        temp_unit=ensure_temp_unit(raw.get("temp_unit")),
        wind_unit=ensure_wind_unit(raw.get("wind_unit")),
    )


class PreferenceStore:
    """Load and save Preferences through a DataStore."""

    def __init__(self, store: DataStore, path: Path = PREFS_PATH) -> None:
        self.store = store
        self.path = path

    def load(self) -> Preferences:
        return parse_preferences(self.store.read(self.path))

    def save(self, prefs: Preferences) -> Path:
        return self.store.write(self.path, prefs.to_dict(), source="user")

    def update(self, **changes: Any) -> Preferences:
        """Apply changes to the stored preferences, validate, and save."""
        merged = {**self.load().to_dict(), **changes}
        prefs = parse_preferences(merged)
        self.save(prefs)
        return prefs

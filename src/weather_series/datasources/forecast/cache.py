"""Short-lived forecast response cache backed by the DataStore.

Keyed by coordinates rounded to 4 decimals plus the period, so repeated
selections within a few minutes don't hit the API again.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from weather_series.schemas import Period
    from weather_series.store import DataStore

CACHE_TTL = timedelta(minutes=5)


def cache_path(lat: float, lon: float, period: Period) -> Path:
    """Store path for one (location, period) response."""
    return Path("live") / "forecast" / f"{lat:.4f}_{lon:.4f}_{period}.json"


class ForecastCache:
    """Read-through cache of raw forecast responses."""

    def __init__(self, store: DataStore, ttl: timedelta = CACHE_TTL) -> None:
        self.store = store
        self.ttl = ttl

    def get(
        self, lat: float, lon: float, period: Period, now: datetime | None = None
    ) -> dict[str, Any] | None:
        """Return the cached response, or None if missing or expired."""
        path = cache_path(lat, lon, period)
        if not self.store.is_fresh(path, now=now):
            return None
        data = self.store.read(path)
        return data if isinstance(data, dict) else None

    def put(self, lat: float, lon: float, period: Period, data: dict[str, Any]) -> Path:
        """Store a response with an expiry of ``ttl`` from now."""
        return self.store.write(
            cache_path(lat, lon, period),
            data,
            source="open-meteo.com",
            valid_until=datetime.now(UTC) + self.ttl,
            location={"lat": lat, "lon": lon},
            period=str(period),
        )

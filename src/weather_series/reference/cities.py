"""Selectable cities and their forecast coordinates."""

from __future__ import annotations

from weather_series.schemas import City

CITIES: tuple[City, ...] = (
    City(id="tokyo", name="Tokyo", lat=35.6762, lon=139.6503),
    City(id="osaka", name="Osaka", lat=34.6937, lon=135.5023),
    City(id="sapporo", name="Sapporo", lat=43.0618, lon=141.3545),
    City(id="fukuoka", name="Fukuoka", lat=33.5902, lon=130.4017),
    City(id="naha", name="Naha", lat=26.2124, lon=127.6792),
)

CITIES_BY_ID: dict[str, City] = {c.id: c for c in CITIES}

DEFAULT_CITY = CITIES[0]


def get_city(city_id: str) -> City:
    """Look up a city by id, falling back to the default city."""
    return CITIES_BY_ID.get(city_id, DEFAULT_CITY)

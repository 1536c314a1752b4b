"""Open-Meteo forecast data source.

Fetches hourly and daily forecast arrays from Open-Meteo (free, no API key).

Public API:
  - forecast: fetch_forecast (one GET per location and period)
  - cache: ForecastCache (minutes-long response cache in the DataStore)
  - client: API URL, requested variables
"""

from weather_series.datasources.forecast.cache import ForecastCache, cache_path
from weather_series.datasources.forecast.client import OPEN_METEO_API
from weather_series.datasources.forecast.forecast import build_params, fetch_forecast

__all__ = [
    "OPEN_METEO_API",
    "ForecastCache",
    "build_params",
    "cache_path",
    "fetch_forecast",
]

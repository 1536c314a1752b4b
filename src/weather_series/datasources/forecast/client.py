"""Open-Meteo forecast API constants.

API docs: https://open-meteo.com/en/docs
"""

from weather_series.pipeline.dates import DEFAULT_REFERENCE_TZ
from weather_series.reference.metrics import daily_fields, hourly_fields

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"

# Variables requested for every period; the pipeline picks what it needs
HOURLY_VARS = hourly_fields()
DAILY_VARS = daily_fields()

# Default zone for response timestamps; must match the zone "today" is computed in
RESPONSE_TIMEZONE = DEFAULT_REFERENCE_TZ

"""Display labels for the user-selectable options."""

from __future__ import annotations

from weather_series.schemas import Period, TempUnit, WindUnit

PERIOD_OPTIONS: dict[Period, str] = {
    Period.HOURLY_48H: "48 hours",
    Period.DAILY_7D: "7 days",
}

TEMP_UNIT_OPTIONS: dict[TempUnit, str] = {
    TempUnit.CELSIUS: "°C",
    TempUnit.FAHRENHEIT: "°F",
}

WIND_UNIT_OPTIONS: dict[WindUnit, str] = {
    WindUnit.KMH: "km/h",
    WindUnit.MS: "m/s",
}

# Open-Meteo has no start-date parameter, so charts always begin today
START_DATE_LABEL = "Today (from now)"

# Days requested per window; 48h needs a third day to cover the tail
FORECAST_DAYS: dict[Period, int] = {
    Period.HOURLY_48H: 3,
    Period.DAILY_7D: 7,
}

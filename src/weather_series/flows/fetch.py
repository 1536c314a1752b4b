"""
Prefect flow for fetching the forecast for the selected city and period.

Run locally:
    python -m weather_series.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m weather_series.flows.fetch
"""

from __future__ import annotations

from datetime import timedelta
from functools import partial
from typing import Any

from prefect import flow, task

from weather_series.config import get_settings
from weather_series.datasources.forecast import ForecastCache, fetch_forecast
from weather_series.loader import ForecastLoader, LoadState
from weather_series.prefs import Preferences, PreferenceStore
from weather_series.reference.cities import get_city
from weather_series.schemas import Period
from weather_series.store import DataStore

settings = get_settings()

# Data store for the forecast cache and preferences
store = DataStore(settings.data_dir)


@task(name="load-preferences")
def load_preferences() -> Preferences:
    """Load saved preferences (defaults when missing or invalid)."""
    return PreferenceStore(store).load()


# No task retries: a failed fetch is reported and retried by the user.
@task(name="fetch-forecast")
def fetch_forecast_task(city_id: str, period: Period) -> LoadState:
    """Fetch through the response cache with request sequencing and timeout."""
    loader = ForecastLoader(
        fetch=partial(
            fetch_forecast,
            api_url=settings.api_url,
            timeout=settings.request_timeout,
            timezone=settings.reference_timezone,
        ),
        cache=ForecastCache(store, ttl=timedelta(minutes=settings.cache_ttl_minutes)),
        timeout=settings.load_timeout,
    )
    try:
        return loader.load(get_city(city_id), period)
    finally:
        loader.close()


def summarize(state: LoadState) -> dict[str, Any]:
    """Counts of hourly/daily entries in a loaded response."""
    if state.error is not None:
        return {"error": state.error.message}
    response = state.response or {}
    return {
        "hourly_points": len((response.get("hourly") or {}).get("time") or []),
        "daily_points": len((response.get("daily") or {}).get("time") or []),
    }


@flow(name="fetch-forecast", log_prints=True)
def fetch_forecast_flow(city_id: str | None = None, period: Period | None = None) -> dict[str, Any]:
    """
    Fetch the forecast for one city and period.

    Missing arguments come from the saved preferences. The response is
    cached in the store so the build flow can render it.
    """
    prefs = load_preferences()
    city = get_city(city_id or prefs.city_id)
    selected_period = period or prefs.period

    print(f"Fetching {selected_period} forecast for {city.name} ({city.lat}, {city.lon})...")
    state = fetch_forecast_task(city.id, selected_period)
    result = {"city": city.id, "period": str(selected_period), **summarize(state)}

    if "error" in result:
        print(f"Fetch failed: {result['error']}")
    else:
        print(f"Got {result['hourly_points']} hourly and {result['daily_points']} daily entries.")
    return result


if __name__ == "__main__":
    fetch_forecast_flow()

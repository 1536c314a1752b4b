"""48-hour / 7-day forecast from the Open-Meteo Forecast API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from weather_series.datasources.forecast.client import (
    DAILY_VARS,
    HOURLY_VARS,
    OPEN_METEO_API,
    RESPONSE_TIMEZONE,
)
from weather_series.errors import (
    ForecastTimeoutError,
    RateLimitError,
    TransportError,
)
from weather_series.reference.options import FORECAST_DAYS
from weather_series.schemas import Period
from weather_series.services.http import DEFAULT_TIMEOUT, session

logger = logging.getLogger(__name__)


def build_params(
    lat: float, lon: float, period: Period, timezone: str = RESPONSE_TIMEZONE
) -> dict[str, str | int | float]:
    """Query parameters for one (location, period) request."""
    return {
        "latitude": lat,
        "longitude": lon,
        "hourly": ",".join(HOURLY_VARS),
        "daily": ",".join(DAILY_VARS),
        "forecast_days": FORECAST_DAYS[period],
        "timezone": timezone,
    }


def fetch_forecast(
    lat: float,
    lon: float,
    period: Period = Period.DAILY_7D,
    *,
    api_url: str = OPEN_METEO_API,
    timeout: float = DEFAULT_TIMEOUT,
    timezone: str = RESPONSE_TIMEZONE,
) -> dict[str, Any]:
    """
    Fetch the hourly and daily forecast for one location.

    Args:
        lat: Latitude.
        lon: Longitude.
        period: Window the caller will chart; controls ``forecast_days``.
        api_url: Forecast endpoint.
        timeout: Seconds before the request is abandoned.
        timezone: Zone the response timestamps are expressed in.

    Returns:
        Raw API response dict with ``hourly`` and ``daily`` blocks.

    Raises:
        ForecastTimeoutError: No response within ``timeout``.
        RateLimitError: The provider answered 429.
        TransportError: Network failure, other non-2xx status, or a body
            that is not a JSON object.
    """
    params = build_params(lat, lon, period, timezone)
    logger.info("Fetching %s forecast for (%s, %s)", period, lat, lon)

    try:
        resp = session.get(api_url, params=params, timeout=timeout)
    except requests.Timeout as e:
        raise ForecastTimeoutError() from e
    except requests.RequestException as e:
        logger.warning("Forecast request failed: %s", e)
        msg = "Could not reach the forecast service. Check your network and try again."
        raise TransportError(msg) from e

    if resp.status_code == 429:
        raise RateLimitError()
    if not resp.ok:
        raise TransportError.from_status(resp.status_code, resp.text or resp.reason or "")

    try:
        result = resp.json()
    except ValueError as e:
        raise TransportError("The forecast service returned an unreadable response.") from e
    if not isinstance(result, dict):
        raise TransportError("The forecast service returned an unreadable response.")
    return result

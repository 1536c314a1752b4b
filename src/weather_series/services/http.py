"""
Shared HTTP client for the forecast API.

A single ``requests.Session`` carries the User-Agent and an adapter with
automatic retries turned off. A failed forecast request surfaces to the
user, who retries explicitly. Callers pass ``timeout=`` on every request;
``DEFAULT_TIMEOUT`` is the value the forecast client uses.

Usage::

    from weather_series.services.http import DEFAULT_TIMEOUT, session

    resp = session.get(OPEN_METEO_API, params=params, timeout=DEFAULT_TIMEOUT)
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

USER_AGENT = "weather-series/0.1"

#: No automatic retries; the caller inspects the response status.
DEFAULT_RETRY = Retry(
    total=0,
    connect=0,
    read=0,
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,
)

DEFAULT_TIMEOUT = 10  # seconds


def create_session(retry: Retry | None = None) -> requests.Session:
    """Session with the no-retry adapter mounted for http and https."""
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    return s


session: requests.Session = create_session()

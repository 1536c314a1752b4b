"""Forecast loading with request sequencing.

Every load is tagged with a token from a monotonically increasing counter.
When a fetch finishes (success, failure or timeout) its result is applied
only if its token is still the latest one issued; results of superseded
requests are discarded. A separate load timeout surfaces a timeout error
when nothing has arrived in time, even if the HTTP request is still hung.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from weather_series.datasources.forecast import fetch_forecast
from weather_series.errors import ForecastError, ForecastTimeoutError

if TYPE_CHECKING:
    from weather_series.datasources.forecast import ForecastCache
    from weather_series.schemas import City, Period

logger = logging.getLogger(__name__)

LOAD_TIMEOUT = 12.0  # seconds

LOAD_TIMEOUT_MESSAGE = "Loading timed out. Check your network and press retry."

FetchFn = Callable[[float, float, "Period"], dict[str, Any]]


@dataclass(frozen=True)
class LoadState:
    """Outcome of the most recent load that was allowed to apply."""

    token: int = 0
    response: dict[str, Any] | None = None
    error: ForecastError | None = None
    loading: bool = False


class ForecastLoader:
    """Fetch forecasts so that only the latest request updates ``state``."""

    def __init__(
        self,
        fetch: FetchFn | None = None,
        cache: ForecastCache | None = None,
        timeout: float = LOAD_TIMEOUT,
        max_workers: int = 4,
    ) -> None:
        self._fetch = fetch or fetch_forecast
        self.cache = cache
        self.timeout = timeout
        self._lock = threading.Lock()
        self._latest = 0
        self._last_request: tuple[City, Period] | None = None
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="forecast"
        )
        self.state = LoadState()

    @property
    def latest_token(self) -> int:
        return self._latest

    def issue(self) -> int:
        """Reserve the next token; it becomes the latest immediately."""
        with self._lock:
            self._latest += 1
            self.state = LoadState(token=self._latest, loading=True)
            return self._latest

    def apply(
        self,
        token: int,
        response: dict[str, Any] | None = None,
        error: ForecastError | None = None,
    ) -> bool:
        """Record a result if ``token`` is still current. Returns whether it applied."""
        with self._lock:
            if token != self._latest:
                logger.debug("Discarding stale result for request %d (latest %d)", token, self._latest)
                return False
            self.state = LoadState(token=token, response=response, error=error)
            return True

    def load(self, city: City, period: Period) -> LoadState:
        """
        Load the forecast for ``city`` and ``period``.

        Uses the cache when it holds a fresh response. Errors are stored in
        the returned state rather than raised.
        """
        self._last_request = (city, period)
        token = self.issue()

        if self.cache is not None:
            cached = self.cache.get(city.lat, city.lon, period)
            if cached is not None:
                logger.debug("Cache hit for %s/%s", city.id, period)
                self.apply(token, response=cached)
                return self.state

        future = self._executor.submit(self._fetch, city.lat, city.lon, period)
        try:
            response = future.result(timeout=self.timeout)
        except TimeoutError:
            future.cancel()
            logger.warning("Load of %s/%s timed out after %ss", city.id, period, self.timeout)
            self.apply(token, error=ForecastTimeoutError(LOAD_TIMEOUT_MESSAGE))
        except ForecastError as e:
            logger.warning("Load of %s/%s failed: %s", city.id, period, e.message)
            self.apply(token, error=e)
        else:
            if self.cache is not None:
                self.cache.put(city.lat, city.lon, period, response)
            self.apply(token, response=response)
        return self.state

    def retry(self) -> LoadState:
        """Repeat the last load; retrying is always an explicit action."""
        if self._last_request is None:
            return self.state
        return self.load(*self._last_request)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

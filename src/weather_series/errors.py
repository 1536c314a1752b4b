"""Errors raised at the forecast fetch boundary.

Only fetching can fail; the pipeline never raises. Every error carries a
user-facing message, and all of them are retryable by the user.
"""

from __future__ import annotations


class ForecastError(Exception):
    """Base class for forecast fetch failures."""

    retryable = True

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(ForecastError):
    """Network unreachable or a non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int, detail: str = "") -> TransportError:
        msg = f"Failed to fetch forecast data ({status_code})."
        if detail:
            msg = f"{msg} {detail}"
        return cls(msg, status_code=status_code)


class RateLimitError(TransportError):
    """HTTP 429 from the forecast provider."""

    def __init__(self) -> None:
        super().__init__(
            "Too many requests. Please wait a moment and try again.",
            status_code=429,
        )


class ForecastTimeoutError(ForecastError):
    """No response arrived within the time bound."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or "The connection timed out. Check your network and try again."
        )

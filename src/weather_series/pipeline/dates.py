"""Date handling in the fixed reference time zone.

Open-Meteo has no start-date parameter, and the first day of a response
can already be partly in the past. Points are compared by their
``YYYY-MM-DD`` prefix against "today" in the reference zone, so the result
does not depend on where the code runs.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from weather_series.schemas import ChartPoint

DEFAULT_REFERENCE_TZ = "Asia/Tokyo"


def today_in_reference_zone(tz: str = DEFAULT_REFERENCE_TZ, now: datetime | None = None) -> str:
    """Today's date as ``YYYY-MM-DD`` in ``tz``.

    ``now`` must be timezone-aware when given (used in tests).
    """
    zone = ZoneInfo(tz)
    current = now.astimezone(zone) if now is not None else datetime.now(zone)
    return current.date().isoformat()


def is_on_or_after(timestamp: str, reference_date: str) -> bool:
    """True when the date portion of ``timestamp`` is not before ``reference_date``."""
    return timestamp[:10] >= reference_date


def filter_from(points: Iterable[ChartPoint], reference_date: str) -> list[ChartPoint]:
    """Drop points dated before ``reference_date``; order is preserved."""
    return [p for p in points if is_on_or_after(p.timestamp, reference_date)]


def from_date_label(reference_date: str) -> str:
    """Display text for the chart start, e.g. ``Today (10/17)``."""
    d = date.fromisoformat(reference_date)
    return f"Today ({d.month}/{d.day})"

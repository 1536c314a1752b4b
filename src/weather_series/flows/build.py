"""
Prefect flow for building the chart page from the cached forecast.

Run locally:
    python -m weather_series.flows.build
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from prefect import flow, task

from weather_series.config import get_settings
from weather_series.datasources.forecast import cache_path
from weather_series.pipeline import ConvertedChart, build_chart_data, selected_or_default
from weather_series.pipeline.dates import from_date_label, today_in_reference_zone
from weather_series.prefs import Preferences, PreferenceStore
from weather_series.reference.cities import get_city
from weather_series.reference.metrics import get_metric
from weather_series.reference.options import PERIOD_OPTIONS, START_DATE_LABEL
from weather_series.renderers.chart import build_chart_html, build_error_html
from weather_series.renderers.page import build_page_html
from weather_series.schemas import ChartPayload, Period
from weather_series.store import DataStore

settings = get_settings()

store = DataStore(settings.data_dir)
SITE_DIR = settings.site_dir

NO_DATA_MESSAGE = "No forecast data found. Run the fetch flow first."


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-preferences")
def load_preferences() -> Preferences:
    """Load saved preferences from store."""
    return PreferenceStore(store).load()


@task(name="load-forecast")
def load_forecast(city_id: str, period: Period) -> dict[str, Any] | None:
    """Load the cached forecast response, fresh or not.

    An expired response is still worth drawing; freshness only matters
    when deciding whether to fetch.
    """
    city = get_city(city_id)
    data = store.read(cache_path(city.lat, city.lon, period))
    return data if isinstance(data, dict) else None


# =============================================================================
# Build tasks
# =============================================================================


@task(name="build-chart-data")
def build_chart(response: dict[str, Any], prefs: Preferences, reference_date: str) -> ConvertedChart:
    """Run the forecast -> chart data pipeline."""
    return build_chart_data(
        response,
        prefs.metric_ids,
        prefs.period,
        prefs.temp_unit,
        prefs.wind_unit,
        reference_date=reference_date,
    )


def chart_title(prefs: Preferences) -> str:
    """Heading like ``Tokyo - Temperature (7 days)`` or ``Tokyo - 2 metrics (48 hours)``."""
    city = get_city(prefs.city_id)
    metrics = selected_or_default(prefs.metric_ids)
    if len(metrics) == 1:
        metric = get_metric(metrics[0])
        metric_label = metric.label if metric else ""
    else:
        metric_label = f"{len(metrics)} metrics"
    return f"{city.name} - {metric_label} ({PERIOD_OPTIONS[prefs.period]})"


@task(name="write-site")
def write_site(html: str, site_dir: Path, payload: ChartPayload | None = None) -> Path:
    """Write the rendered page to ``site_dir/index.html``.

    When a payload is given it is written alongside as ``chart.json``.
    """
    site_dir.mkdir(parents=True, exist_ok=True)
    out = site_dir / "index.html"
    out.write_text(html)
    if payload is not None:
        (site_dir / "chart.json").write_text(payload.model_dump_json(indent=2))
    return out


@flow(name="build-chart", log_prints=True)
def build_chart_flow(fetch_error: str | None = None) -> dict[str, Any]:
    """
    Render the chart page for the saved preferences.

    This is the main Prefect flow that generates the static page. With
    ``fetch_error`` set, or with nothing cached, the page shows the error
    and a retry hint instead of a chart.
    """
    prefs = load_preferences()
    city = get_city(prefs.city_id)
    tz = ZoneInfo(settings.reference_timezone)

    response = None
    if fetch_error is None:
        print(f"Loading cached {prefs.period} forecast for {city.name}...")
        response = load_forecast(city.id, prefs.period)

    if response is None:
        message = fetch_error or NO_DATA_MESSAGE
        print(message)
        page = build_page_html(build_error_html(message), city.name, START_DATE_LABEL, datetime.now(tz))
        output_path = write_site(page, SITE_DIR)
        return {"error": message, "output": str(output_path)}

    reference_date = today_in_reference_zone(settings.reference_timezone)
    chart = build_chart(response, prefs, reference_date)
    print(f"Built {len(chart.data)} chart points from {reference_date}.")

    from_date = from_date_label(reference_date)
    chart_html = build_chart_html(
        chart.data,
        prefs.period,
        chart.series_units,
        from_date,
        title=chart_title(prefs),
    )
    page = build_page_html(chart_html, city.name, START_DATE_LABEL, datetime.now(tz))
    payload = ChartPayload.from_points(chart.data, prefs.period, chart.series_units, from_date)
    output_path = write_site(page, SITE_DIR, payload)
    print(f"Wrote {output_path}")

    return {
        "points": len(chart.data),
        "series_units": chart.series_units,
        "output": str(output_path),
    }


if __name__ == "__main__":
    build_chart_flow()

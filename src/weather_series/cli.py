"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import http.server
import logging
import sys
from datetime import timedelta
from functools import partial

from weather_series import __version__
from weather_series.config import get_settings
from weather_series.datasources.forecast import ForecastCache, fetch_forecast
from weather_series.flows.build import build_chart_flow
from weather_series.flows.fetch import fetch_forecast_flow
from weather_series.loader import ForecastLoader
from weather_series.pipeline import ConvertedChart, build_chart_data
from weather_series.pipeline.dates import from_date_label, today_in_reference_zone
from weather_series.prefs import PreferenceStore, parse_preferences
from weather_series.reference.cities import CITIES, get_city
from weather_series.reference.metrics import METRICS
from weather_series.reference.options import (
    PERIOD_OPTIONS,
    START_DATE_LABEL,
    TEMP_UNIT_OPTIONS,
    WIND_UNIT_OPTIONS,
)
from weather_series.renderers.chart import display_value, series_names
from weather_series.schemas import Period, TempUnit, WindUnit
from weather_series.store import DataStore


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-series",
        description="Multi-metric weather forecast charts for a fixed set of cities",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'show' command - print chart data as a table
    show_parser = subparsers.add_parser("show", help="Fetch and print chart data")
    _add_selection_args(show_parser)

    # 'prefs' command - show or update saved preferences
    prefs_parser = subparsers.add_parser("prefs", help="Show or update saved preferences")
    _add_selection_args(prefs_parser)

    subparsers.add_parser("info", help="Show application info")

    # 'refresh' command - fetch forecast and build page
    subparsers.add_parser("refresh", help="Fetch forecast and build chart page")

    serve_parser = subparsers.add_parser("serve", help="Serve chart page locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def _add_selection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--city", choices=[c.id for c in CITIES], default=None)
    parser.add_argument(
        "--metric",
        dest="metrics",
        action="append",
        choices=[str(m) for m in METRICS],
        default=None,
        help="Metric to chart (repeat for several)",
    )
    parser.add_argument("--period", choices=[str(p) for p in Period], default=None)
    parser.add_argument("--temp-unit", choices=[str(u) for u in TempUnit], default=None)
    parser.add_argument("--wind-unit", choices=[str(u) for u in WindUnit], default=None)


def _selection_changes(args: argparse.Namespace) -> dict[str, object]:
    changes: dict[str, object] = {
        "city_id": args.city,
        "metric_ids": args.metrics,
        "period": args.period,
        "temp_unit": args.temp_unit,
        "wind_unit": args.wind_unit,
    }
    return {k: v for k, v in changes.items() if v is not None}


def configure_logging(debug: bool) -> None:
    """Configure root logging from settings (``--debug`` forces DEBUG)."""
    settings = get_settings()
    level = logging.DEBUG if debug or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _cell(name: str, value: float | None) -> str:
    shown = display_value(name, value)
    return "—" if shown is None else f"{shown:g}"


def format_table(chart: ConvertedChart) -> str:
    """Plain-text table of chart points, one column per series."""
    names = series_names(chart.data)
    header = ["Time"] + [
        f"{n} ({chart.series_units[n]})" if chart.series_units.get(n) else n for n in names
    ]
    rows = [[p.label] + [_cell(n, p.values.get(n)) for n in names] for p in chart.data]
    table = [header, *rows]
    widths = [max(len(r[i]) for r in table) for i in range(len(header))]
    lines = ["  ".join(cell.ljust(w) for cell, w in zip(row, widths, strict=True)) for row in table]
    return "\n".join(line.rstrip() for line in lines)


def cmd_show(args: argparse.Namespace) -> int:
    """Handle the 'show' command."""
    settings = get_settings()
    store = DataStore(settings.data_dir)
    saved = PreferenceStore(store).load()
    # Command-line selection overrides saved preferences for this run only
    prefs = parse_preferences({**saved.to_dict(), **_selection_changes(args)})
    city = get_city(prefs.city_id)

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
        state = loader.load(city, prefs.period)
    finally:
        loader.close()

    if state.error is not None:
        print(f"Error: {state.error.message}", file=sys.stderr)
        return 1

    reference_date = today_in_reference_zone(settings.reference_timezone)
    chart = build_chart_data(
        state.response,
        prefs.metric_ids,
        prefs.period,
        prefs.temp_unit,
        prefs.wind_unit,
        reference_date=reference_date,
    )
    print(f"{city.name} - from {from_date_label(reference_date)}")
    if not chart.data:
        print("No data to display. Run the command again to refresh.")
        return 0
    print(format_table(chart))
    return 0


def cmd_prefs(args: argparse.Namespace) -> int:
    """Handle the 'prefs' command."""
    settings = get_settings()
    prefs_store = PreferenceStore(DataStore(settings.data_dir))
    changes = _selection_changes(args)
    prefs = prefs_store.update(**changes) if changes else prefs_store.load()
    for key, value in prefs.to_dict().items():
        print(f"{key}: {value}")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Reference timezone: {settings.reference_timezone}")
    print()
    print("Cities: " + ", ".join(f"{c.id} ({c.name})" for c in CITIES))
    print("Metrics: " + ", ".join(f"{m.id} ({m.label})" for m in METRICS.values()))
    print("Periods: " + ", ".join(f"{p} ({label})" for p, label in PERIOD_OPTIONS.items()))
    print("Temperature units: " + ", ".join(f"{u} ({label})" for u, label in TEMP_UNIT_OPTIONS.items()))
    print("Wind units: " + ", ".join(str(u) for u in WIND_UNIT_OPTIONS))
    print(f"Start: {START_DATE_LABEL}")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch forecast then build page."""
    print("Fetching forecast...")
    fetched = fetch_forecast_flow()
    if "error" in fetched:
        print(f"Error: {fetched['error']}", file=sys.stderr)
        build_chart_flow(fetch_error=fetched["error"])
        return 1

    print("Building chart page...")
    built = build_chart_flow()
    if "error" in built:
        print(f"Error: {built['error']}", file=sys.stderr)
        return 1

    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built page locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = settings.site_dir

    if not site_dir.exists():
        print("No site directory found. Run 'weather-series refresh' first.", file=sys.stderr)
        return 1

    handler = partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "show": cmd_show,
        "prefs": cmd_prefs,
        "info": cmd_info,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())

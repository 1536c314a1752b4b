"""Weather Series - multi-metric forecast charts for a fixed set of cities.

Architecture::

    datasources/   Open-Meteo forecast client (fetch + short-lived response cache)
    store.py       JSON envelope store with TTL (forecast cache, preferences)
    prefs.py       User preferences with per-field validation on load
    pipeline/      Pure forecast -> chart data pipeline
                   (normalize -> merge -> date filter -> unit conversion)
    loader.py      Request sequencing: only the latest fetch may update state
    renderers/     Pure chart data -> HTML (Jinja2 templates)
    flows/         Prefect orchestration (fetch forecast, build chart page)
    services/      Shared utilities (HTTP session)

Data flow: datasources -> store (cache) -> pipeline -> renderers -> site/
"""

__version__ = "0.1.0"

from weather_series.config import Settings
from weather_series.schemas import ChartPoint, Period, TempUnit, WindUnit

__all__ = ["ChartPoint", "Period", "Settings", "TempUnit", "WindUnit", "__version__"]

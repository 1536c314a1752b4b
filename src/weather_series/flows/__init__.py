"""
Prefect flows for the chart pipeline.

Flows:
- fetch: Download the forecast for the selected city/period into the store
- build: Run the chart pipeline and render site/index.html

Usage (local):
    python -m weather_series.flows.fetch
    python -m weather_series.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'fetch-forecast/default'
"""

"""External data sources.

Each data source lives in its own subpackage with a ``client.py`` holding
API constants and one module per endpoint. Fetch functions return raw JSON
dicts; parsing into chart data happens in ``pipeline/``.

Sources:
  - forecast: Open-Meteo hourly/daily forecast
"""

"""Full-page wrapper around rendered fragments."""

from __future__ import annotations

from datetime import datetime

from weather_series.renderers import render_template


def build_page_html(
    chart_html: str,
    city_name: str,
    start_label: str,
    updated_at: datetime,
) -> str:
    """Wrap the chart fragment in the base page layout."""
    return render_template(
        "base.html.j2",
        chart_html=chart_html,
        city_name=city_name,
        start_label=start_label,
        updated_at=updated_at.strftime("%Y-%m-%d %H:%M %Z").strip(),
    )

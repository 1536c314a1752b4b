"""Pure rendering functions: chart data -> HTML strings.

All renderers follow the same pattern:
  - Input: pipeline output (ChartPoint lists, unit tables)
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py which orchestrates the rendering pipeline.

Public API:
  - chart: build_chart_html, build_error_html
  - page: build_page_html

Templates live in ``templates/`` next to this package; fragments have no
<html>/<body> tags, ``base.html.j2`` wraps them into a page.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)

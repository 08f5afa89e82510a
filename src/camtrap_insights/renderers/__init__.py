"""Rendering of analysis results: tables -> interactive Leaflet maps.

Renderers follow the same pattern:
  - Input: a ``CamtrapPackage`` plus feature options, or a finished table
  - Output: a dataclass that can render itself to HTML via Jinja2
  - No side effects, no I/O

Public API:
  - deployment_map: map_dep, DeploymentMap, MapMarker, MapLegend
  - legend: get_legend_title, add_unit_to_legend_title, get_prefixes
  - color_scale: NumericScale

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a build function::

       from camtrap_insights.renderers import render_template

       def build_mywidget_html(table: pd.DataFrame) -> str:
           rows = [...]
           return render_template("mywidget.html.j2", rows=rows)

2. Create a Jinja2 template in ``templates/{name}.html.j2``.

3. Add tests: call your build function with a small package and assert
   on the returned structure and HTML.
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

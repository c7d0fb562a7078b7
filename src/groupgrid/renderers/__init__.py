"""Renderers for grid views."""

from groupgrid.renderers.base import OutputFormat, GridRenderer, footer_text, format_cell
from groupgrid.renderers.table import TableRenderer
from groupgrid.renderers.json_renderer import JSONRenderer

__all__ = [
    "OutputFormat",
    "GridRenderer",
    "TableRenderer",
    "JSONRenderer",
    "footer_text",
    "format_cell",
]

"""Renderers for frame snapshot output."""

from bstanim.renderers.graphviz_renderer import render_graphviz
from bstanim.renderers.json_yaml import dump_snapshot
from bstanim.renderers.html import render_html
from bstanim.renderers.mermaid import render_mermaid
from bstanim.renderers.color_utils import (
    MappingPalette,
    Palette,
    get_palette,
    list_palette_names,
    resolve_palette,
)

__all__ = [
    "render_graphviz",
    "dump_snapshot",
    "render_html",
    "render_mermaid",
    "Palette",
    "MappingPalette",
    "get_palette",
    "list_palette_names",
    "resolve_palette",
]

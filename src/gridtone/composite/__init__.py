"""
Composite rendering split into geometry primitives, overlays and the
grid renderer.

The package exposes the most commonly used entry points directly.
"""

from __future__ import annotations

from . import core, overlays, render
from .core import (
    Rect,
    aspect_fill,
    canvas_size,
    physical_size,
    tile_rect,
    to_rgb,
)
from .overlays import apply_overlay, overlay_colors
from .render import (
    compose_canvas,
    encode_jpeg,
    export_grid,
    render_composite,
    render_tile,
)

__all__ = [
    "Rect",
    "apply_overlay",
    "aspect_fill",
    "canvas_size",
    "compose_canvas",
    "core",
    "encode_jpeg",
    "export_grid",
    "overlay_colors",
    "overlays",
    "physical_size",
    "render",
    "render_composite",
    "render_tile",
    "tile_rect",
    "to_rgb",
]

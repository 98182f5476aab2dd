"""Public package exports for gridtone."""

from __future__ import annotations

from .analysis import ColorAnalysis, analyze_image
from .composite import compose_canvas, export_grid, render_composite
from .config import GridtoneConfig, OverlayConfig, RenderSpec
from .items import GridItem, make_grid_item, stripe_colors

__all__ = [
    "ColorAnalysis",
    "GridItem",
    "GridtoneConfig",
    "OverlayConfig",
    "RenderSpec",
    "analyze_image",
    "compose_canvas",
    "export_grid",
    "make_grid_item",
    "render_composite",
    "stripe_colors",
]

"""Color overlays painted on top of individual tiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from gridtone.color_format import rgba_fill
from gridtone.constants import (
    COLOR_BLACK,
    COLOR_MODE_RGBA,
    COLOR_WHITE,
    SWATCH_CAPSULE_ALPHA,
    SWATCH_CAPSULE_INSET,
    SWATCH_CAPSULE_LIFT,
    SWATCH_DIAMETER,
    SWATCH_GAP,
    SWATCH_OUTLINE_ALPHA,
    SWATCH_PAD,
)
from gridtone.items import stripe_colors

if TYPE_CHECKING:  # pragma: no cover
    from gridtone.config import OverlayConfig
    from gridtone.items import GridItem
    from gridtone.type_defs import RGB

_HALF = 0.5


def overlay_colors(item: GridItem, overlay: OverlayConfig) -> list[RGB]:
    """Return the colors an overlay represents for ``item``."""
    if overlay.color_mode == "average":
        return [item.average_color]
    return list(stripe_colors(item))


def _blank_layer(size: tuple[int, int]) -> Image.Image:
    return Image.new(COLOR_MODE_RGBA, size, (*COLOR_BLACK, 0))


def band_layer(
    size: tuple[int, int],
    colors: list[RGB],
    *,
    alpha: float,
    coverage: float,
) -> Image.Image:
    """
    Build a layer with ``colors`` stacked as equal bands at the bottom.

    ``coverage`` is the fraction of the tile height covered, measured
    from the bottom edge. One color gives a solid block; three colors
    give stripes ordered top to bottom.
    """
    w, h = size
    layer = _blank_layer(size)
    draw = ImageDraw.Draw(layer)
    band_h = h * coverage
    top = h - band_h
    n = len(colors)
    for i, rgb in enumerate(colors):
        y0 = round(top + i * band_h / n)
        y1 = round(top + (i + 1) * band_h / n)
        if y1 <= y0:
            continue
        draw.rectangle([0, y0, w - 1, y1 - 1], fill=rgba_fill(rgb, alpha))
    return layer


def swatch_layers(
    size: tuple[int, int],
    colors: list[RGB],
    density: float,
) -> tuple[Image.Image, Image.Image]:
    """
    Build the capsule backdrop and the circular swatches for dot mode.

    Both layers are anchored at the bottom left of the tile. They are
    returned separately so the swatches composite over the capsule
    rather than replacing its pixels.
    """
    _, h = size

    def px(value: float) -> int:
        return int(round(value * density))

    n = len(colors)
    total = n * SWATCH_DIAMETER + (n - 1) * SWATCH_GAP
    cap_x = SWATCH_PAD - SWATCH_CAPSULE_INSET
    cap_h = SWATCH_DIAMETER + 2 * SWATCH_CAPSULE_LIFT
    cap_y = h / density - SWATCH_PAD - SWATCH_DIAMETER - SWATCH_CAPSULE_LIFT
    cap_w = total + 2 * SWATCH_CAPSULE_INSET

    capsule = _blank_layer(size)
    ImageDraw.Draw(capsule).rounded_rectangle(
        [px(cap_x), px(cap_y), px(cap_x + cap_w), px(cap_y + cap_h)],
        radius=px(cap_h / 2),
        fill=rgba_fill(COLOR_WHITE, SWATCH_CAPSULE_ALPHA),
    )

    swatches = _blank_layer(size)
    draw = ImageDraw.Draw(swatches)
    cy = h / density - SWATCH_PAD - SWATCH_DIAMETER
    for i, rgb in enumerate(colors):
        cx = SWATCH_PAD + i * (SWATCH_DIAMETER + SWATCH_GAP)
        draw.ellipse(
            [px(cx), px(cy), px(cx + SWATCH_DIAMETER), px(cy + SWATCH_DIAMETER)],
            fill=(*rgb, 255),
            outline=rgba_fill(COLOR_BLACK, SWATCH_OUTLINE_ALPHA),
            width=max(1, px(1)),
        )
    return capsule, swatches


def apply_overlay(
    tile: Image.Image,
    item: GridItem,
    overlay: OverlayConfig,
    density: float = 1.0,
) -> Image.Image:
    """
    Composite the configured overlay onto an RGBA ``tile``.

    Layers are the size of the tile, so every fill is clipped to the
    tile bounds before it reaches the canvas.

    ``overlay.alpha`` only applies to the half and full bands. Dot
    swatches are always opaque, so ``alpha=0`` hides half and full
    overlays but still shows the dot swatches.
    """
    colors = overlay_colors(item, overlay)
    if overlay.overlay_style == "dot":
        capsule, swatches = swatch_layers(tile.size, colors, density)
        return Image.alpha_composite(
            Image.alpha_composite(tile, capsule), swatches,
        )
    coverage = _HALF if overlay.overlay_style == "half" else 1.0
    layer = band_layer(
        tile.size, colors, alpha=overlay.alpha, coverage=coverage,
    )
    return Image.alpha_composite(tile, layer)

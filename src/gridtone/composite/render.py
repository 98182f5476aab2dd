"""
Composite rendering of an ordered grid into a single flattened raster.

Tiles are laid out row-major on a fixed number of columns. Each tile is
assembled on its own layer (aspect-filled image, outline, overlay) and
then pasted into its cell, which clips everything to the cell bounds.
"""

from __future__ import annotations

import asyncio
import io
from typing import TYPE_CHECKING

from PIL import Image

from gridtone.composite.core import (
    aspect_fill,
    draw_tile_stroke,
    physical_size,
    tile_rect,
    to_rgb,
)
from gridtone.composite.overlays import apply_overlay
from gridtone.config import OverlayConfig, RenderSpec
from gridtone.constants import COLOR_MODE_RGB, COLOR_MODE_RGBA
from gridtone.errors import ExportError
from gridtone.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from gridtone.items import GridItem


def render_tile(
    item: GridItem,
    size: tuple[int, int],
    spec: RenderSpec,
    overlay: OverlayConfig,
) -> Image.Image:
    """
    Render one tile at ``size`` over the background color.

    A missing image handle leaves the background visible but the tile
    still gets its outline and overlay.
    """
    tile = Image.new(COLOR_MODE_RGBA, size, (*spec.background, 255))
    if item.image is not None:
        photo = aspect_fill(to_rgb(item.image, bg_color=spec.background), size)
        tile.paste(photo, (0, 0))
    tile = draw_tile_stroke(tile, spec.pixel_density)
    if spec.include_overlays and overlay.show:
        tile = apply_overlay(tile, item, overlay, spec.pixel_density)
    return tile.convert(COLOR_MODE_RGB)


def compose_canvas(
    items: Sequence[GridItem],
    spec: RenderSpec | None = None,
    overlay: OverlayConfig | None = None,
) -> Image.Image | None:
    """
    Lay out ``items`` and return the flattened RGB canvas.

    Returns None for an empty sequence.
    """
    if not items:
        return None
    spec = spec or RenderSpec()
    overlay = overlay or OverlayConfig()

    canvas = Image.new(
        COLOR_MODE_RGB, physical_size(len(items), spec), spec.background,
    )
    for index, item in enumerate(items):
        cell = tile_rect(index, spec)
        if cell.w <= 0 or cell.h <= 0:
            continue
        canvas.paste(render_tile(item, cell.size(), spec, overlay),
                     cell.origin())
    return canvas


def encode_jpeg(canvas: Image.Image, quality: int) -> bytes:
    """Encode ``canvas`` as JPEG bytes."""
    buffer = io.BytesIO()
    try:
        canvas.save(buffer, format="JPEG", quality=quality)
    except (OSError, ValueError, KeyError) as exc:
        msg = f"Could not encode composite as JPEG: {exc!s}"
        raise ExportError(msg) from exc
    return buffer.getvalue()


def render_composite(
    items: Sequence[GridItem],
    spec: RenderSpec | None = None,
    overlay: OverlayConfig | None = None,
) -> bytes | None:
    """
    Render ``items`` to JPEG bytes, or None when there is nothing to draw.

    Raises:
        ExportError: If the encoder fails.

    """
    spec = spec or RenderSpec()
    canvas = compose_canvas(items, spec, overlay)
    if canvas is None:
        logger.info("Nothing to render: grid is empty")
        return None
    data = encode_jpeg(canvas, spec.jpeg_quality)
    logger.debug(
        "Rendered %d tiles into %dx%d composite (%d bytes)",
        len(items), canvas.width, canvas.height, len(data),
    )
    return data


async def export_grid(
    items: Sequence[GridItem],
    spec: RenderSpec | None = None,
    overlay: OverlayConfig | None = None,
) -> bytes | None:
    """
    Deferred form of :func:`render_composite` for event-loop callers.

    The render itself is synchronous; awaiting first hands control back
    to the loop so a pending UI update can run before the work starts.
    """
    if not items:
        return None
    await asyncio.sleep(0)
    return render_composite(list(items), spec, overlay)

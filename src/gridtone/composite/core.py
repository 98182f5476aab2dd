"""Core geometry and drawing primitives for composite grid rendering."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageOps

from gridtone.color_format import rgba_fill
from gridtone.constants import (
    COLOR_MODE_RGB,
    COLOR_MODE_RGBA,
    COLOR_WHITE,
    TILE_STROKE_ALPHA,
    TILE_STROKE_PX,
)

if TYPE_CHECKING:  # pragma: no cover
    from gridtone.config import RenderSpec
    from gridtone.type_defs import RGB


@dataclass(frozen=True)
class Rect:
    """Simple rectangle with convenience accessors."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def w(self) -> int:
        """Width."""
        return self.x1 - self.x0

    @property
    def h(self) -> int:
        """Height."""
        return self.y1 - self.y0

    def size(self) -> tuple[int, int]:
        """Return (w, h)."""
        return self.w, self.h

    def origin(self) -> tuple[int, int]:
        """Return the top left corner."""
        return self.x0, self.y0

    def contains(self, x: int, y: int) -> bool:
        """Return True if pixel (x, y) lies inside the rectangle."""
        return self.x0 <= x < self.x1 and self.y0 <= y < self.y1


def to_rgb(img: Image.Image, *, bg_color: RGB) -> Image.Image:
    """Convert PIL image to RGB, alpha compositing if needed."""
    if img.mode == COLOR_MODE_RGB:
        return img
    if img.mode in ("RGBA", "LA", "PA") or (
        img.mode == "P" and "transparency" in img.info
    ):
        bg = Image.new(COLOR_MODE_RGBA, img.size, (*bg_color, 255))
        comp = Image.alpha_composite(bg, img.convert(COLOR_MODE_RGBA))
        return comp.convert(COLOR_MODE_RGB)
    return img.convert(COLOR_MODE_RGB)


def grid_rows(count: int, columns: int) -> int:
    """Return the number of rows needed for ``count`` tiles."""
    return math.ceil(count / columns) if count > 0 else 0


def canvas_size(count: int, spec: RenderSpec) -> tuple[int, int]:
    """
    Return the logical canvas size for ``count`` tiles.

    ``columns * tile + (columns - 1) * spacing`` wide and the same
    formula over rows high. Pixel density is not applied here.
    """
    if count <= 0:
        return 0, 0
    cols = spec.columns
    rows = grid_rows(count, cols)
    width = cols * spec.tile_size + (cols - 1) * spec.spacing
    height = rows * spec.tile_size + (rows - 1) * spec.spacing
    return width, height


def _scaled(value: float, density: float) -> int:
    """Map a logical coordinate to a physical pixel coordinate."""
    return int(round(value * density))


def physical_size(count: int, spec: RenderSpec) -> tuple[int, int]:
    """Return the output raster size after applying pixel density."""
    w, h = canvas_size(count, spec)
    return (_scaled(w, spec.pixel_density), _scaled(h, spec.pixel_density))


def tile_rect(index: int, spec: RenderSpec) -> Rect:
    """Return the physical cell rectangle of the ``index``-th tile."""
    row, col = divmod(index, spec.columns)
    pitch = spec.tile_size + spec.spacing
    x = col * pitch
    y = row * pitch
    density = spec.pixel_density
    return Rect(
        _scaled(x, density),
        _scaled(y, density),
        _scaled(x + spec.tile_size, density),
        _scaled(y + spec.tile_size, density),
    )


def aspect_fill(img: Image.Image, size: tuple[int, int]) -> Image.Image:
    """
    Scale ``img`` to cover ``size`` and crop the overflow symmetrically.

    The result is exactly ``size``, so pasting it at a cell origin can
    never spill into neighbouring cells.
    """
    return ImageOps.fit(
        img,
        size,
        method=Image.Resampling.LANCZOS,
        centering=(0.5, 0.5),
    )


def draw_tile_stroke(tile: Image.Image, density: float) -> Image.Image:
    """Outline ``tile`` with a faint inset stroke and return the result."""
    width = max(1, _scaled(TILE_STROKE_PX, density))
    layer = Image.new(COLOR_MODE_RGBA, tile.size, (*COLOR_WHITE, 0))
    draw = ImageDraw.Draw(layer)
    draw.rectangle(
        [0, 0, tile.width - 1, tile.height - 1],
        outline=rgba_fill(COLOR_WHITE, TILE_STROKE_ALPHA),
        width=width,
    )
    return Image.alpha_composite(tile.convert(COLOR_MODE_RGBA), layer)

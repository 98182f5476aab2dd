"""
Procedural sample thumbnails for trying the grid without real photos.

Nine square images built from gradients with a few soft shapes on top,
each with a distinct palette so average and dominant colors differ
visibly across the grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from gridtone.analysis import analyze_image
from gridtone.color_format import hex_to_rgb
from gridtone.constants import COLOR_MODE_RGB, COLOR_MODE_RGBA
from gridtone.items import GridItem, make_grid_item

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from gridtone.config import AnalysisConfig

GradientKind = Literal["diagonal", "vertical", "horizontal", "radial"]

DEFAULT_SAMPLE_SIZE = 600
_SOFT_BLUR_RADIUS = 2


@dataclass(frozen=True)
class SampleRecipe:
    """Gradient stops, direction and decoration for one sample image."""

    name: str
    kind: GradientKind
    stops: tuple[str, ...]
    decorate: Callable[[ImageDraw.ImageDraw, int], None] | None = None


def _gradient_field(size: int, kind: GradientKind) -> np.ndarray:
    """Return a ``size`` x ``size`` array of positions in [0, 1]."""
    axis = np.linspace(0.0, 1.0, size)
    xx, yy = np.meshgrid(axis, axis)
    if kind == "vertical":
        return yy
    if kind == "horizontal":
        return xx
    if kind == "radial":
        dist = np.hypot(xx - 0.5, yy - 0.5) / 0.8
        return np.clip(dist, 0.0, 1.0)
    return (xx + yy) / 2.0


def gradient_image(
    size: int,
    kind: GradientKind,
    stops: tuple[str, ...],
) -> Image.Image:
    """Render evenly spaced color ``stops`` along a gradient field."""
    colors = np.array([hex_to_rgb(s) for s in stops], dtype=np.float64)
    positions = np.linspace(0.0, 1.0, len(stops))
    field = _gradient_field(size, kind)
    channels = [np.interp(field, positions, colors[:, c]) for c in range(3)]
    rgb = np.clip(np.rint(np.stack(channels, axis=-1)), 0, 255)
    return Image.fromarray(rgb.astype(np.uint8))


def _circles(draw: ImageDraw.ImageDraw, size: int) -> None:
    s = size / 600
    for i in range(20):
        cx, cy, r = (30 + i * 30) * s, (80 + i * 20) * s, (18 + (i % 5) * 3) * s
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=(255, 255, 255, 24))


def _wave(draw: ImageDraw.ImageDraw, size: int) -> None:
    s = size / 600
    xs = np.linspace(0, 600, 61)
    ys = 420 + 30 * np.sin(xs / 95)
    points = [(x * s, y * s) for x, y in zip(xs, ys, strict=True)]
    draw.polygon([*points, (size, size), (0, size)], fill=(255, 255, 255, 34))


def _triangles(draw: ImageDraw.ImageDraw, size: int) -> None:
    s = size / 600
    for i in range(12):
        x, y = (i % 4) * 150 + 50, (i // 4) * 150 + 80
        draw.polygon(
            [(x * s, (y + 100) * s), ((x + 50) * s, y * s),
             ((x + 100) * s, (y + 100) * s)],
            fill=(255, 255, 255, 24),
        )


def _rays(draw: ImageDraw.ImageDraw, size: int) -> None:
    center = size / 2
    reach = size * 260 / 600
    for i in range(24):
        angle = 2 * np.pi * i / 24
        draw.line(
            [(center, center),
             (center + reach * np.cos(angle), center + reach * np.sin(angle))],
            fill=(255, 255, 255, 34),
            width=max(1, round(3 * size / 600)),
        )


def _mosaic(draw: ImageDraw.ImageDraw, size: int) -> None:
    s = size / 600
    for i in range(45):
        x, y = (i % 9) * 66, (i // 9) * 66
        draw.rectangle(
            [(x + 6) * s, (y + 6) * s, (x + 60) * s, (y + 60) * s],
            fill=(0, 0, 0, 16),
        )


def _dune(draw: ImageDraw.ImageDraw, size: int) -> None:
    s = size / 600
    xs = np.linspace(0, 600, 61)
    ys = 320 + 30 * np.sin(xs / 95)
    points = [(x * s, y * s) for x, y in zip(xs, ys, strict=True)]
    draw.polygon([*points, (size, size), (0, size)], fill=(0, 0, 0, 24))


def _rings(draw: ImageDraw.ImageDraw, size: int) -> None:
    center = size / 2
    for radius in (240, 200, 160, 120, 80, 40):
        r = radius * size / 600
        draw.ellipse(
            [center - r, center - r, center + r, center + r],
            outline=(255, 255, 255, 34),
            width=max(1, round(12 * size / 600)),
        )


def _blocks(draw: ImageDraw.ImageDraw, size: int) -> None:
    s = size / 600
    for i in range(30):
        w, h = 40 + (i % 5) * 12, 40 + (i % 3) * 18
        x, y = (i % 6) * 95 + 20, (i // 6) * 95 + 20
        draw.rectangle(
            [x * s, y * s, (x + w) * s, (y + h) * s],
            fill=(255, 255, 255, 18),
        )


def _swoop(draw: ImageDraw.ImageDraw, size: int) -> None:
    s = size / 600
    xs = np.linspace(0, 600, 61)
    ys = 200 - 60 * np.sin(xs / 110)
    points = [(x * s, y * s) for x, y in zip(xs, ys, strict=True)]
    draw.polygon([*points, (size, size), (0, size)], fill=(255, 255, 255, 24))


SAMPLE_RECIPES: tuple[SampleRecipe, ...] = (
    SampleRecipe("sunset", "diagonal", ("#FF6A00", "#FFCA61", "#FFE8B5"),
                 _circles),
    SampleRecipe("ocean", "vertical", ("#002B55", "#0367A6", "#40C2F2"),
                 _wave),
    SampleRecipe("forest", "diagonal", ("#123D2A", "#23734F", "#7CC38B"),
                 _triangles),
    SampleRecipe("burst", "radial", ("#2B0A3D", "#6B1F7B", "#E45AD0"),
                 _rays),
    SampleRecipe("pastel", "horizontal",
                 ("#FFB3B3", "#FFD6A5", "#FDFFB6", "#CAFFBF", "#A0C4FF"),
                 _mosaic),
    SampleRecipe("dunes", "vertical", ("#4A2B0F", "#8C5B1A", "#E2AF5C"),
                 _dune),
    SampleRecipe("rings", "diagonal", ("#00353A", "#0B7A7F", "#7DF1F6"),
                 _rings),
    SampleRecipe("slate", "horizontal", ("#0F1319", "#2D3A4B", "#5E6E86"),
                 _blocks),
    SampleRecipe("coral", "diagonal", ("#1B1E3A", "#343E76", "#FF6F61"),
                 _swoop),
)


def render_sample(
    recipe: SampleRecipe,
    size: int = DEFAULT_SAMPLE_SIZE,
) -> Image.Image:
    """Render one sample image at ``size`` x ``size``."""
    base = gradient_image(size, recipe.kind, recipe.stops)
    if recipe.decorate is None:
        return base
    shapes = Image.new(COLOR_MODE_RGBA, (size, size), (0, 0, 0, 0))
    recipe.decorate(ImageDraw.Draw(shapes), size)
    shapes = shapes.filter(ImageFilter.GaussianBlur(radius=_SOFT_BLUR_RADIUS))
    return Image.alpha_composite(
        base.convert(COLOR_MODE_RGBA), shapes,
    ).convert(COLOR_MODE_RGB)


def sample_images(size: int = DEFAULT_SAMPLE_SIZE) -> list[Image.Image]:
    """Return all nine sample images."""
    return [render_sample(recipe, size) for recipe in SAMPLE_RECIPES]


def sample_items(
    size: int = DEFAULT_SAMPLE_SIZE,
    analysis: AnalysisConfig | None = None,
) -> list[GridItem]:
    """Return the sample images as analyzed grid items."""
    items: list[GridItem] = []
    for recipe in SAMPLE_RECIPES:
        image = render_sample(recipe, size)
        colors = analyze_image(image, analysis)
        items.append(make_grid_item(
            image=image,
            average_color=colors.average,
            dominant_colors=colors.dominant,
            source=None,
        ))
    return items

"""Palette report mirroring the grid order, plus hue-based reordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gridtone.color_format import hue, rgb_to_hex
from gridtone.items import stripe_colors

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator, Sequence

    from gridtone.items import GridItem
    from gridtone.type_defs import RGB, ColorMode


def item_colors(item: GridItem, mode: ColorMode) -> tuple[RGB, ...]:
    """Return the one (average) or three (dominant) colors of ``item``."""
    if mode == "average":
        return (item.average_color,)
    return stripe_colors(item)


def palette_rows(
    items: Sequence[GridItem],
    mode: ColorMode,
) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(position, hex colors)`` for each item, 1-based."""
    for position, item in enumerate(items, start=1):
        yield position, [rgb_to_hex(c) for c in item_colors(item, mode)]


def format_palette(
    items: Sequence[GridItem],
    mode: ColorMode,
    columns: int,
) -> str:
    """Render the palette as text, one grid row per line."""
    label = "Average" if mode == "average" else "Dominant (3)"
    lines = [f"Palette: {label}"]
    row: list[str] = []
    for position, hexes in palette_rows(items, mode):
        row.append(f"#{position:<3d} {'/'.join(hexes)}")
        if len(row) == columns:
            lines.append("  ".join(row))
            row = []
    if row:
        lines.append("  ".join(row))
    return "\n".join(lines)


def sort_by_hue(
    items: Sequence[GridItem],
    mode: ColorMode = "average",
) -> list[GridItem]:
    """
    Return a new order sorted by hue.

    The average color is used in average mode, the first stripe in
    dominant mode. Equal hues keep their relative order.
    """
    return sorted(items, key=lambda item: hue(item_colors(item, mode)[0]))

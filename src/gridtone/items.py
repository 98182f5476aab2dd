"""
Grid item model and the normalization boundary for color data.

Everything that builds a :class:`GridItem` goes through
:func:`make_grid_item`, so the renderer and palette code can rely on
well-formed integer triples without further checks.
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gridtone.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    COLOR_FALLBACK_GRAY,
    RGB_CHANNELS,
    STRIPE_COUNT,
)

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image

    from gridtone.type_defs import RGB


@dataclass(frozen=True, slots=True)
class GridItem:
    """One image placed in the grid together with its color metadata."""

    id: str
    image: Image.Image | None = field(compare=False, repr=False)
    average_color: RGB
    dominant_colors: tuple[RGB, ...] = ()
    source: str | None = None


def _clamp_channel(value: Any) -> int | None:
    """Return ``value`` as an int channel, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(min(CHANNEL_MAX, max(CHANNEL_MIN, round(number))))


def coerce_rgb(value: Any) -> RGB | None:
    """Coerce a three channel sequence into an RGB triple, or None."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return None
    if len(value) < RGB_CHANNELS:
        return None
    channels = [_clamp_channel(v) for v in value[:RGB_CHANNELS]]
    if any(c is None for c in channels):
        return None
    r, g, b = channels
    return r, g, b  # type: ignore[return-value]


def normalize_rgb(value: Any) -> RGB:
    """Coerce ``value`` into an RGB triple, falling back to mid gray."""
    rgb = coerce_rgb(value)
    return COLOR_FALLBACK_GRAY if rgb is None else rgb


def normalize_dominant(value: Any) -> tuple[RGB, ...]:
    """Keep the well-formed entries of ``value``, at most three of them."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return ()
    colors = [rgb for rgb in (coerce_rgb(v) for v in value) if rgb]
    return tuple(colors[:STRIPE_COUNT])


def make_grid_item(
    *,
    image: Image.Image | None,
    average_color: Any,
    dominant_colors: Any = (),
    item_id: str | None = None,
    source: str | None = None,
) -> GridItem:
    """Build a GridItem, normalizing colors and assigning an id if needed."""
    return GridItem(
        id=item_id or uuid.uuid4().hex,
        image=image,
        average_color=normalize_rgb(average_color),
        dominant_colors=normalize_dominant(dominant_colors),
        source=source,
    )


def stripe_colors(item: GridItem) -> tuple[RGB, RGB, RGB]:
    """
    Return exactly three stripe colors for ``item``.

    Missing stripes reuse the nearest available color: the second falls
    back to the first, the third to the second, and with no dominant
    colors at all every stripe uses the average color.
    """
    dom = item.dominant_colors
    if not dom:
        avg = item.average_color
        return avg, avg, avg
    first = dom[0]
    second = dom[1] if len(dom) > 1 else first
    third = dom[2] if len(dom) > 2 else second  # noqa: PLR2004
    return first, second, third


def validate_order(items: Sequence[GridItem]) -> None:
    """Reject grid orders that contain the same item id twice."""
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            msg = f"Duplicate grid item id: {item.id}"
            raise ValueError(msg)
        seen.add(item.id)

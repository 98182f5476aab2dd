"""
Pure color conversions shared by the renderer, palette report and CLI.

Every function here is total over the valid RGB domain and keeps no
state between calls, so the display layer can call them per frame.
"""

from __future__ import annotations

import colorsys
from typing import TYPE_CHECKING

from gridtone.constants import CHANNEL_MAX

if TYPE_CHECKING:  # pragma: no cover
    from gridtone.type_defs import RGB, RGBA

_HEX_RGB_LENGTH = 6
_HEX_SHORT_LENGTH = 3


def rgb_to_hex(rgb: RGB) -> str:
    """Return ``#RRGGBB`` with uppercase, zero padded hex digits."""
    r, g, b = rgb
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(text: str) -> RGB:
    """Parse ``#rrggbb`` (or ``#rgb`` shorthand) strings into RGB triples."""
    stripped = text.strip().lstrip("#")
    if len(stripped) == _HEX_SHORT_LENGTH:
        stripped = "".join(ch * 2 for ch in stripped)
    if len(stripped) != _HEX_RGB_LENGTH:
        msg = "color must look like #rrggbb"
        raise ValueError(msg)
    try:
        red = int(stripped[0:2], 16)
        green = int(stripped[2:4], 16)
        blue = int(stripped[4:6], 16)
    except ValueError as exc:
        msg = "color contains invalid hex digits"
        raise ValueError(msg) from exc
    return red, green, blue


def rgb_css(rgb: RGB) -> str:
    """Return a CSS ``rgb(r,g,b)`` expression."""
    r, g, b = rgb
    return f"rgb({r},{g},{b})"


def rgba_css(rgb: RGB, alpha: float) -> str:
    """Return a CSS ``rgba(r,g,b,a)`` expression."""
    r, g, b = rgb
    return f"rgba({r},{g},{b},{alpha:g})"


def alpha_to_byte(alpha: float) -> int:
    """Map an opacity in [0, 1] to a Pillow alpha byte."""
    clamped = min(1.0, max(0.0, float(alpha)))
    return int(round(clamped * CHANNEL_MAX))


def rgba_fill(rgb: RGB, alpha: float) -> RGBA:
    """Return the Pillow fill tuple for ``rgb`` at opacity ``alpha``."""
    r, g, b = rgb
    return r, g, b, alpha_to_byte(alpha)


def hue(rgb: RGB) -> float:
    """
    Return the HSL hue of ``rgb`` normalized to [0, 1).

    Achromatic colors (all channels equal) map to 0.
    """
    r, g, b = (channel / CHANNEL_MAX for channel in rgb)
    h, _, _ = colorsys.rgb_to_hls(r, g, b)
    return h % 1.0

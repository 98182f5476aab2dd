"""
Defines shared type aliases for gridtone.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Literal

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]
ColorMode = Literal["average", "dominant"]
OverlayStyle = Literal["dot", "half", "full"]

COLOR_MODES: tuple[ColorMode, ...] = ("average", "dominant")
OVERLAY_STYLES: tuple[OverlayStyle, ...] = ("dot", "half", "full")

"""Downsample decoded bitmaps to a bounded working resolution."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from gridtone.config_defaults import DEFAULT_SAMPLE_MAX_SIDE
from gridtone.constants import COLOR_MODE_RGBA, RGB_CHANNELS, RGBA_CHANNELS
from gridtone.errors import EmptyBitmapError


@dataclass(frozen=True, slots=True)
class SampledBitmap:
    """Flat row-major RGBA bytes of a downscaled bitmap."""

    width: int
    height: int
    pixels: np.ndarray

    def rgb(self) -> np.ndarray:
        """Return an ``(N, 3)`` view of the RGB channels, alpha dropped."""
        return self.pixels.reshape(-1, RGBA_CHANNELS)[:, :RGB_CHANNELS]


def scaled_dimensions(
    width: int,
    height: int,
    max_side: int = DEFAULT_SAMPLE_MAX_SIDE,
) -> tuple[int, int]:
    """
    Return the working size for a ``width`` x ``height`` bitmap.

    The longer side is mapped to ``max_side`` and the shorter side scaled
    proportionally, never below one pixel.
    """
    if width <= 0 or height <= 0:
        msg = f"Bitmap has zero area: {width}x{height}"
        raise EmptyBitmapError(msg)
    if max_side <= 0:
        msg = "max_side must be positive"
        raise ValueError(msg)
    ratio = max(width, height) / max_side
    return (
        max(1, int(np.floor(width / ratio + 0.5))),
        max(1, int(np.floor(height / ratio + 0.5))),
    )


def sample_bitmap(
    image: Image.Image,
    max_side: int = DEFAULT_SAMPLE_MAX_SIDE,
) -> SampledBitmap:
    """
    Downscale ``image`` and expose its pixels as RGBA bytes.

    Nearest-neighbour resampling keeps the sampled colors exactly as
    they appear in the source, so flat regions stay flat.

    Raises:
        EmptyBitmapError: If the image has zero area.

    """
    scaled_w, scaled_h = scaled_dimensions(image.width, image.height, max_side)
    rgba = image if image.mode == COLOR_MODE_RGBA else image.convert(
        COLOR_MODE_RGBA)
    if rgba.size != (scaled_w, scaled_h):
        rgba = rgba.resize((scaled_w, scaled_h), Image.Resampling.NEAREST)
    pixels = np.asarray(rgba, dtype=np.uint8).reshape(-1)
    return SampledBitmap(width=scaled_w, height=scaled_h, pixels=pixels)

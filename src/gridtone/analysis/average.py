"""Mean RGB of a sampled bitmap."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from gridtone.constants import COLOR_FALLBACK_GRAY

if TYPE_CHECKING:  # pragma: no cover
    from gridtone.analysis.sampler import SampledBitmap
    from gridtone.type_defs import RGB


def rounded_mean(sums: np.ndarray, count: int) -> np.ndarray:
    """
    Return ``sums / count`` rounded half up, in exact integer math.

    Matches ``floor(x + 0.5)`` for the non-negative sums used here.
    """
    return (2 * sums + count) // (2 * count)


def average_color(sample: SampledBitmap) -> RGB:
    """Return the per-channel mean of ``sample``; alpha is ignored."""
    rgb = sample.rgb()
    count = rgb.shape[0]
    if count == 0:
        return COLOR_FALLBACK_GRAY
    sums = rgb.sum(axis=0, dtype=np.int64)
    r, g, b = (int(v) for v in rounded_mean(sums, count))
    return r, g, b

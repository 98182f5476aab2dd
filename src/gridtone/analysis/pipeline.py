"""Run both color extractors over one sampled bitmap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gridtone.analysis.average import average_color
from gridtone.analysis.dominant import dominant_colors
from gridtone.analysis.sampler import sample_bitmap
from gridtone.config import AnalysisConfig
from gridtone.constants import COLOR_FALLBACK_GRAY
from gridtone.errors import EmptyBitmapError
from gridtone.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image

    from gridtone.type_defs import RGB


@dataclass(frozen=True, slots=True)
class ColorAnalysis:
    """Average and dominant colors of one image."""

    average: RGB
    dominant: tuple[RGB, ...]


def analyze_image(
    image: Image.Image,
    settings: AnalysisConfig | None = None,
) -> ColorAnalysis:
    """
    Sample ``image`` once and compute its average and dominant colors.

    A zero-area image yields the gray fallback and no dominant colors.
    """
    settings = settings or AnalysisConfig()
    try:
        sample = sample_bitmap(image, settings.max_side)
    except EmptyBitmapError:
        logger.warning("Empty bitmap %s; using fallback colors", image.size)
        return ColorAnalysis(average=COLOR_FALLBACK_GRAY, dominant=())
    return ColorAnalysis(
        average=average_color(sample),
        dominant=tuple(dominant_colors(
            sample,
            k=settings.k,
            sample_cap=settings.sample_cap,
            iterations=settings.iterations,
        )),
    )

"""
Color analysis split into sampling, averaging and clustering steps.

The package re-exports the entry points most callers need.
"""

from __future__ import annotations

from . import average, dominant, pipeline, sampler
from .average import average_color
from .dominant import dominant_colors
from .pipeline import ColorAnalysis, analyze_image
from .sampler import SampledBitmap, sample_bitmap, scaled_dimensions

__all__ = [
    "ColorAnalysis",
    "SampledBitmap",
    "analyze_image",
    "average",
    "average_color",
    "dominant",
    "dominant_colors",
    "pipeline",
    "sample_bitmap",
    "sampler",
    "scaled_dimensions",
]

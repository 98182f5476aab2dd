"""
Dominant colors by k-means clustering in RGB space.

The clusterer is fully deterministic: centers are seeded from the first
``k`` subsampled points, ties go to the lowest cluster index and empty
clusters keep their previous center. Work is bounded by
``sample_cap * iterations * k`` distance evaluations regardless of the
source resolution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from gridtone.analysis.average import rounded_mean
from gridtone.config_defaults import (
    DEFAULT_CLUSTER_COUNT,
    DEFAULT_ITERATIONS,
    DEFAULT_SAMPLE_CAP,
)

if TYPE_CHECKING:  # pragma: no cover
    from gridtone.analysis.sampler import SampledBitmap
    from gridtone.type_defs import RGB


def subsample_points(rgb: np.ndarray, sample_cap: int) -> np.ndarray:
    """Take every ``total // sample_cap``-th pixel, at most ``sample_cap``."""
    total = rgb.shape[0]
    stride = max(1, total // sample_cap)
    return rgb[::stride][:sample_cap].astype(np.int64)


def assign_clusters(points: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Return the index of the nearest center for every point."""
    diff = points[:, None, :] - centers[None, :, :]
    dist = np.einsum("nkc,nkc->nk", diff, diff)
    # argmin keeps the first minimum, so ties resolve to the lowest index
    return np.argmin(dist, axis=1)


def update_centers(
    points: np.ndarray,
    labels: np.ndarray,
    centers: np.ndarray,
) -> np.ndarray:
    """Move every populated center to the rounded mean of its points."""
    k = centers.shape[0]
    counts = np.bincount(labels, minlength=k)
    sums = np.zeros_like(centers)
    np.add.at(sums, labels, points)
    updated = centers.copy()
    for j in range(k):
        if counts[j] > 0:
            updated[j] = rounded_mean(sums[j], int(counts[j]))
    return updated


def kmeans(
    points: np.ndarray,
    k: int,
    iterations: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Cluster ``points`` and return ``(centers, populations)``.

    Populations come from one extra assignment pass after the last
    update, so they describe the returned centers.
    """
    centers = points[:k].copy()
    for _ in range(iterations):
        labels = assign_clusters(points, centers)
        centers = update_centers(points, labels, centers)
    labels = assign_clusters(points, centers)
    counts = np.bincount(labels, minlength=centers.shape[0])
    return centers, counts


def dominant_colors(
    sample: SampledBitmap,
    k: int = DEFAULT_CLUSTER_COUNT,
    sample_cap: int = DEFAULT_SAMPLE_CAP,
    iterations: int = DEFAULT_ITERATIONS,
) -> list[RGB]:
    """
    Return up to ``k`` dominant colors ordered by population, largest first.

    Centers that end up with no points are dropped, so the result may be
    shorter than ``k``; an empty sample yields an empty list.
    """
    if k <= 0 or sample_cap <= 0:
        msg = "k and sample_cap must be positive"
        raise ValueError(msg)
    points = subsample_points(sample.rgb(), sample_cap)
    if points.shape[0] == 0:
        return []

    centers, counts = kmeans(points, k, max(0, iterations))
    # sorted() is stable, equal populations keep their seed order
    order = sorted(range(centers.shape[0]), key=lambda j: -int(counts[j]))
    result: list[RGB] = []
    for j in order[:k]:
        if counts[j] == 0:
            continue
        r, g, b = (int(v) for v in centers[j])
        result.append((r, g, b))
    return result

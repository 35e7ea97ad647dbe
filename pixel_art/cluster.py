"""Palette reduction using K-means clustering with K-means++ seeding."""
from __future__ import annotations

import logging
import math
import random
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .color import Color, average_color
from .config import ReductionLevel, parse_reduction_level

logger = logging.getLogger("pixel_art")

# (ratio, minimum, maximum) applied to the extracted palette size
TARGET_SIZE_RULES: Dict[ReductionLevel, Tuple[float, int, int]] = {
    ReductionLevel.LOW: (0.8, 16, 32),
    ReductionLevel.MEDIUM: (0.5, 8, 16),
    ReductionLevel.HIGH: (0.3, 4, 8),
}

MAX_ITERATIONS = 20
CONVERGENCE_THRESHOLD = 1.0


def target_palette_size(
    level: Union[ReductionLevel, str], palette_size: int
) -> int:
    """Compute how many colors a palette should be reduced to.

    Args:
        level: Reduction level.
        palette_size: Number of colors in the extracted palette.

    Returns:
        Target number of clusters.
    """
    ratio, lowest, highest = TARGET_SIZE_RULES[parse_reduction_level(level)]
    scaled = int(math.floor(palette_size * ratio + 0.5))
    return min(max(scaled, lowest), highest)


def kmeans_plus_plus_init(
    points: np.ndarray, k: int, rng: random.Random
) -> np.ndarray:
    """Pick initial centroids using the K-means++ algorithm.

    The first centroid is chosen uniformly. Each following centroid is
    drawn with probability proportional to the squared distance from a
    point to its nearest already-chosen centroid; chosen points have
    zero weight.

    Args:
        points: Array of shape (M, 3) with distinct RGB values.
        k: Number of centroids, at most M.
        rng: Random number generator.

    Returns:
        Array of shape (k, 3) with initial centroids.
    """
    n_points = points.shape[0]
    centroids = np.zeros((k, 3), dtype=np.float64)
    chosen = np.zeros(n_points, dtype=bool)

    first_idx = rng.randrange(n_points)
    centroids[0] = points[first_idx]
    chosen[first_idx] = True
    distances = np.full(n_points, np.inf, dtype=np.float64)

    for i in range(1, k):
        d_sq = np.sum((points - centroids[i - 1]) ** 2, axis=1)
        distances = np.minimum(distances, d_sq)
        weights = np.where(chosen, 0.0, distances)
        total = float(weights.sum())

        if total <= 0.0:
            remaining = np.flatnonzero(~chosen)
            idx = int(remaining[rng.randrange(len(remaining))])
        else:
            r = rng.random() * total
            idx = int(np.searchsorted(np.cumsum(weights), r, side="right"))
            if idx >= n_points:
                # Float round-off pushed r past the last cumulative sum
                idx = int(np.flatnonzero(weights)[-1])

        centroids[i] = points[idx]
        chosen[idx] = True

    return centroids


def lloyd_iterations(
    points: np.ndarray,
    centroids: np.ndarray,
    max_iterations: int = MAX_ITERATIONS,
    convergence_threshold: float = CONVERGENCE_THRESHOLD,
) -> Tuple[np.ndarray, int]:
    """Refine centroids with Lloyd's algorithm.

    Each round assigns every point to its nearest centroid (ties go to
    the lowest centroid index) and moves each centroid to the rounded
    mean of its points. A centroid with no points keeps its position.
    Stops once no centroid moved farther than ``convergence_threshold``.

    Args:
        points: Array of shape (M, 3) with RGB values.
        centroids: Initial centroids of shape (k, 3).
        max_iterations: Maximum number of rounds.
        convergence_threshold: Largest movement still counted as converged.

    Returns:
        Tuple of (final centroids, number of rounds run).
    """
    k = centroids.shape[0]
    centroids = centroids.copy()

    for iteration in range(max_iterations):
        diff = points[:, None, :] - centroids[None, :, :]
        dists = np.sum(diff * diff, axis=2)
        labels = np.argmin(dists, axis=1)

        new_centroids = centroids.copy()
        for idx in range(k):
            members = points[labels == idx]
            if len(members) > 0:
                new_centroids[idx] = average_color(members)

        movement = np.sqrt(np.sum((new_centroids - centroids) ** 2, axis=1))
        centroids = new_centroids
        if movement.max() <= convergence_threshold:
            return centroids, iteration + 1

    return centroids, max_iterations


def reduce_palette(
    colors: Sequence[Sequence[int]],
    level: Union[ReductionLevel, str],
    rng: Optional[random.Random] = None,
    max_iterations: int = MAX_ITERATIONS,
    convergence_threshold: float = CONVERGENCE_THRESHOLD,
) -> List[Color]:
    """Reduce a palette to the level's target size with K-means.

    Palettes already at or below the target size are returned unchanged.
    Otherwise the result holds the final centroids in cluster order; it
    is not re-sorted by luminance.

    Without an explicit ``rng`` a fresh unseeded generator is used, so
    repeated calls on the same palette may return different (equally
    valid) results. Pass ``random.Random(seed)`` for reproducible output.

    Args:
        colors: Unique palette colors.
        level: Reduction level selecting the target size.
        rng: Random number generator for centroid seeding.
        max_iterations: Maximum number of Lloyd rounds.
        convergence_threshold: Early-stop movement threshold.

    Returns:
        Reduced palette of unique colors.
    """
    palette = [Color(int(c[0]), int(c[1]), int(c[2])) for c in colors]
    k = target_palette_size(level, len(palette))
    if len(palette) <= k:
        logger.debug(
            f"Palette has {len(palette)} colors (target {k}), skipping clustering"
        )
        return palette

    if rng is None:
        rng = random.Random()

    points = np.array(palette, dtype=np.float64)
    centroids = kmeans_plus_plus_init(points, k, rng)
    centroids, rounds = lloyd_iterations(
        points, centroids, max_iterations, convergence_threshold
    )

    # Two clusters can settle on the same rounded mean
    reduced: Dict[Color, None] = {}
    for row in centroids.astype(int).tolist():
        reduced.setdefault(Color(*row), None)

    logger.debug(
        f"Reduced palette {len(palette)} -> {len(reduced)} colors "
        f"(target {k}, {rounds} rounds)"
    )
    return list(reduced)

"""Geometric utility functions.

Array-level helpers used by the curve smoother and the stroke analyzer.
Paths are numpy arrays of shape (N, 2) holding (x, y) rows.

The module provides the following functions:
    drop_consecutive_duplicates: Remove repeated samples.
    smooth_path: Gaussian smoothing with pinned endpoints.
    catmull_rom_chain: Evaluate a piecewise cubic through control points.
    resample_path: Resample a path at equal arc-length spacing.
    angle_between: Angle between two direction vectors.
    quantize_angle: Map an angle onto direction buckets.

Example usage::

    import numpy as np
    from hanzi_lib.utils.geometry import catmull_rom_chain, resample_path

    control = np.array([[0, 0], [50, 10], [100, 0]], dtype=float)
    curve = catmull_rom_chain(control, samples_per_segment=8)
    even = resample_path(curve, spacing=4.0)
"""

from __future__ import annotations

import math

import numpy as np
from scipy.ndimage import gaussian_filter1d

# Uniform Catmull-Rom basis, rows multiply [1, t, t^2, t^3]
_CATMULL_ROM_BASIS = 0.5 * np.array([
    [0.0, 2.0, 0.0, 0.0],
    [-1.0, 0.0, 1.0, 0.0],
    [2.0, -5.0, 4.0, -1.0],
    [-1.0, 3.0, -3.0, 1.0],
])


def drop_consecutive_duplicates(path: np.ndarray) -> np.ndarray:
    """Remove samples identical to their predecessor.

    Args:
        path: Array of shape (N, 2).

    Returns:
        Array of shape (M, 2) with M <= N, order preserved.
    """
    if len(path) < 2:
        return path
    keep = np.ones(len(path), dtype=bool)
    keep[1:] = np.any(np.diff(path, axis=0) != 0, axis=1)
    return path[keep]


def smooth_path(path: np.ndarray, sigma: float) -> np.ndarray:
    """Apply Gaussian smoothing to a path.

    Smooths x and y independently, then restores the original endpoints so
    the extent of the stroke is preserved.

    Args:
        path: Array of shape (N, 2).
        sigma: Standard deviation of the Gaussian kernel in samples.

    Returns:
        Smoothed array of the same shape. Paths with fewer than 3 points,
        or sigma 0, are returned unchanged.
    """
    if len(path) < 3 or sigma <= 0:
        return path

    smoothed = np.column_stack([
        gaussian_filter1d(path[:, 0], sigma=sigma, mode='nearest'),
        gaussian_filter1d(path[:, 1], sigma=sigma, mode='nearest'),
    ])
    smoothed[0] = path[0]
    smoothed[-1] = path[-1]
    return smoothed


def catmull_rom_chain(control: np.ndarray, samples_per_segment: int) -> np.ndarray:
    """Evaluate a uniform Catmull-Rom spline through all control points.

    The chain is padded by repeating the first and last control point, so
    the curve starts and ends exactly on them.

    Args:
        control: Control points, shape (N, 2) with N >= 2.
        samples_per_segment: Evaluations per span between two control points.

    Returns:
        Array of shape ((N - 1) * samples_per_segment + 1, 2).
    """
    padded = np.vstack([control[:1], control, control[-1:]])
    t = np.arange(samples_per_segment) / samples_per_segment
    powers = np.column_stack([np.ones_like(t), t, t * t, t * t * t])
    weights = powers @ _CATMULL_ROM_BASIS  # (S, 4)

    spans = []
    for i in range(len(control) - 1):
        spans.append(weights @ padded[i:i + 4])
    spans.append(control[-1:])
    return np.vstack(spans)


def resample_path(path: np.ndarray, spacing: float) -> np.ndarray:
    """Resample a path at equal arc-length intervals.

    Args:
        path: Array of shape (N, 2).
        spacing: Target distance between consecutive output points.

    Returns:
        Array of evenly spaced points that always includes the original
        start and end points. Returns the input unchanged if it has fewer
        than 2 points or no length.
    """
    if len(path) < 2:
        return path

    steps = np.hypot(*np.diff(path, axis=0).T)
    keep = np.concatenate([[True], steps > 0])
    path = path[keep]
    cumulative = np.concatenate([[0.0], np.cumsum(steps[steps > 0])])

    total = cumulative[-1]
    if total <= 0:
        return path[:1]

    n_points = max(2, int(math.ceil(total / spacing)) + 1)
    targets = np.linspace(0.0, total, n_points)
    return np.column_stack([
        np.interp(targets, cumulative, path[:, 0]),
        np.interp(targets, cumulative, path[:, 1]),
    ])


def angle_between(d1: np.ndarray, d2: np.ndarray) -> float:
    """Angle between two direction vectors in radians.

    Both vectors are expected to be normalized.

    Returns:
        Angle from 0 (parallel) to pi (opposite). The dot product is
        clamped to handle numerical precision issues.
    """
    dot = float(d1[0] * d2[0] + d1[1] * d2[1])
    return math.acos(max(-1.0, min(1.0, dot)))


def quantize_angle(dx: float, dy: float, buckets: int) -> int:
    """Quantize the direction of (dx, dy) into ``buckets`` sectors.

    Bucket 0 points along +x; on the y-down canvas buckets grow clockwise.
    A zero vector maps to bucket 0.
    """
    if dx == 0 and dy == 0:
        return 0
    angle = math.atan2(dy, dx) % (2 * math.pi)
    return int(round(angle / (2 * math.pi) * buckets)) % buckets

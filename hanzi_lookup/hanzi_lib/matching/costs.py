"""Pairwise sub-stroke costs.

Matching two sub-strokes costs a weighted sum of three differences, each
normalized to [0, 1]:

    - direction: circular bucket distance divided by half a turn, using
      the bucket count of the match settings
    - length: absolute difference divided by 255
    - center: Euclidean distance divided by the 0..255 square diagonal

The cost of every query/candidate pair is computed at once as a numpy
matrix, which the alignment then consumes row by row.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..config import CANVAS_MAX, DEFAULT_MATCH_SETTINGS, MatchSettings
from ..domain.features import SubStroke

_CENTER_SPAN = CANVAS_MAX * math.sqrt(2)


def features_to_array(features: Sequence[SubStroke]) -> np.ndarray:
    """Stack sub-strokes into a float array of (direction, length, cx, cy) rows."""
    if not features:
        return np.zeros((0, 4))
    return np.array(
        [(s.direction, s.length, s.center_x, s.center_y) for s in features],
        dtype=float,
    )


def pair_cost_matrix(query: Sequence[SubStroke], candidate: Sequence[SubStroke],
                     settings: MatchSettings = DEFAULT_MATCH_SETTINGS) -> np.ndarray:
    """Cost of matching every query sub-stroke with every candidate sub-stroke.

    Args:
        query: Query feature sequence (n sub-strokes).
        candidate: Candidate feature sequence (m sub-strokes).
        settings: Weights applied to the three normalized differences and
            the direction bucket count.

    Returns:
        Array of shape (n, m); entry [i, j] is the cost of pairing query[i]
        with candidate[j]. Identical sub-strokes cost exactly 0.
    """
    q = features_to_array(query)[:, None, :]
    c = features_to_array(candidate)[None, :, :]

    buckets = settings.direction_buckets
    raw_dir = np.abs(q[..., 0] - c[..., 0]) % buckets
    direction = np.minimum(raw_dir, buckets - raw_dir) / (buckets / 2)
    length = np.abs(q[..., 1] - c[..., 1]) / CANVAS_MAX
    center = np.hypot(q[..., 2] - c[..., 2], q[..., 3] - c[..., 3]) / _CENTER_SPAN

    return (settings.direction_weight * direction
            + settings.length_weight * length
            + settings.center_weight * center)


def substroke_cost(a: SubStroke, b: SubStroke,
                   settings: MatchSettings = DEFAULT_MATCH_SETTINGS) -> float:
    """Cost of matching two single sub-strokes."""
    return float(pair_cost_matrix((a,), (b,), settings)[0, 0])

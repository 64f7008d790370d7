"""Curve fitting for raw pen strokes.

Pen input arrives with irregular sampling density and a pixel or two of
jitter. Estimating direction straight from consecutive samples is therefore
noisy. The CurveSmoother turns the raw samples into a dense, evenly spaced
point sequence lying on a smooth piecewise cubic curve:

    1. Consecutive duplicate samples are dropped.
    2. The raw polyline is resampled at even spacing, evening out density.
    3. A Gaussian filter removes jitter (endpoints stay pinned).
    4. A Catmull-Rom spline is fitted through the filtered control points.
    5. The curve is resampled at a fixed arc-length spacing.

Strokes with fewer than two distinct points cannot carry a direction. They
are passed through unchanged and the stroke analyzer turns them into a
single zero-length sub-stroke.

Example usage::

    from hanzi_lib.analysis.curve import CurveSmoother
    from hanzi_lib.domain import Point, Stroke

    smoother = CurveSmoother()
    points = smoother.smooth(Stroke([Point(10, 10), Point(60, 12), Point(120, 10)]))
    print(points.shape)
"""

from __future__ import annotations

import numpy as np

from ..config import DEFAULT_ANALYSIS_SETTINGS, AnalysisSettings
from ..domain.geometry import Stroke
from ..utils.geometry import (
    catmull_rom_chain,
    drop_consecutive_duplicates,
    resample_path,
    smooth_path,
)


class CurveSmoother:
    """Fits and resamples a smooth curve through a stroke's raw points.

    Stateless apart from its settings; one instance can be shared freely.

    Attributes:
        settings: AnalysisSettings providing sigma, samples per span and
            resample spacing.
    """

    def __init__(self, settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS):
        self.settings = settings

    def smooth(self, stroke: Stroke) -> np.ndarray:
        """Return the smoothed, resampled points of a stroke.

        Args:
            stroke: Raw stroke with at least one point.

        Returns:
            Float array of shape (N, 2). For degenerate strokes (fewer than
            two distinct points) this is the raw points unchanged.
        """
        raw = np.array([p.to_tuple() for p in stroke], dtype=float).reshape(-1, 2)
        control = drop_consecutive_duplicates(raw)
        if len(control) < 2:
            return raw

        control = resample_path(control, self.settings.resample_spacing)
        control = smooth_path(control, self.settings.smoothing_sigma)
        curve = catmull_rom_chain(control, self.settings.samples_per_segment)
        return resample_path(curve, self.settings.resample_spacing)

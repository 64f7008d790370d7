"""Sub-stroke segmentation of smoothed strokes.

This module provides the StrokeAnalyzer class, which splits one smoothed
stroke into sub-strokes wherever the drawing direction turns, and
describes each sub-stroke by a quantized direction, a normalized length and
a normalized center.

Segmentation walks the resampled points while keeping a running average of
the unit tangents of the open segment. When the current tangent deviates
from that average by more than the split angle, the open segment is closed
and a new one starts at the current point. A segment that is still shorter
than the minimum segment length is not closed; its running average restarts
from the current tangent instead, so the rounded corners produced by
smoothing do not leave slivers behind.

Lengths and centers are projected onto a square normalization frame (the
character's bounding square), which makes features independent of where and
how large the character was drawn.

Example usage::

    from hanzi_lib.analysis.curve import CurveSmoother
    from hanzi_lib.analysis.strokes import StrokeAnalyzer
    from hanzi_lib.domain import BBox

    points = CurveSmoother().smooth(stroke)
    frame = BBox(0, 0, 255, 255)
    for sub in StrokeAnalyzer().analyze(points, frame):
        print(sub.direction, sub.length, sub.center_x, sub.center_y)
"""

from __future__ import annotations

import math

import numpy as np

from ..config import CANVAS_MAX, DEFAULT_ANALYSIS_SETTINGS, AnalysisSettings
from ..domain.features import SubStroke
from ..domain.geometry import BBox
from ..utils.geometry import angle_between, quantize_angle


class StrokeAnalyzer:
    """Splits smoothed strokes into sub-strokes and measures them.

    Attributes:
        settings: AnalysisSettings providing the split angle, minimum
            segment length and direction bucket count.
    """

    def __init__(self, settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS):
        self.settings = settings
        self._split_angle = math.radians(settings.split_angle_degrees)

    def analyze(self, points: np.ndarray, frame: BBox) -> list[SubStroke]:
        """Segment one smoothed stroke.

        Args:
            points: Smoothed points, shape (N, 2), N >= 1.
            frame: Square normalization frame of the whole character.

        Returns:
            Sub-strokes in drawing order. Always at least one; a stroke
            without length yields a single zero-length sub-stroke.
        """
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        deltas = np.diff(points, axis=0)
        steps = np.hypot(deltas[:, 0], deltas[:, 1]) if len(deltas) else np.zeros(0)

        if len(points) < 2 or not np.any(steps > 0):
            return [self._degenerate(points[0], frame)]

        result = []
        start = 0
        running = np.zeros(2)   # tangent sum deciding splits
        total = np.zeros(2)     # tangent sum giving the segment direction
        seg_length = 0.0

        for i, (delta, step) in enumerate(zip(deltas, steps)):
            if step <= 0:
                continue
            tangent = delta / step

            norm = math.hypot(running[0], running[1])
            if norm > 0 and angle_between(tangent, running / norm) > self._split_angle:
                if seg_length >= self.settings.min_segment_length:
                    result.append(self._measure(points[start], points[i], total, frame))
                    start = i
                    total = np.zeros(2)
                    seg_length = 0.0
                running = np.zeros(2)

            running = running + tangent
            total = total + tangent
            seg_length += step

        result.append(self._measure(points[start], points[-1], total, frame))
        return result

    def _measure(self, start: np.ndarray, end: np.ndarray, tangent_sum: np.ndarray,
                 frame: BBox) -> SubStroke:
        """Build the SubStroke for a closed segment."""
        dx, dy = tangent_sum
        if math.hypot(dx, dy) < 1e-9:
            dx, dy = end - start
        direction = quantize_angle(float(dx), float(dy), self.settings.direction_buckets)

        chord = math.hypot(*(end - start))
        diagonal = frame.width * math.sqrt(2)
        length = _to_byte(chord / diagonal * CANVAS_MAX) if diagonal > 0 else 0

        cx, cy = _normalize_point((start + end) / 2, frame)
        return SubStroke(direction=direction, length=length, center_x=cx, center_y=cy)

    def _degenerate(self, point: np.ndarray, frame: BBox) -> SubStroke:
        cx, cy = _normalize_point(point, frame)
        return SubStroke(direction=0, length=0, center_x=cx, center_y=cy)


def _normalize_point(point: np.ndarray, frame: BBox) -> tuple[int, int]:
    """Project a canvas point onto 0..255 frame coordinates."""
    if frame.width <= 0 or frame.height <= 0:
        return (CANVAS_MAX + 1) // 2, (CANVAS_MAX + 1) // 2
    x = (point[0] - frame.x_min) / frame.width * CANVAS_MAX
    y = (point[1] - frame.y_min) / frame.height * CANVAS_MAX
    return _to_byte(x), _to_byte(y)


def _to_byte(value: float) -> int:
    return int(min(CANVAS_MAX, max(0, round(float(value)))))

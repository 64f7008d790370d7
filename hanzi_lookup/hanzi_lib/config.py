"""Shared configuration for character analysis and matching.

This module centralizes the constants used by:
    - analysis.curve (stroke smoothing and resampling)
    - analysis.strokes (sub-stroke segmentation and quantization)
    - matching (alignment weights, skip penalty, pruning)

The analysis constants must be identical to the ones used when the reference
database was prepared, otherwise query and reference features are not
comparable and scores lose their meaning.

Settings are grouped into two frozen dataclasses, AnalysisSettings and
MatchSettings, whose defaults come from the module-level constants. Use
dataclasses.replace to derive variants::

    from dataclasses import replace
    from hanzi_lib.config import DEFAULT_MATCH_SETTINGS

    strict = replace(DEFAULT_MATCH_SETTINGS, stroke_count_tolerance=0)

The module also provides configure_logging for applications embedding the
library. Library modules never configure logging themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# --- Canvas ---
CANVAS_MAX = 255              # Coordinates and normalized features live in 0..255

# --- Curve smoothing ---
SMOOTHING_SIGMA = 1.0         # Gaussian sigma (in samples) for jitter removal
CURVE_SAMPLES_PER_SEGMENT = 8  # Catmull-Rom evaluations per control span
RESAMPLE_SPACING = 4.0        # Arc-length step of the resampled curve

# --- Sub-stroke segmentation ---
DIRECTION_BUCKETS = 256       # Quantization of a full turn
SPLIT_ANGLE_DEGREES = 45.0    # Deviation from running direction that closes a segment
MIN_SEGMENT_LENGTH = 12.0     # Shorter segments restart their direction instead of splitting
MIN_FRAME_SIZE = 32.0         # Smallest side of the normalization frame

# --- Matching ---
DIRECTION_WEIGHT = 0.5
LENGTH_WEIGHT = 0.2
CENTER_WEIGHT = 0.3
SKIP_PENALTY = 0.3            # Cost of leaving one sub-stroke unmatched
STROKE_COUNT_TOLERANCE = 1    # Max stroke-count difference of a scored candidate
MIN_SCORE = 0.0               # Feasibility threshold (strict)


@dataclass(frozen=True)
class AnalysisSettings:
    """Parameters of the stroke analysis pipeline.

    Attributes:
        smoothing_sigma: Standard deviation of the Gaussian filter applied to
            raw control points. 0 disables the filter.
        samples_per_segment: Number of curve evaluations per span between
            two control points.
        resample_spacing: Arc-length distance between resampled points.
        split_angle_degrees: Angular deviation from a segment's running
            average direction that closes the segment.
        min_segment_length: Arc length a segment needs before it may be
            closed by a direction change.
        direction_buckets: Number of direction quantization buckets.
        min_frame_size: Lower bound of the normalization frame side, so tiny
            characters are not blown up to full size.
    """
    smoothing_sigma: float = SMOOTHING_SIGMA
    samples_per_segment: int = CURVE_SAMPLES_PER_SEGMENT
    resample_spacing: float = RESAMPLE_SPACING
    split_angle_degrees: float = SPLIT_ANGLE_DEGREES
    min_segment_length: float = MIN_SEGMENT_LENGTH
    direction_buckets: int = DIRECTION_BUCKETS
    min_frame_size: float = MIN_FRAME_SIZE

    def __post_init__(self):
        if self.smoothing_sigma < 0:
            raise ValueError(f"smoothing_sigma must be >= 0, got {self.smoothing_sigma}")
        if self.samples_per_segment < 1:
            raise ValueError(f"samples_per_segment must be >= 1, got {self.samples_per_segment}")
        if self.resample_spacing <= 0:
            raise ValueError(f"resample_spacing must be > 0, got {self.resample_spacing}")
        if not 0 < self.split_angle_degrees < 180:
            raise ValueError(f"split_angle_degrees must be in (0, 180), got {self.split_angle_degrees}")
        if self.direction_buckets < 2:
            raise ValueError(f"direction_buckets must be >= 2, got {self.direction_buckets}")
        if self.min_frame_size <= 0:
            raise ValueError(f"min_frame_size must be > 0, got {self.min_frame_size}")


@dataclass(frozen=True)
class MatchSettings:
    """Weights and thresholds used when scoring candidates.

    The three weights are applied to per-term costs that are each normalized
    to [0, 1]. With weights summing to 1 a matched pair costs at most 1, and
    matching is preferred over skipping both sub-strokes exactly when the
    pair costs less than ``2 * skip_penalty``.

    Attributes:
        direction_weight: Weight of the circular direction difference.
        length_weight: Weight of the length difference.
        center_weight: Weight of the center distance.
        skip_penalty: Cost of leaving one sub-stroke unmatched.
        stroke_count_tolerance: Candidates whose stroke count differs from
            the query by more than this are never scored.
        min_score: Feasibility threshold; only scores strictly above it are
            reported. Never below 0.
        direction_buckets: Bucket count of the compared directions. Must
            equal AnalysisSettings.direction_buckets of the features.
    """
    direction_weight: float = DIRECTION_WEIGHT
    length_weight: float = LENGTH_WEIGHT
    center_weight: float = CENTER_WEIGHT
    skip_penalty: float = SKIP_PENALTY
    stroke_count_tolerance: int = STROKE_COUNT_TOLERANCE
    min_score: float = MIN_SCORE
    direction_buckets: int = DIRECTION_BUCKETS

    def __post_init__(self):
        for name in ('direction_weight', 'length_weight', 'center_weight'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.skip_penalty <= 0:
            raise ValueError(f"skip_penalty must be > 0, got {self.skip_penalty}")
        if self.stroke_count_tolerance < 0:
            raise ValueError(
                f"stroke_count_tolerance must be >= 0, got {self.stroke_count_tolerance}")
        if not 0.0 <= self.min_score < 1.0:
            raise ValueError(f"min_score must be in [0, 1), got {self.min_score}")
        if self.direction_buckets < 2:
            raise ValueError(f"direction_buckets must be >= 2, got {self.direction_buckets}")


DEFAULT_ANALYSIS_SETTINGS = AnalysisSettings()
DEFAULT_MATCH_SETTINGS = MatchSettings()


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Sets up logging with a consistent format across all modules. Call this
    once at application startup; the library itself only creates loggers.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
        log_file: Optional path to log file. If None, logs to stderr only.

    Example:
        Configure at startup::

            from hanzi_lib.config import configure_logging
            configure_logging(level='DEBUG', log_file='hanzi_lookup.log')
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')

"""Feature value objects shared by query analysis and the reference database.

A character, drawn or precomputed, is described by a feature sequence: the
sub-strokes of all its strokes in writing order. Each sub-stroke carries a
quantized direction and a length and center normalized to the 0..255 range.

The module provides the following classes:
    SubStroke: The atomic unit of comparison.
    AnalyzedCharacter: Analysis result of a drawn character.
    ReferenceCharacter: A database entry for a known character.
    Match: A candidate identity paired with its similarity score.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SubStroke:
    """A straight-ish piece of a stroke between two direction changes.

    Attributes:
        direction: Quantized direction bucket (0 = pointing right, growing
            clockwise on the y-down canvas).
        length: Endpoint distance normalized to 0..255 by the frame diagonal.
        center_x: Normalized x of the endpoints' midpoint, 0..255.
        center_y: Normalized y of the endpoints' midpoint, 0..255.
    """
    direction: int
    length: int
    center_x: int
    center_y: int


FeatureSequence = Tuple[SubStroke, ...]


@dataclass(frozen=True)
class AnalyzedCharacter:
    """Features of a drawn character plus the stroke count used for pruning."""
    stroke_count: int
    features: FeatureSequence

    def __len__(self) -> int:
        return len(self.features)


@dataclass(frozen=True)
class ReferenceCharacter:
    """A known character with its precomputed features.

    Attributes:
        identity: The character itself (a single code point).
        stroke_count: Conventional number of strokes.
        features: Feature sequence prepared with the same analysis
            settings as live queries.
    """
    identity: str
    stroke_count: int
    features: FeatureSequence

    def __post_init__(self):
        object.__setattr__(self, 'features', tuple(self.features))


@dataclass(frozen=True)
class Match:
    """A candidate character and its similarity to the query, in [0, 1]."""
    identity: str
    score: float

    def to_dict(self) -> dict:
        """Convert to the dictionary shape returned to drawing front ends."""
        return {'hanzi': self.identity, 'score': float(self.score)}

"""Domain objects for character lookup.

Geometry classes:
    Point: Immutable 2D canvas point.
    BBox: Immutable bounding box, also used as normalization frame.
    Stroke: Immutable sequence of points from one gesture.
    Character: Strokes of one drawn character, in writing order.

Feature classes:
    SubStroke: Direction, length and center of one stroke piece.
    FeatureSequence: Tuple of SubStroke, in writing order.
    AnalyzedCharacter: Query features plus stroke count.
    ReferenceCharacter: Database entry for a known character.
    Match: Candidate identity and similarity score.

Example usage::

    from hanzi_lib.domain import Character

    character = Character.from_lists([[[20, 40], [200, 40]]])
    print(character.stroke_count)
"""

from .features import AnalyzedCharacter, FeatureSequence, Match, ReferenceCharacter, SubStroke
from .geometry import BBox, Character, Point, Stroke

__all__ = [
    'Point', 'BBox', 'Stroke', 'Character',
    'SubStroke', 'FeatureSequence', 'AnalyzedCharacter', 'ReferenceCharacter', 'Match',
]

"""Character-level analysis.

The CharacterAnalyzer validates a drawn character, computes its square
normalization frame and runs every stroke through the CurveSmoother and
StrokeAnalyzer in writing order. The sub-strokes of all strokes are
concatenated without reordering or merging into a single feature sequence.

Example usage::

    from hanzi_lib.analysis import CharacterAnalyzer
    from hanzi_lib.domain import Character

    analyzer = CharacterAnalyzer()
    analyzed = analyzer.analyze(Character.from_lists([[[30, 50], [220, 50]]]))
    print(analyzed.stroke_count, len(analyzed.features))
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_ANALYSIS_SETTINGS, AnalysisSettings
from ..domain.features import AnalyzedCharacter, SubStroke
from ..domain.geometry import BBox, Character
from ..errors import MalformedInputError
from .curve import CurveSmoother
from .strokes import StrokeAnalyzer

logger = logging.getLogger(__name__)


def validate_character(character: Character) -> None:
    """Reject characters that cannot be analyzed.

    Raises:
        MalformedInputError: If the character has no strokes or any stroke
            has no points.
    """
    if character.stroke_count == 0:
        raise MalformedInputError("Character has no strokes")
    for i, stroke in enumerate(character):
        if len(stroke) == 0:
            raise MalformedInputError(f"Stroke {i} has no points")


class CharacterAnalyzer:
    """Turns a drawn character into its feature sequence.

    Attributes:
        settings: AnalysisSettings shared by the smoother and analyzer.
        smoother: CurveSmoother applied to each raw stroke.
        stroke_analyzer: StrokeAnalyzer segmenting each smoothed stroke.
    """

    def __init__(self, settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS):
        self.settings = settings
        self.smoother = CurveSmoother(settings)
        self.stroke_analyzer = StrokeAnalyzer(settings)

    def frame_for(self, character: Character) -> BBox:
        """Square normalization frame around the character's bounding box."""
        return character.bbox.to_square(self.settings.min_frame_size)

    def analyze(self, character: Character) -> AnalyzedCharacter:
        """Analyze all strokes of a character in order.

        Args:
            character: Drawn character with at least one non-empty stroke.

        Returns:
            AnalyzedCharacter with the stroke count and the concatenated
            sub-strokes of all strokes.

        Raises:
            MalformedInputError: If the character is empty or has an empty
                stroke.
        """
        validate_character(character)
        frame = self.frame_for(character)

        features: list[SubStroke] = []
        for stroke in character:
            points = self.smoother.smooth(stroke)
            features.extend(self.stroke_analyzer.analyze(points, frame))

        logger.debug("Analyzed character: %d strokes -> %d sub-strokes",
                     character.stroke_count, len(features))
        return AnalyzedCharacter(stroke_count=character.stroke_count,
                                 features=tuple(features))

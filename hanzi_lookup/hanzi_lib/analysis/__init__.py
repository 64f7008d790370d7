"""Stroke and character analysis.

This module turns raw pen input into feature sequences. It exports:
    CurveSmoother: Fits and resamples a smooth curve through a raw stroke.
    StrokeAnalyzer: Splits a smoothed stroke into measured sub-strokes.
    CharacterAnalyzer: Runs both over every stroke of a character.
    validate_character: Rejects empty characters and strokes.

Example usage::

    from hanzi_lib.analysis import CharacterAnalyzer

    analyzed = CharacterAnalyzer().analyze(character)
    for sub in analyzed.features:
        print(sub.direction, sub.length)
"""

from .character import CharacterAnalyzer, validate_character
from .curve import CurveSmoother
from .strokes import StrokeAnalyzer

__all__ = ['CurveSmoother', 'StrokeAnalyzer', 'CharacterAnalyzer', 'validate_character']

"""Handwritten Chinese character lookup.

Recognizes a hand-drawn character by comparing its strokes against a
precomputed reference database and returning the most similar characters,
best first.

Architecture Overview:
    The pipeline runs in three stages, each in its own subpackage:

    - analysis: smooths raw strokes (CurveSmoother), splits them into
      sub-strokes (StrokeAnalyzer) and builds the feature sequence of a
      whole character (CharacterAnalyzer)
    - matching: aligns the query's feature sequence with each plausible
      reference (Matcher) and keeps the best N results (TopNCollector)
    - api: ties both together behind LookupService / lookup

    The reference database (database.Database) is immutable and shared
    read-only by all lookups. A DatabaseProvider builds it at most once.

The package is organized into the following modules:
    domain: Value objects (Point, Stroke, Character, SubStroke, Match, ...).
    analysis: Curve smoothing and sub-stroke segmentation.
    matching: Sub-stroke costs, sequence alignment, top-N collection.
    database: Reference database and its one-time construction.
    api: Lookup service.
    config: Analysis and match settings, logging setup.
    errors: Exception hierarchy.

Example usage::

    from hanzi_lib import Database, LookupService

    service = LookupService(Database.from_records(records))
    for match in service.lookup([[[30, 40], [220, 40]]], limit=8):
        print(match.identity, match.score)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .analysis import CharacterAnalyzer, CurveSmoother, StrokeAnalyzer
from .api import LookupService, lookup
from .config import AnalysisSettings, MatchSettings, configure_logging
from .database import Database, DatabaseProvider
from .domain import (
    AnalyzedCharacter,
    Character,
    Match,
    Point,
    ReferenceCharacter,
    Stroke,
    SubStroke,
)
from .errors import (
    DatabaseFormatError,
    HanziLookupError,
    MalformedInputError,
    UninitializedDatabaseError,
)
from .matching import Matcher, TopNCollector

__all__ = [
    # Domain objects
    'Point', 'Stroke', 'Character', 'SubStroke', 'AnalyzedCharacter',
    'ReferenceCharacter', 'Match',
    # Pipeline
    'CurveSmoother', 'StrokeAnalyzer', 'CharacterAnalyzer', 'Matcher', 'TopNCollector',
    # Database
    'Database', 'DatabaseProvider',
    # Services
    'LookupService', 'lookup',
    # Configuration
    'AnalysisSettings', 'MatchSettings', 'configure_logging',
    # Errors
    'HanziLookupError', 'MalformedInputError', 'UninitializedDatabaseError',
    'DatabaseFormatError',
]

__version__ = '1.0.0'

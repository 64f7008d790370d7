"""Scoring of a query against the reference database.

The Matcher visits every reference whose stroke count is within the
configured tolerance of the query's, aligns the two feature sequences and
offers each feasible result to a TopNCollector. References outside the
tolerance are never scored: a character drawn with clearly the wrong number
of strokes cannot be the intended one.

Example usage::

    from hanzi_lib.matching import Matcher, TopNCollector

    collector = TopNCollector(10)
    Matcher(database).match(analyzed, collector)
    for match in collector.matches:
        print(match.identity, match.score)
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_MATCH_SETTINGS, MatchSettings
from ..database.reference import Database
from ..domain.features import AnalyzedCharacter, FeatureSequence, Match, ReferenceCharacter
from .alignment import similarity
from .collector import TopNCollector

logger = logging.getLogger(__name__)


class Matcher:
    """Scores analyzed queries against a shared, read-only database.

    Holds no per-lookup state, so one instance may serve concurrent
    lookups.

    Attributes:
        database: Reference database to search.
        settings: MatchSettings with weights, skip penalty, stroke-count
            tolerance and feasibility threshold.
    """

    def __init__(self, database: Database, settings: MatchSettings = DEFAULT_MATCH_SETTINGS):
        self.database = database
        self.settings = settings

    def candidates(self, stroke_count: int) -> list[ReferenceCharacter]:
        """References within the stroke-count tolerance, in database order."""
        return list(self.database.within_stroke_count(
            stroke_count, self.settings.stroke_count_tolerance))

    def score(self, features: FeatureSequence, reference: ReferenceCharacter) -> float:
        """Similarity of a query feature sequence to one reference, in [0, 1]."""
        return similarity(features, reference.features, self.settings)

    def match(self, query: AnalyzedCharacter, collector: TopNCollector) -> int:
        """Score all candidates and offer the feasible ones to the collector.

        Args:
            query: Analyzed query character.
            collector: Collector receiving Match objects, in database order.

        Returns:
            Number of candidates scored.
        """
        candidates = self.candidates(query.stroke_count)
        feasible = 0
        for reference in candidates:
            score = self.score(query.features, reference)
            if score > self.settings.min_score:
                feasible += 1
                collector.offer(Match(reference.identity, score))

        logger.debug("Scored %d of %d references for %d-stroke query (%d feasible)",
                     len(candidates), len(self.database), query.stroke_count, feasible)
        return len(candidates)

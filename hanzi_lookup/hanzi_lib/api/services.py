"""Service layer for character lookup.

This module wires analysis, matching and collection into the single public
operation of the library: look up a drawn character and get back the best
matching reference characters, most similar first.

The module contains:
    LookupService: Reusable service bound to one database (or provider)
        and one set of analysis and match settings.
    lookup: One-shot convenience function.

The database is never global. The application constructs it once (directly
or through a DatabaseProvider) and hands it to the service.

Example usage::

    from hanzi_lib.api import LookupService
    from hanzi_lib.database import Database

    service = LookupService(Database.from_records(records))

    # Strokes as nested [x, y] lists, coordinates in 0..255
    matches = service.lookup([[[40, 60], [210, 60]]], limit=5)
    for match in matches:
        print(match.identity, round(match.score, 3))

    # JSON-friendly form
    print(service.lookup_dicts([[[40, 60], [210, 60]]], limit=5))
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Sequence, Union

from ..analysis.character import CharacterAnalyzer
from ..config import (
    DEFAULT_ANALYSIS_SETTINGS,
    DEFAULT_MATCH_SETTINGS,
    AnalysisSettings,
    MatchSettings,
)
from ..database.provider import DatabaseProvider
from ..database.reference import Database
from ..domain.features import Match
from ..domain.geometry import Character
from ..errors import MalformedInputError
from ..matching.collector import TopNCollector
from ..matching.matcher import Matcher

logger = logging.getLogger(__name__)

CharacterInput = Union[Character, Sequence[Sequence[Sequence[float]]]]


class LookupService:
    """Looks up drawn characters in a reference database.

    A lookup is synchronous and owns all of its working state (the analyzed
    query and the collector); the database is only read. One service can
    therefore be shared by many threads.

    Attributes:
        provider: DatabaseProvider supplying the shared database.
        analyzer: CharacterAnalyzer for queries. Its settings must match the
            ones the reference database was prepared with.
        match_settings: MatchSettings used for every lookup. Its direction
            bucket count always equals the analysis settings' one.
        block: Whether a lookup waits for database construction (True) or
            fails fast with UninitializedDatabaseError (False).
    """

    def __init__(
        self,
        database: Database | DatabaseProvider,
        analysis_settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
        match_settings: MatchSettings | None = None,
        block: bool = True,
    ):
        """Create a lookup service.

        Args:
            database: Database, or DatabaseProvider building it lazily.
            analysis_settings: Settings for query analysis.
            match_settings: Settings for scoring. Defaults to
                DEFAULT_MATCH_SETTINGS with the analysis bucket count.
            block: See the class attributes.

        Raises:
            ValueError: If match_settings compares directions with a
                different bucket count than analysis_settings produces.
        """
        if match_settings is None:
            match_settings = replace(DEFAULT_MATCH_SETTINGS,
                                     direction_buckets=analysis_settings.direction_buckets)
        elif match_settings.direction_buckets != analysis_settings.direction_buckets:
            raise ValueError(
                f"match_settings.direction_buckets ({match_settings.direction_buckets}) "
                f"must equal analysis_settings.direction_buckets "
                f"({analysis_settings.direction_buckets})")

        if isinstance(database, Database):
            database = DatabaseProvider.of(database)
        self.provider = database
        self.analyzer = CharacterAnalyzer(analysis_settings)
        self.match_settings = match_settings
        self.block = block

    def lookup(self, character: CharacterInput, limit: int) -> list[Match]:
        """Find the reference characters most similar to a drawing.

        Args:
            character: A Character, or strokes as nested ``[x, y]`` lists.
            limit: Maximum number of results. 0 scores candidates but keeps
                none.

        Returns:
            Up to ``limit`` matches ordered by descending score, every score
            in (0, 1]. Equal scores keep database order. An empty list means
            no candidate was similar enough.

        Raises:
            MalformedInputError: If the character has no strokes, a stroke
                has no points, a point is invalid, or limit is negative.
            UninitializedDatabaseError: If the service does not block and
                the database is not constructed yet.
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise MalformedInputError(f"limit must be a non-negative integer, got {limit!r}")

        try:
            if not isinstance(character, Character):
                character = Character.from_lists(character)
            query = self.analyzer.analyze(character)
        except MalformedInputError as e:
            logger.warning("Rejected lookup input: %s", e)
            raise

        database = self.provider.get(block=self.block)
        collector = TopNCollector(limit)
        Matcher(database, self.match_settings).match(query, collector)
        return list(collector.matches)

    def lookup_dicts(self, character: CharacterInput, limit: int) -> list[dict[str, Any]]:
        """Like lookup, but returns ``{'hanzi': ..., 'score': ...}`` dictionaries."""
        return [match.to_dict() for match in self.lookup(character, limit)]


def lookup(
    character: CharacterInput,
    limit: int,
    database: Database | DatabaseProvider,
    analysis_settings: AnalysisSettings = DEFAULT_ANALYSIS_SETTINGS,
    match_settings: MatchSettings | None = None,
) -> list[Match]:
    """Look up a drawn character once.

    Convenience wrapper creating a throwaway LookupService. Prefer a shared
    LookupService when performing many lookups.

    Args:
        character: A Character, or strokes as nested ``[x, y]`` lists.
        limit: Maximum number of results.
        database: Database or DatabaseProvider to search.
        analysis_settings: Optional AnalysisSettings override.
        match_settings: Optional MatchSettings override.

    Returns:
        Matches ordered by descending score (see LookupService.lookup).
    """
    service = LookupService(database, analysis_settings, match_settings)
    return service.lookup(character, limit)

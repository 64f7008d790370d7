"""Immutable reference database of known characters.

This module provides the Database class, an ordered, read-only collection of
ReferenceCharacter entries indexed by stroke count. The index lets the
matcher visit only the candidates whose stroke count is close to the
query's, so the cost of a lookup grows with the number of plausible
candidates instead of the database size.

The database is built once and never changes afterwards, so any number of
threads can read it concurrently without locking.

Example usage:
    Building from already-decoded records::

        from hanzi_lib.database import Database

        records = [
            {'hanzi': '一', 'stroke_count': 1,
             'features': [{'direction': 0, 'length': 180, 'center': [128, 128]}]},
        ]
        database = Database.from_records(records)

        for reference in database.within_stroke_count(1, tolerance=1):
            print(reference.identity)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping

from ..config import CANVAS_MAX, DIRECTION_BUCKETS
from ..domain.features import ReferenceCharacter, SubStroke
from ..errors import DatabaseFormatError

logger = logging.getLogger(__name__)


class Database:
    """Ordered, immutable collection of reference characters.

    Entries keep the order they were supplied in; candidates are always
    visited in that order, which keeps lookups deterministic.

    Attributes:
        _references: Tuple of all ReferenceCharacter entries.
        _by_stroke_count: Mapping of stroke count to the positions of the
            entries with that count, ascending.
        _by_identity: Mapping of character to its first entry.
    """

    def __init__(self, references: Iterable[ReferenceCharacter] = ()):
        self._references: tuple[ReferenceCharacter, ...] = tuple(references)

        index: dict[int, list[int]] = {}
        self._by_identity: dict[str, ReferenceCharacter] = {}
        for pos, reference in enumerate(self._references):
            index.setdefault(reference.stroke_count, []).append(pos)
            self._by_identity.setdefault(reference.identity, reference)
        self._by_stroke_count: dict[int, tuple[int, ...]] = {
            count: tuple(positions) for count, positions in index.items()
        }

    def __len__(self) -> int:
        return len(self._references)

    def __iter__(self) -> Iterator[ReferenceCharacter]:
        return iter(self._references)

    def get(self, identity: str) -> ReferenceCharacter | None:
        """First reference entry for a character, or None."""
        return self._by_identity.get(identity)

    def stroke_counts(self) -> list[int]:
        """Sorted distinct stroke counts present in the database."""
        return sorted(self._by_stroke_count)

    def within_stroke_count(self, stroke_count: int, tolerance: int) -> Iterator[ReferenceCharacter]:
        """Entries whose stroke count is within ``tolerance`` of ``stroke_count``.

        Args:
            stroke_count: Stroke count of the query.
            tolerance: Maximum allowed absolute difference.

        Yields:
            Matching ReferenceCharacter entries in database order.
        """
        positions: list[int] = []
        for count in range(stroke_count - tolerance, stroke_count + tolerance + 1):
            positions.extend(self._by_stroke_count.get(count, ()))
        for pos in sorted(positions):
            yield self._references[pos]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]],
                     direction_buckets: int = DIRECTION_BUCKETS) -> Database:
        """Create a database from decoded record dictionaries.

        Each record holds ``identity`` (or ``hanzi``), ``stroke_count`` and
        ``features`` (or ``feature_sequence``): a list of dictionaries with
        ``direction``, ``length`` and ``center`` as ``[x, y]`` (or separate
        ``center_x``/``center_y``).

        Args:
            records: Iterable of record mappings.
            direction_buckets: Bucket count the features were quantized
                with; directions must lie in ``0..direction_buckets - 1``.

        Returns:
            Populated Database.

        Raises:
            DatabaseFormatError: If any record violates the schema. The
                message names the offending record position.
        """
        references = []
        for pos, record in enumerate(records):
            try:
                references.append(_parse_record(record, direction_buckets))
            except DatabaseFormatError as e:
                raise DatabaseFormatError(f"Record {pos}: {e}") from e

        database = cls(references)
        logger.info("Built reference database: %d characters, stroke counts %s",
                    len(database), database.stroke_counts())
        return database


def _parse_record(record: Mapping[str, Any], direction_buckets: int) -> ReferenceCharacter:
    if not isinstance(record, Mapping):
        raise DatabaseFormatError(f"expected a mapping, got {type(record).__name__}")

    identity = record.get('identity', record.get('hanzi'))
    if not isinstance(identity, str) or len(identity) != 1:
        raise DatabaseFormatError(f"identity must be a single character, got {identity!r}")

    stroke_count = record.get('stroke_count')
    if isinstance(stroke_count, bool) or not isinstance(stroke_count, int) or stroke_count < 1:
        raise DatabaseFormatError(f"stroke_count must be a positive integer, got {stroke_count!r}")

    features = record.get('features', record.get('feature_sequence'))
    if not isinstance(features, (list, tuple)):
        raise DatabaseFormatError("features must be a list of sub-strokes")

    return ReferenceCharacter(
        identity=identity,
        stroke_count=stroke_count,
        features=tuple(_parse_substroke(item, direction_buckets) for item in features),
    )


def _parse_substroke(item: Mapping[str, Any], direction_buckets: int) -> SubStroke:
    if not isinstance(item, Mapping):
        raise DatabaseFormatError(f"sub-stroke must be a mapping, got {type(item).__name__}")

    if 'center' in item:
        center = item['center']
        if not isinstance(center, (list, tuple)) or len(center) != 2:
            raise DatabaseFormatError(f"center must be an [x, y] pair, got {center!r}")
        cx, cy = center
    else:
        cx, cy = item.get('center_x'), item.get('center_y')

    direction = _byte_field('direction', item.get('direction'), direction_buckets - 1)
    length = _byte_field('length', item.get('length'), CANVAS_MAX)
    return SubStroke(
        direction=direction,
        length=length,
        center_x=_byte_field('center_x', cx, CANVAS_MAX),
        center_y=_byte_field('center_y', cy, CANVAS_MAX),
    )


def _byte_field(name: str, value: Any, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= upper:
        raise DatabaseFormatError(f"{name} must be an integer in 0..{upper}, got {value!r}")
    return value

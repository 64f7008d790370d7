"""Bounded collection of the best matches.

TopNCollector keeps at most N matches sorted by descending score in a plain
list. Result limits are small (tens), so a linear scan for the insertion
point beats any heap or tree, and the sorted list doubles as the read-only
view handed back to callers.

Equal scores keep the order in which they were offered: a new match is
inserted after every held match with the same score, and a full collector
only accepts a match that strictly beats its current minimum.

Example usage::

    from hanzi_lib.domain import Match
    from hanzi_lib.matching.collector import TopNCollector

    collector = TopNCollector(2)
    collector.offer(Match('人', 0.8))
    collector.offer(Match('入', 0.9))
    collector.offer(Match('八', 0.5))   # discarded
    print([m.identity for m in collector.matches])   # ['入', '人']
"""

from __future__ import annotations

from typing import Iterator

from ..domain.features import Match


class TopNCollector:
    """Keeps the N highest-scoring matches offered so far.

    Attributes:
        capacity: Maximum number of matches held. 0 accepts nothing.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self._items: list[Match] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Match]:
        return iter(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    @property
    def min_score(self) -> float | None:
        """Lowest held score, or None when empty."""
        return self._items[-1].score if self._items else None

    @property
    def matches(self) -> tuple[Match, ...]:
        """Held matches in descending score order."""
        return tuple(self._items)

    def offer(self, match: Match) -> bool:
        """Offer a match.

        Args:
            match: Candidate match.

        Returns:
            True if the match is now held, False if it was discarded.
        """
        if self.capacity == 0:
            return False
        if self.is_full:
            if match.score <= self._items[-1].score:
                return False
            self._items.pop()

        pos = len(self._items)
        while pos > 0 and self._items[pos - 1].score < match.score:
            pos -= 1
        self._items.insert(pos, match)
        return True

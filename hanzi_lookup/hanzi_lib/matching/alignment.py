"""Sequence alignment of feature sequences.

Two drawings of the same character rarely segment into exactly the same
sub-strokes: a corner drawn a little rounder, or a hook drawn a little
longer, splits or merges pieces. The alignment therefore finds the cheapest
order-preserving correspondence between the two sequences in which any
sub-stroke on either side may be skipped for a fixed penalty.

The minimal cost is computed with an explicit (n + 1) x (m + 1) dynamic
programming table:

    table[i][0] = i * skip
    table[0][j] = j * skip
    table[i][j] = min(table[i-1][j-1] + pair[i-1][j-1],
                      table[i-1][j] + skip,
                      table[i][j-1] + skip)

Skipping everything costs (n + m) * skip, which is the worst case used to
turn the cost into a similarity in [0, 1].

Example usage::

    from hanzi_lib.matching.alignment import similarity

    score = similarity(query.features, reference.features)
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..config import DEFAULT_MATCH_SETTINGS, MatchSettings
from ..domain.features import SubStroke
from .costs import pair_cost_matrix


def alignment_cost(query: Sequence[SubStroke], candidate: Sequence[SubStroke],
                   settings: MatchSettings = DEFAULT_MATCH_SETTINGS) -> float:
    """Minimal total cost of aligning two feature sequences.

    Args:
        query: Query feature sequence.
        candidate: Candidate feature sequence.
        settings: Weights and skip penalty.

    Returns:
        Non-negative cost, at most worst_case_cost(len(query), len(candidate)).
    """
    n, m = len(query), len(candidate)
    skip = settings.skip_penalty
    if n == 0 or m == 0:
        return (n + m) * skip

    pair = pair_cost_matrix(query, candidate, settings)

    table = np.empty((n + 1, m + 1))
    table[0, :] = np.arange(m + 1) * skip
    table[:, 0] = np.arange(n + 1) * skip

    for i in range(1, n + 1):
        prev = table[i - 1]
        row = table[i]
        costs = pair[i - 1]
        for j in range(1, m + 1):
            row[j] = min(prev[j - 1] + costs[j - 1],
                         prev[j] + skip,
                         row[j - 1] + skip)

    return float(table[n, m])


def worst_case_cost(n: int, m: int,
                    settings: MatchSettings = DEFAULT_MATCH_SETTINGS) -> float:
    """Cost of skipping every sub-stroke of both sequences."""
    return (n + m) * settings.skip_penalty


def similarity(query: Sequence[SubStroke], candidate: Sequence[SubStroke],
               settings: MatchSettings = DEFAULT_MATCH_SETTINGS) -> float:
    """Similarity of two feature sequences in [0, 1].

    ``1 - alignment_cost / worst_case_cost``. Identical sequences score
    exactly 1.0; sequences that share nothing score 0.0. Two empty
    sequences score 1.0.
    """
    worst = worst_case_cost(len(query), len(candidate), settings)
    if worst <= 0:
        return 1.0
    cost = alignment_cost(query, candidate, settings)
    return min(1.0, max(0.0, 1.0 - cost / worst))

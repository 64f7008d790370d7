"""Matching of feature sequences.

The module exports:
    Matcher: Scores a query against every plausible reference.
    TopNCollector: Keeps the best N matches in descending order.
    alignment_cost: Minimal cost of aligning two feature sequences.
    similarity: Alignment cost turned into a score in [0, 1].
    substroke_cost: Cost of matching two sub-strokes.

Example usage::

    from hanzi_lib.matching import similarity

    print(similarity(a.features, b.features))
"""

from .alignment import alignment_cost, similarity, worst_case_cost
from .collector import TopNCollector
from .costs import pair_cost_matrix, substroke_cost
from .matcher import Matcher

__all__ = [
    'Matcher', 'TopNCollector',
    'alignment_cost', 'similarity', 'worst_case_cost',
    'pair_cost_matrix', 'substroke_cost',
]

"""Unit tests for the matching package.

Tests:
    - pair_cost_matrix / substroke_cost: normalization and weighting
    - alignment_cost / similarity: skips, bounds, identity, symmetry
    - TopNCollector: ordering, capacity, ties
    - Matcher: stroke-count pruning, feasibility threshold
"""

import random
import unittest
from unittest.mock import MagicMock, patch

from hanzi_lib.config import MatchSettings
from hanzi_lib.database import Database
from hanzi_lib.domain import AnalyzedCharacter, Match, ReferenceCharacter, SubStroke
from hanzi_lib.matching import (
    Matcher,
    TopNCollector,
    alignment_cost,
    pair_cost_matrix,
    similarity,
    substroke_cost,
    worst_case_cost,
)

S1 = SubStroke(0, 180, 128, 40)
S2 = SubStroke(64, 160, 128, 128)
S3 = SubStroke(0, 200, 128, 215)


def make_reference(identity, stroke_count, features=(S1,)):
    return ReferenceCharacter(identity, stroke_count, features)


class TestPairCost(unittest.TestCase):
    """Tests for pair_cost_matrix and substroke_cost."""

    def test_identical_costs_zero(self):
        self.assertEqual(substroke_cost(S2, S2), 0.0)

    def test_direction_wraps_around(self):
        """Buckets 0 and 255 are neighbours, not opposites."""
        a = SubStroke(0, 100, 100, 100)
        b = SubStroke(255, 100, 100, 100)
        self.assertAlmostEqual(substroke_cost(a, b), 0.5 / 128)

    def test_maximal_difference_costs_one(self):
        a = SubStroke(0, 0, 0, 0)
        b = SubStroke(128, 255, 255, 255)
        self.assertAlmostEqual(substroke_cost(a, b), 1.0)

    def test_weights_applied(self):
        settings = MatchSettings(direction_weight=1.0, length_weight=0.0, center_weight=0.0)
        a = SubStroke(0, 0, 0, 0)
        b = SubStroke(64, 255, 255, 255)
        self.assertAlmostEqual(substroke_cost(a, b, settings), 0.5)

    def test_direction_uses_configured_buckets(self):
        """Half a turn costs the full direction weight at any resolution."""
        settings = MatchSettings(direction_buckets=512)
        a = SubStroke(0, 100, 100, 100)
        b = SubStroke(256, 100, 100, 100)
        self.assertAlmostEqual(substroke_cost(a, b, settings), 0.5)

    def test_coarse_buckets_wrap_around(self):
        settings = MatchSettings(direction_buckets=16)
        east = SubStroke(0, 100, 100, 100)
        neighbour = SubStroke(15, 100, 100, 100)
        opposite = SubStroke(8, 100, 100, 100)
        self.assertAlmostEqual(substroke_cost(east, neighbour, settings), 0.5 / 8)
        self.assertAlmostEqual(substroke_cost(east, opposite, settings), 0.5)

    def test_matrix_shape(self):
        matrix = pair_cost_matrix((S1, S2, S3), (S1, S3))
        self.assertEqual(matrix.shape, (3, 2))
        self.assertEqual(matrix[0, 0], 0.0)
        self.assertEqual(matrix[2, 1], 0.0)
        self.assertAlmostEqual(matrix[1, 0], substroke_cost(S2, S1))

    def test_empty_matrix(self):
        self.assertEqual(pair_cost_matrix((), (S1,)).shape, (0, 1))


class TestAlignment(unittest.TestCase):
    """Tests for alignment_cost, worst_case_cost and similarity."""

    def test_identical_sequences_score_one(self):
        features = (S1, S2, S3)
        self.assertEqual(alignment_cost(features, features), 0.0)
        self.assertEqual(similarity(features, features), 1.0)

    def test_dissimilar_pair_is_skipped(self):
        """Skipping both (0.6) beats matching a pair that costs 1.0."""
        a = (SubStroke(0, 0, 0, 0),)
        b = (SubStroke(128, 255, 255, 255),)
        self.assertAlmostEqual(alignment_cost(a, b), 0.6)
        self.assertEqual(similarity(a, b), 0.0)

    def test_extra_substroke_is_skipped(self):
        cost = alignment_cost((S1, S2, S3), (S1, S3))
        self.assertAlmostEqual(cost, 0.3)
        self.assertAlmostEqual(similarity((S1, S2, S3), (S1, S3)), 0.8)

    def test_order_is_preserved(self):
        """Swapped sub-strokes cannot be matched crosswise."""
        self.assertGreater(alignment_cost((S1, S2), (S2, S1)), 0.0)

    def test_empty_sequences(self):
        self.assertEqual(alignment_cost((), ()), 0.0)
        self.assertAlmostEqual(alignment_cost((), (S1, S2)), 0.6)
        self.assertEqual(similarity((), ()), 1.0)
        self.assertEqual(similarity((), (S1,)), 0.0)

    def test_worst_case_cost(self):
        self.assertAlmostEqual(worst_case_cost(3, 2), 1.5)
        settings = MatchSettings(skip_penalty=0.5)
        self.assertAlmostEqual(worst_case_cost(3, 2, settings), 2.5)

    def test_cost_bounded_by_worst_case(self):
        rng = random.Random(7)
        for _ in range(20):
            a = [SubStroke(*(rng.randrange(256) for _ in range(4)))
                 for _ in range(rng.randrange(1, 6))]
            b = [SubStroke(*(rng.randrange(256) for _ in range(4)))
                 for _ in range(rng.randrange(1, 6))]
            cost = alignment_cost(a, b)
            self.assertGreaterEqual(cost, 0.0)
            self.assertLessEqual(cost, worst_case_cost(len(a), len(b)) + 1e-12)
            self.assertAlmostEqual(similarity(a, b), similarity(b, a))

    def test_small_perturbation_scores_high(self):
        query = (SubStroke(2, 178, 130, 42), SubStroke(62, 161, 126, 130))
        score = similarity(query, (S1, S2))
        self.assertGreater(score, 0.95)
        self.assertLess(score, 1.0)


class TestTopNCollector(unittest.TestCase):
    """Tests for TopNCollector."""

    def test_keeps_best_in_descending_order(self):
        collector = TopNCollector(3)
        for identity, score in [('a', 0.2), ('b', 0.9), ('c', 0.5), ('d', 0.7), ('e', 0.1)]:
            collector.offer(Match(identity, score))
        self.assertEqual([m.identity for m in collector.matches], ['b', 'd', 'c'])
        self.assertEqual(collector.min_score, 0.5)
        self.assertTrue(collector.is_full)

    def test_offer_reports_acceptance(self):
        collector = TopNCollector(1)
        self.assertTrue(collector.offer(Match('a', 0.5)))
        self.assertFalse(collector.offer(Match('b', 0.4)))
        self.assertTrue(collector.offer(Match('c', 0.6)))
        self.assertEqual(collector.matches, (Match('c', 0.6),))

    def test_ties_keep_first_offered(self):
        collector = TopNCollector(2)
        collector.offer(Match('a', 0.5))
        collector.offer(Match('b', 0.5))
        collector.offer(Match('c', 0.5))
        self.assertEqual([m.identity for m in collector], ['a', 'b'])

    def test_tie_inserted_after_equal_scores(self):
        collector = TopNCollector(3)
        collector.offer(Match('a', 0.5))
        collector.offer(Match('b', 0.9))
        collector.offer(Match('c', 0.5))
        self.assertEqual([m.identity for m in collector], ['b', 'a', 'c'])

    def test_capacity_zero_accepts_nothing(self):
        collector = TopNCollector(0)
        self.assertFalse(collector.offer(Match('a', 1.0)))
        self.assertEqual(len(collector), 0)
        self.assertIsNone(collector.min_score)

    def test_negative_capacity_rejected(self):
        with self.assertRaises(ValueError):
            TopNCollector(-1)

    def test_matches_stable_sort_of_offers(self):
        """Result equals the first N of a stable descending sort of all offers."""
        rng = random.Random(42)
        for capacity in (0, 1, 3, 10):
            offers = [Match(str(i), rng.choice([0.1, 0.25, 0.5, 0.75, 0.9]))
                      for i in range(40)]
            collector = TopNCollector(capacity)
            for match in offers:
                collector.offer(match)
            expected = sorted(offers, key=lambda m: -m.score)[:capacity]
            self.assertEqual(list(collector.matches), expected)


class TestMatcher(unittest.TestCase):
    """Tests for Matcher."""

    def setUp(self):
        self.database = Database([
            make_reference('一', 1, (S1,)),
            make_reference('二', 2, (S1, S3)),
            make_reference('三', 3, (S1, S2, S3)),
            make_reference('四', 5, (S2,)),
        ])

    def test_candidates_pruned_by_stroke_count(self):
        matcher = Matcher(self.database)
        identities = [r.identity for r in matcher.candidates(2)]
        self.assertEqual(identities, ['一', '二', '三'])

    def test_candidates_zero_tolerance(self):
        matcher = Matcher(self.database, MatchSettings(stroke_count_tolerance=0))
        self.assertEqual([r.identity for r in matcher.candidates(3)], ['三'])

    def test_match_offers_feasible_candidates(self):
        collector = TopNCollector(10)
        query = AnalyzedCharacter(3, (S1, S2, S3))
        scored = Matcher(self.database).match(query, collector)
        self.assertEqual(scored, 2)
        self.assertEqual(collector.matches[0], Match('三', 1.0))
        self.assertEqual([m.identity for m in collector], ['三', '二'])

    def test_zero_score_not_offered(self):
        database = Database([make_reference('一', 1, (SubStroke(128, 255, 255, 255),))])
        collector = TopNCollector(5)
        query = AnalyzedCharacter(1, (SubStroke(0, 0, 0, 0),))
        self.assertEqual(Matcher(database).match(query, collector), 1)
        self.assertEqual(len(collector), 0)

    def test_min_score_threshold(self):
        settings = MatchSettings(min_score=0.9)
        collector = TopNCollector(5)
        query = AnalyzedCharacter(3, (S1, S2, S3))
        Matcher(self.database, settings).match(query, collector)
        self.assertEqual([m.identity for m in collector], ['三'])

    @patch('hanzi_lib.matching.matcher.similarity', return_value=0.5)
    def test_scores_only_candidates(self, mock_similarity):
        query = AnalyzedCharacter(1, (S1,))
        Matcher(self.database).match(query, TopNCollector(0))
        self.assertEqual(mock_similarity.call_count, 2)
        scored = [call.args[1] for call in mock_similarity.call_args_list]
        self.assertEqual(scored, [(S1,), (S1, S3)])

    def test_queries_stroke_count_index(self):
        database = MagicMock(spec=Database)
        database.within_stroke_count.return_value = iter([make_reference('一', 1)])
        database.__len__.return_value = 1
        Matcher(database).match(AnalyzedCharacter(1, (S1,)), TopNCollector(1))
        database.within_stroke_count.assert_called_once_with(1, 1)


if __name__ == '__main__':
    unittest.main()

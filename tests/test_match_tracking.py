"""
Tests for the vigilance search and match tracking
"""

import numpy as np
import pytest

from artclustering.match_tracking import match_tracking_search, rank_categories, raise_threshold


class TestRanking:
    def test_descending(self):
        assert rank_categories([0.1, 0.7, 0.4]).tolist() == [1, 2, 0]

    def test_ties_keep_index_order(self):
        assert rank_categories([0.5, 0.9, 0.5, 0.9]).tolist() == [1, 3, 0, 2]


class TestSearch:
    def test_first_passing_by_activation_wins(self):
        # Category 1 is most active but category 0 matches best
        ranking = rank_categories([0.2, 0.9])
        result = match_tracking_search(ranking, np.array([0.95, 0.6]), 0.5)
        assert result.bmu == 1
        assert result.restarts == 0

    def test_no_category_passes(self):
        ranking = rank_categories([0.2, 0.9])
        result = match_tracking_search(ranking, np.array([0.3, 0.4]), 0.5)
        assert result.bmu is None

    def test_compatible_label_wins_directly(self):
        M = np.array([0.9, 0.8])
        ranking = rank_categories([0.9, 0.8])
        result = match_tracking_search(ranking, M, 0.5, labels=[1, 2], label=1)
        assert result.bmu == 0
        assert result.threshold == 0.5
        assert result.restarts == 0

    def test_label_conflict_raises_threshold(self):
        # The most active category conflicts, a better match further down resonates
        M = np.array([0.6, 0.95])
        ranking = rank_categories([0.9, 0.8])
        result = match_tracking_search(
            ranking, M, 0.5, labels=[2, 1], label=1, epsilon=1e-3
        )
        assert result.bmu == 1
        assert result.restarts == 1
        assert result.threshold == pytest.approx(0.601)

    def test_conflict_excludes_lower_matches(self):
        M = np.array([0.9, 0.8])
        ranking = rank_categories([0.9, 0.8])
        result = match_tracking_search(ranking, M, 0.5, labels=[2, 1], label=1)
        # The conflicting match is 0.9, so the threshold exceeds 0.8 afterwards
        assert result.bmu is None
        assert result.restarts == 1
        assert result.threshold > 0.9

    def test_terminates_within_category_count(self):
        M = np.array([0.99, 0.98, 0.97, 0.96])
        ranking = rank_categories(M)
        result = match_tracking_search(ranking, M, 0.0, labels=[1, 2, 3, 4], label=5)
        assert result.bmu is None
        assert result.restarts <= len(M) + 1

    def test_raise_threshold_strictly_increases(self):
        assert raise_threshold(1e16, 1e-3) > 1e16
        assert raise_threshold(0.5, 1e-3) == 0.5 + 1e-3

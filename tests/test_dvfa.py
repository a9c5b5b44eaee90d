"""
Tests for Dual-Vigilance Fuzzy ART
"""

import numpy as np
import pytest

from artclustering import MISMATCH, DVFA


@pytest.fixture
def art():
    art = DVFA(rho_lb=0.6, rho_ub=0.9)
    art.find_and_learn([0.5, 0.5], preprocessed=True)
    return art


class TestDVFA:
    def test_thresholds(self, art):
        assert art.threshold_lb == pytest.approx(0.6)
        assert art.threshold_ub == pytest.approx(0.9)
        assert art.n_clusters == 1

    def test_between_bounds_grows_cluster(self, art):
        # Unnormalized match 0.8 lies between the two thresholds
        assert art.find_and_learn([0.7, 0.3], preprocessed=True) == 1
        assert art.n_categories == 2
        assert art.n_clusters == 1
        assert art.labels.tolist() == [1, 1]

    def test_below_lower_bound_new_cluster(self, art):
        art.find_and_learn([0.7, 0.3], preprocessed=True)
        assert art.find_and_learn([0.0, 1.0], preprocessed=True) == 2
        assert art.n_clusters == 2

    def test_above_upper_bound_learns(self, art):
        assert art.find_and_learn([0.52, 0.48], preprocessed=True) == 1
        assert art.n_categories == 1
        np.testing.assert_allclose(art.W[0], [0.5, 0.48])

    def test_classify_uses_upper_bound(self, art):
        art.find_and_learn([0.7, 0.3], preprocessed=True)
        assert art.classify([0.7, 0.3], preprocessed=True) == 1
        assert art.classify([0.3, 0.7], preprocessed=True) == MISMATCH
        assert art.classify([0.3, 0.7], fallback_to_best_match=True, preprocessed=True) == 1

    def test_supervised_new_label(self, art):
        assert art.find_and_learn([0.52, 0.48], label=5, preprocessed=True) == 5
        assert art.labels.tolist() == [1, 5]

    def test_batch(self, blobs):
        x, y = blobs
        art = DVFA(rho_lb=0.5, rho_ub=0.9, max_epoch=3)
        art.train(x, preprocessed=True)
        assert art.n_clusters == 2
        y_hat = art.predict(x, fallback_to_best_match=True, preprocessed=True)
        assert len(set(y_hat[y == 1].tolist())) == 1
        assert len(set(y_hat[y == 2].tolist())) == 1

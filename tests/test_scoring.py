"""
Tests for activation, match and learning functions
"""

import numpy as np
import pytest

from artclustering.options import FuzzyARTOptions
from artclustering.scoring import (
    Scoring,
    basic_activation,
    basic_match,
    basic_update,
    choice_by_difference,
    gamma_activation,
    gamma_match,
    learn,
    unnormalized_match,
)
from artclustering.store import CategoryStore

X = np.array([0.9, 0.1])
W = np.array([[1.0, 0.0], [0.0, 1.0]])


class TestActivation:
    def test_basic(self):
        opts = FuzzyARTOptions(alpha=1e-3)
        T = basic_activation(X, W, opts, 1)
        assert T == pytest.approx([0.9 / 1.001, 0.1 / 1.001])

    def test_gamma(self):
        opts = FuzzyARTOptions(alpha=1e-3, gamma=3.0)
        T = gamma_activation(X, W, opts, 1)
        assert T == pytest.approx([(0.9 / 1.001) ** 3, (0.1 / 1.001) ** 3])

    def test_choice_by_difference(self):
        opts = FuzzyARTOptions(alpha=0.1)
        w = np.array([0.5, 0.25])
        # |min(x, w)| = 0.6, |w| = 0.75
        assert choice_by_difference(X, w, opts, 1) == pytest.approx(0.6 + 0.9 * 0.25)

    def test_single_weight(self):
        opts = FuzzyARTOptions()
        assert np.ndim(basic_activation(X, W[0], opts, 1)) == 0


class TestMatch:
    def test_basic_divides_by_dim(self):
        opts = FuzzyARTOptions()
        x = np.array([0.2, 0.4, 0.8, 0.6])
        assert basic_match(x, x, opts, 2) == pytest.approx(1.0)

    def test_unnormalized(self):
        opts = FuzzyARTOptions()
        x = np.array([0.2, 0.4, 0.8, 0.6])
        assert unnormalized_match(x, x, opts, 2) == pytest.approx(2.0)

    def test_gamma_reuses_activation(self):
        opts = FuzzyARTOptions(gamma_normalization=True, gamma_ref=1.0)
        w = np.array([0.5, 0.25])
        T = gamma_activation(X, w, opts, 1)
        assert gamma_match(X, w, opts, 1) == pytest.approx(0.75 * T)
        assert gamma_match(X, w, opts, 1, activation=2.0) == pytest.approx(1.5)

    def test_scoring_ignores_activation_for_mixed_rules(self):
        opts = FuzzyARTOptions(activation="basic", match="gamma")
        scoring = Scoring(opts)
        w = np.array([0.5, 0.25])
        T, M = scoring.activation_match(X, w, 1)
        assert T == pytest.approx(basic_activation(X, w, opts, 1))
        assert M == pytest.approx(gamma_match(X, w, opts, 1))


class TestLearning:
    def test_fast_commit(self):
        assert basic_update(X, np.array([0.5, 0.5]), 1.0) == pytest.approx([0.5, 0.1])

    def test_slow_learning(self):
        w = np.array([0.5, 0.5])
        assert basic_update(X, w, 0.5) == pytest.approx([0.5, 0.3])

    def test_learn_counts_instances(self):
        store = CategoryStore(2)
        store.append([1.0, 1.0], 1)
        learn(store, 0, X, 1.0)
        learn(store, 0, X, 1.0)
        np.testing.assert_allclose(store.get(0), X)
        assert store.instance_counts.tolist() == [3]

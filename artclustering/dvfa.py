"""
Dual-Vigilance Fuzzy ART (DVFA).

A flat module where several categories can share one cluster label: a match
above the upper threshold learns into the category, a match between the two
thresholds adds a new category to the same cluster.

References:
    L. E. Brito da Silva, I. Elnabarawy and D. C. Wunsch II, 'Dual Vigilance
    Fuzzy ART,' Neural Networks Letters, 2019.
"""

import logging

import numpy as np

from .base import ARTModule
from .errors import MISMATCH
from .match_tracking import match_tracking_search, rank_categories
from .options import DVFAOptions, build_options
from .scoring import Scoring, basic_update, learn
from .store import CategoryStore

logger = logging.getLogger(__name__)


class DVFA(ARTModule):
    def __init__(self, opts=None, **kwargs):
        super().__init__(build_options(DVFAOptions, opts, **kwargs))
        self.scoring = Scoring(self.opts)
        self.store = CategoryStore()
        self.threshold_lb = None
        self.threshold_ub = None
        self.n_clusters = 0

    @property
    def n_categories(self):
        return len(self.store)

    @property
    def W(self):
        return self.store.weights

    @property
    def labels(self):
        return self.store.labels

    def set_threshold(self):
        self.threshold_ub = self.opts.rho_ub * self.config.dim
        self.threshold_lb = self.opts.rho_lb * self.config.dim
        self.threshold = self.threshold_ub

    def weights_snapshot(self):
        return [self.store.snapshot()]

    def create_category(self, x, label, new_cluster=True):
        if new_cluster:
            self.n_clusters += 1
        if self.opts.uncommitted:
            weight = basic_update(x, np.ones(self.config.dim_comp), self.opts.beta)
        else:
            weight = np.array(x, dtype=float)
        return self.store.append(weight, label)

    def activation_match(self, x):
        self.T, self.M = self.scoring.activation_match(x, self.store.weights, self.config.dim)

    def find_and_learn(self, x, label=None, preprocessed=False):
        sample = self.init_train_sample(x, preprocessed)
        supervised = label is not None

        if self.n_categories == 0:
            self.set_threshold()
            self.store = CategoryStore(self.config.dim_comp)
            y_hat = label if supervised else 1
            self.create_category(sample, y_hat)
            return y_hat

        if supervised and not self.store.has_label(label):
            self.create_category(sample, label)
            return label

        self.activation_match(sample)
        ranking = rank_categories(self.T)
        # Clusters admit at the lower bound; prototypes learn at the upper one
        result = match_tracking_search(
            ranking, self.M, self.threshold_lb,
            labels=self.store.labels, label=label, epsilon=self.opts.epsilon,
        )

        if result.bmu is None:
            bmu = ranking[0]
            y_hat = label if supervised else self.n_clusters + 1
            logger.debug("Mismatch, creating cluster with label %d", y_hat)
            self.create_category(sample, y_hat)
        else:
            bmu = result.bmu
            y_hat = self.store.label(bmu)
            if self.M[bmu] >= self.threshold_ub:
                learn(self.store, bmu, sample, self.opts.beta)
            else:
                self.create_category(sample, y_hat, new_cluster=False)

        self.log_stats(bmu, result.bmu is None)
        return y_hat

    def classify(self, x, fallback_to_best_match=False, preprocessed=False):
        sample = self.init_classify(x, preprocessed)
        self.activation_match(sample)
        ranking = rank_categories(self.T)
        result = match_tracking_search(ranking, self.M, self.threshold_ub)

        if result.bmu is None:
            bmu = ranking[0]
            y_hat = self.store.label(bmu) if fallback_to_best_match else MISMATCH
        else:
            bmu = result.bmu
            y_hat = self.store.label(bmu)

        self.log_stats(bmu, result.bmu is None)
        return y_hat

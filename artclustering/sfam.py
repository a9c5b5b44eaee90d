"""
Simplified Fuzzy ARTMAP (SFAM).

References:
    G. A. Carpenter, S. Grossberg, N. Markuzon, J. H. Reynolds, and D. B. Rosen,
    'Fuzzy ARTMAP: A Neural Network Architecture for Incremental Supervised
    Learning of Analog Multidimensional Maps,' IEEE Trans. Neural Networks,
    vol. 3, no. 5, pp. 698-713, 1992.
"""

import logging

import numpy as np

from .base import ARTModule
from .errors import MISMATCH, ConfigurationError
from .match_tracking import match_tracking_search, rank_categories
from .options import SFAMOptions, build_options
from .scoring import Scoring, basic_update, learn
from .store import CategoryStore

logger = logging.getLogger(__name__)


class SFAM(ARTModule):
    """
    Supervised Fuzzy ARTMAP with match tracking.

    Training always returns the supplied label: a category only learns a sample
    carrying its own label, and conflicting winners raise the vigilance until
    a compatible category is found or a new one is created.
    """

    def __init__(self, opts=None, **kwargs):
        super().__init__(build_options(SFAMOptions, opts, **kwargs))
        self.scoring = Scoring(self.opts)
        self.store = CategoryStore()

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
        self.threshold = self.opts.rho

    def weights_snapshot(self):
        return [self.store.snapshot()]

    def create_category(self, x, label):
        if self.opts.uncommitted:
            weight = basic_update(x, np.ones(self.config.dim_comp), self.opts.beta)
        else:
            weight = np.array(x, dtype=float)
        return self.store.append(weight, label)

    def activation_match(self, x):
        self.T, self.M = self.scoring.activation_match(x, self.store.weights, self.config.dim)

    def find_and_learn(self, x, label=None, preprocessed=False):
        if label is None:
            raise ConfigurationError("SFAM requires a label for every training sample")
        sample = self.init_train_sample(x, preprocessed)

        if self.n_categories == 0:
            self.set_threshold()
            self.store = CategoryStore(self.config.dim_comp)

        if not self.store.has_label(label):
            self.create_category(sample, label)
            return label

        self.activation_match(sample)
        ranking = rank_categories(self.T)
        # Vigilance starts from the baseline rho on every sample
        result = match_tracking_search(
            ranking, self.M, self.opts.rho,
            labels=self.store.labels, label=label, epsilon=self.opts.epsilon,
        )

        if result.bmu is None:
            logger.debug("Mismatch after %d match tracking raises", result.restarts)
            self.create_category(sample, label)
            self.log_stats(ranking[0], True)
        else:
            learn(self.store, result.bmu, sample, self.opts.beta)
            self.log_stats(result.bmu, False)
        return label

    def train(self, x, y=None, preprocessed=False):
        if y is None:
            raise ConfigurationError("SFAM requires labels for training")
        return super().train(x, y, preprocessed=preprocessed)

    def classify(self, x, fallback_to_best_match=False, preprocessed=False):
        sample = self.init_classify(x, preprocessed)
        self.activation_match(sample)
        ranking = rank_categories(self.T)
        result = match_tracking_search(ranking, self.M, self.threshold)

        if result.bmu is None:
            bmu = ranking[0]
            y_hat = self.store.label(bmu) if fallback_to_best_match else MISMATCH
        else:
            bmu = result.bmu
            y_hat = self.store.label(bmu)

        self.log_stats(bmu, result.bmu is None)
        return y_hat

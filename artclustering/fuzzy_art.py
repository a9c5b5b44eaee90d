"""
Fuzzy ART and its gamma-normalized variant.

References:
    G. Carpenter, S. Grossberg, and D. Rosen, 'Fuzzy ART: Fast stable learning
    and categorization of analog patterns by an adaptive resonance system,'
    Neural Networks, vol. 4, no. 6, pp. 759-771, 1991.
"""

import logging

import numpy as np

from .base import ARTModule
from .errors import MISMATCH
from .match_tracking import match_tracking_search, rank_categories
from .options import FuzzyARTOptions, build_options
from .scoring import Scoring, basic_update, learn
from .store import CategoryStore

logger = logging.getLogger(__name__)


class FuzzyART(ARTModule):
    """
    Fuzzy ART clustering of complement coded samples.

    Categories are searched in order of decreasing activation and the first one
    whose match passes the vigilance threshold learns the sample. When none
    passes, the sample becomes a new category. Passing a label to
    ``find_and_learn`` trains in simple supervised mode.
    """

    def __init__(self, opts=None, **kwargs):
        super().__init__(build_options(FuzzyARTOptions, opts, **kwargs))
        self.scoring = Scoring(self.opts)
        self.store = CategoryStore()

    @classmethod
    def from_sample(cls, opts, sample, label=None, preprocessed=True):
        """Build a module and initialize it on a single sample."""
        art = cls(opts)
        sample = art.init_train_sample(sample, preprocessed)
        art.initialize(sample, label=label)
        return art

    @property
    def n_categories(self):
        return len(self.store)

    @property
    def W(self):
        return self.store.weights

    @property
    def labels(self):
        return self.store.labels

    @property
    def n_instance(self):
        return self.store.instance_counts

    def set_threshold(self):
        if self.opts.gamma_normalization:
            self.threshold = self.opts.rho * self.config.dim ** self.opts.gamma_ref
        else:
            self.threshold = self.opts.rho

    def initialize(self, x, label=None):
        self.set_threshold()
        self.store = CategoryStore(self.config.dim_comp)
        self.create_category(x, 1 if label is None else label)

    def weights_snapshot(self):
        return [self.store.snapshot()]

    # Add a category for sample x, either fast committed or learned from all ones
    def create_category(self, x, label):
        if self.opts.uncommitted:
            weight = basic_update(x, np.ones(self.config.dim_comp), self.opts.beta)
        else:
            weight = np.array(x, dtype=float)
        return self.store.append(weight, label)

    def activation(self, x, index):
        return float(self.scoring.activation(x, self.store.get(index), self.config.dim))

    def match(self, x, index):
        W = self.store.get(index)
        T = self.scoring.activation(x, W, self.config.dim)
        return float(self.scoring.match(x, W, self.config.dim, activation=T))

    def activation_match(self, x):
        """Compute the activation and match of every category against x."""
        self.T, self.M = self.scoring.activation_match(x, self.store.weights, self.config.dim)

    def find_and_learn(self, x, label=None, preprocessed=False):
        """Train on one sample and return the label it was assigned."""
        sample = self.init_train_sample(x, preprocessed)
        supervised = label is not None

        if self.n_categories == 0:
            y_hat = label if supervised else 1
            self.initialize(sample, label=y_hat)
            return y_hat

        # A label never seen before gets its own category straight away
        if supervised and not self.store.has_label(label):
            self.create_category(sample, label)
            return label

        self.activation_match(sample)
        ranking = rank_categories(self.T)
        result = match_tracking_search(
            ranking, self.M, self.threshold,
            labels=self.store.labels, label=label, epsilon=self.opts.epsilon,
        )

        if result.bmu is None:
            # Keep the top activation as the reported bmu
            bmu = ranking[0]
            y_hat = label if supervised else self.n_categories + 1
            logger.debug("Mismatch, creating category %d with label %d", self.n_categories, y_hat)
            self.create_category(sample, y_hat)
        else:
            bmu = result.bmu
            learn(self.store, bmu, sample, self.opts.beta)
            y_hat = self.store.label(bmu)

        self.log_stats(bmu, result.bmu is None)
        return y_hat

    def classify(self, x, fallback_to_best_match=False, preprocessed=False):
        """
        Return the label of the first resonant category without learning.

        Returns ``MISMATCH`` when nothing resonates, or the label of the most
        active category if ``fallback_to_best_match`` is set.
        """
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


class GammaNormalizedFuzzyART(FuzzyART):
    """FuzzyART with gamma-normalized activation, match and threshold."""

    def __init__(self, opts=None, **kwargs):
        if opts is None:
            kwargs["gamma_normalization"] = True
        elif isinstance(opts, FuzzyARTOptions) and not opts.gamma_normalization:
            opts = FuzzyARTOptions(**{**opts.model_dump(), "gamma_normalization": True})
        super().__init__(opts, **kwargs)

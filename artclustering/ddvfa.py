"""
Distributed Dual-Vigilance Fuzzy ART (DDVFA).

Every DDVFA category is a cluster owned by its own FuzzyART module. The lower
vigilance ``rho_lb`` admits samples into clusters, while the upper vigilance
``rho_ub`` governs the prototypes each cluster grows internally. A cluster's
activation and match are reductions (linkages) of its prototypes' values.

References:
    L. E. Brito da Silva, I. Elnabarawy, and D. C. Wunsch, 'Distributed dual
    vigilance fuzzy adaptive resonance theory learns online, retrieves
    arbitrarily-shaped clusters, and mitigates order dependence,' Neural
    Networks, vol. 121, pp. 208-228, 2020.
"""

import logging

import numpy as np

from .base import ARTModule
from .errors import MISMATCH, InvariantError
from .fuzzy_art import FuzzyART
from .match_tracking import match_tracking_search, rank_categories
from .options import DDVFAOptions, Linkage, build_options

logger = logging.getLogger(__name__)


def _field(module, activation):
    return module.T if activation else module.M


def single(module, sample, activation):
    return float(np.max(_field(module, activation)))


def complete(module, sample, activation):
    return float(np.min(_field(module, activation)))


def average(module, sample, activation):
    return float(np.mean(_field(module, activation)))


def median(module, sample, activation):
    return float(np.median(_field(module, activation)))


def weighted(module, sample, activation):
    """Mean of the prototype values weighted by their instance counts."""
    counts = module.n_instance
    return float(_field(module, activation) @ (counts / counts.sum()))


def centroid(module, sample, activation):
    """Score the sample against the element-wise minimum of all prototypes."""
    Wc = np.min(module.W, axis=0)
    T = module.scoring.activation(sample, Wc, module.config.dim)
    if activation:
        return float(T)
    return float(module.scoring.match(sample, Wc, module.config.dim, activation=T))


LINKAGE_FUNCTIONS = {
    Linkage.SINGLE: single,
    Linkage.COMPLETE: complete,
    Linkage.AVERAGE: average,
    Linkage.MEDIAN: median,
    Linkage.WEIGHTED: weighted,
    Linkage.CENTROID: centroid,
}


class DDVFA(ARTModule):
    """
    Distributed dual-vigilance Fuzzy ART.

    Gamma normalization is on by default, so thresholds and match values are
    scaled by ``dim ** gamma_ref`` and an exact self-match is not 1.0. With
    ``rho_lb=0.0, rho_ub=1.0`` the default settings even split identical
    samples into two prototypes, because the nested match falls just short of
    ``rho_ub * dim``. Pass ``gamma_normalization=False, activation="basic",
    match="basic"`` for matches in [0, 1] where identical samples match at 1.0.
    """

    def __init__(self, opts=None, **kwargs):
        super().__init__(build_options(DDVFAOptions, opts, **kwargs))
        self.subopts = self.opts.nested_options()
        self.linkage = LINKAGE_FUNCTIONS[self.opts.linkage]
        # F2 nodes, each a FuzzyART owned by exactly one cluster
        self.F2 = []
        self._labels = []
        self.T_win = 0.0
        self.M_win = 0.0

    @property
    def n_categories(self):
        return len(self.F2)

    @property
    def labels(self):
        return np.array(self._labels, dtype=int)

    def set_threshold(self):
        if self.opts.gamma_normalization:
            self.threshold = self.opts.rho_lb * self.config.dim ** self.opts.gamma_ref
        else:
            self.threshold = self.opts.rho_lb

    def weights_snapshot(self):
        return [module.store.snapshot() for module in self.F2]

    def create_category(self, sample, label):
        self.F2.append(FuzzyART.from_sample(self.subopts, sample, preprocessed=True))
        self._labels.append(int(label))
        if len(self.F2) != len(self._labels):
            raise InvariantError(
                f"{len(self.F2)} F2 nodes but {len(self._labels)} labels"
            )

    def similarity(self, module, sample, activation):
        """Linkage value of one F2 node; its activation_match must be current."""
        return self.linkage(module, sample, activation)

    def activation_match(self, sample):
        T = np.zeros(self.n_categories)
        M = np.zeros(self.n_categories)
        for jx, module in enumerate(self.F2):
            module.activation_match(sample)
            T[jx] = self.similarity(module, sample, True)
            M[jx] = self.similarity(module, sample, False)
        self.T, self.M = T, M

    def find_and_learn(self, x, label=None, preprocessed=False):
        sample = self.init_train_sample(x, preprocessed)
        supervised = label is not None

        if not self.F2:
            self.set_threshold()
            y_hat = label if supervised else 1
            self.create_category(sample, y_hat)
            return y_hat

        self.activation_match(sample)
        ranking = rank_categories(self.T)
        result = match_tracking_search(
            ranking, self.M, self.threshold,
            labels=self._labels, label=label, epsilon=self.opts.epsilon,
        )

        if result.bmu is None:
            bmu = ranking[0]
            y_hat = label if supervised else self.n_categories + 1
            logger.debug("Mismatch, creating cluster with label %d", y_hat)
            self.create_category(sample, y_hat)
        else:
            bmu = result.bmu
            # The cluster's own module decides which prototype learns
            self.F2[bmu].find_and_learn(sample, preprocessed=True)
            y_hat = self._labels[bmu]

        self.T_win, self.M_win = self.T[bmu], self.M[bmu]
        self.log_stats(bmu, result.bmu is None)
        return y_hat

    def classify(self, x, fallback_to_best_match=False, preprocessed=False):
        sample = self.init_classify(x, preprocessed)
        self.activation_match(sample)
        ranking = rank_categories(self.T)
        result = match_tracking_search(ranking, self.M, self.threshold)

        if result.bmu is None:
            logger.debug("Mismatch")
            bmu = ranking[0]
            y_hat = self._labels[bmu] if fallback_to_best_match else MISMATCH
        else:
            bmu = result.bmu
            y_hat = self._labels[bmu]

        self.T_win, self.M_win = self.T[bmu], self.M[bmu]
        self.log_stats(bmu, result.bmu is None)
        return y_hat

    def get_W(self):
        """Weight matrix of every F2 node."""
        return [module.W for module in self.F2]

    def get_n_weights_vec(self):
        return np.array([module.n_categories for module in self.F2], dtype=int)

    def get_n_weights(self):
        return int(self.get_n_weights_vec().sum())

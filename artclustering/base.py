"""
Behaviour shared by all ART modules: input preparation, batch training and
inference loops, and per-sample statistics.
"""

import logging

import numpy as np
from tqdm import tqdm

from .data import DataConfig, as_matrix, complement_code
from .errors import ConfigurationError, InvariantError

logger = logging.getLogger(__name__)


def build_art_stats():
    return {"T": 0.0, "M": 0.0, "bmu": -1, "mismatch": False}


class ARTModule:
    """
    Base class for the ART modules.

    Subclasses implement ``find_and_learn`` and ``classify`` for single
    complement coded samples, ``set_threshold`` and ``weights_snapshot``.
    """

    def __init__(self, opts):
        self.opts = opts
        self.config = DataConfig()
        self.threshold = None
        self.epoch = 0
        self.T = np.empty(0)
        self.M = np.empty(0)
        self.stats = build_art_stats()

    @property
    def n_categories(self):
        raise NotImplementedError

    def set_threshold(self):
        raise NotImplementedError

    def weights_snapshot(self):
        """Copies of every weight matrix, used for the convergence check."""
        raise NotImplementedError

    def find_and_learn(self, x, label=None, preprocessed=False):
        raise NotImplementedError

    def classify(self, x, fallback_to_best_match=False, preprocessed=False):
        raise NotImplementedError

    def data_setup(self, data):
        """Set up the data configuration from a batch of raw samples."""
        self.config.fit(data)

    # Prepare one sample for training, setting up the config if needed
    def init_train_sample(self, x, preprocessed):
        x = np.asarray(x, dtype=float)
        if x.ndim != 1:
            raise ConfigurationError(f"expected a single sample, got shape {x.shape}")
        if not preprocessed:
            if not self.config.setup:
                raise ConfigurationError(
                    f"{type(self).__name__}: cannot preprocess data before being set up"
                )
            return complement_code(x, config=self.config)
        if not self.config.setup:
            if x.shape[0] % 2:
                raise ConfigurationError(
                    "sample was declared preprocessed but its length is odd"
                )
            self.config = DataConfig.from_bounds(0.0, 1.0, x.shape[0] // 2)
        self._check_width(x)
        return x

    def init_train_batch(self, x, preprocessed):
        x = as_matrix(x)
        if preprocessed:
            return x
        if not self.config.setup:
            self.config.fit(x)
        return complement_code(x, config=self.config)

    def init_classify(self, x, preprocessed):
        x = np.asarray(x, dtype=float)
        if self.threshold is None:
            raise InvariantError(
                f"{type(self).__name__}: cannot classify before training has started"
            )
        if not preprocessed:
            x = complement_code(x, config=self.config)
        self._check_width(x)
        return x

    def _check_width(self, x):
        if x.shape[-1] != self.config.dim_comp:
            raise ConfigurationError(
                f"expected complement coded samples of length {self.config.dim_comp}, "
                f"got {x.shape[-1]}"
            )

    def log_stats(self, bmu, mismatch, T=None, M=None):
        self.stats["T"] = float(self.T[bmu]) if T is None else float(T)
        self.stats["M"] = float(self.M[bmu]) if M is None else float(M)
        self.stats["bmu"] = int(bmu)
        self.stats["mismatch"] = mismatch

    def _iterator(self, n_samples):
        if self.opts.display:
            return tqdm(range(n_samples))
        return range(n_samples)

    def _update_iterator(self, iterator, i):
        if isinstance(iterator, tqdm):
            iterator.set_description(
                f"Ep: {self.epoch}, ID: {i}, Cat: {self.n_categories}"
            )

    def train(self, x, y=None, preprocessed=False):
        """
        Train on a batch of samples, one per row, with optional labels.

        Runs until ``max_epoch`` epochs have passed or an epoch leaves every
        weight unchanged. Returns the labels assigned during the last epoch.
        """
        if self.opts.display:
            logger.info("Training %s", type(self).__name__)
        x = self.init_train_batch(x, preprocessed)
        n_samples = x.shape[0]
        if y is not None:
            y = np.asarray(y, dtype=int)
            if y.shape != (n_samples,):
                raise ConfigurationError(
                    f"got {y.shape[0] if y.ndim else 0} labels for {n_samples} samples"
                )
        y_hat = np.zeros(n_samples, dtype=int)
        self.epoch = 0
        while True:
            self.epoch += 1
            before = self.weights_snapshot()
            iterator = self._iterator(n_samples)
            for i in iterator:
                self._update_iterator(iterator, i)
                label = None if y is None else int(y[i])
                y_hat[i] = self.find_and_learn(x[i], label=label, preprocessed=True)
            if self.stopping_conditions(before):
                break
        return y_hat

    def stopping_conditions(self, before):
        if self.epoch >= self.opts.max_epoch:
            return True
        after = self.weights_snapshot()
        converged = len(before) == len(after) and all(
            old.shape == new.shape and np.array_equal(old, new)
            for old, new in zip(before, after)
        )
        if converged:
            logger.debug("%s converged after %d epochs", type(self).__name__, self.epoch)
        return converged

    def predict(self, x, fallback_to_best_match=False, preprocessed=False):
        """Classify a batch of samples, one per row."""
        if self.opts.display:
            logger.info("Testing %s", type(self).__name__)
        x = self.init_classify(as_matrix(x), preprocessed)
        n_samples = x.shape[0]
        y_hat = np.zeros(n_samples, dtype=int)
        iterator = self._iterator(n_samples)
        for i in iterator:
            self._update_iterator(iterator, i)
            y_hat[i] = self.classify(
                x[i], fallback_to_best_match=fallback_to_best_match, preprocessed=True
            )
        return y_hat

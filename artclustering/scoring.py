"""
Activation, match and learning functions.

Every function works on one weight vector or on a matrix with one weight per
row, so a module can score all of its categories against a sample at once.
All norms are L1 norms of nonnegative vectors, which reduce to plain sums.
"""

import numpy as np

from .options import ActivationRule, MatchRule


def x_w_min_norm(x, W):
    return np.minimum(x, W).sum(axis=-1)


def w_norm(W):
    return np.sum(W, axis=-1)


def basic_activation(x, W, opts, dim):
    return x_w_min_norm(x, W) / (opts.alpha + w_norm(W))


def gamma_activation(x, W, opts, dim):
    return basic_activation(x, W, opts, dim) ** opts.gamma


# Default ARTMAP choice-by-difference
def choice_by_difference(x, W, opts, dim):
    return x_w_min_norm(x, W) + (1.0 - opts.alpha) * (dim - w_norm(W))


def basic_match(x, W, opts, dim, activation=None):
    return x_w_min_norm(x, W) / dim


def unnormalized_match(x, W, opts, dim, activation=None):
    return x_w_min_norm(x, W)


def gamma_match(x, W, opts, dim, activation=None):
    """Gamma-normalized match, reusing a precomputed gamma activation if given."""
    if activation is None:
        activation = gamma_activation(x, W, opts, dim)
    return w_norm(W) ** opts.gamma_ref * activation


ACTIVATION_FUNCTIONS = {
    ActivationRule.BASIC: basic_activation,
    ActivationRule.GAMMA: gamma_activation,
    ActivationRule.CHOICE_BY_DIFFERENCE: choice_by_difference,
}

MATCH_FUNCTIONS = {
    MatchRule.BASIC: basic_match,
    MatchRule.UNNORMALIZED: unnormalized_match,
    MatchRule.GAMMA: gamma_match,
}


class Scoring:
    """Activation and match functions selected by a module's options."""

    def __init__(self, opts):
        self.opts = opts
        self._activation = ACTIVATION_FUNCTIONS[opts.activation]
        self._match = MATCH_FUNCTIONS[opts.match]
        # The gamma match is a scaled gamma activation
        self._shares_activation = (
            opts.activation is ActivationRule.GAMMA and opts.match is MatchRule.GAMMA
        )

    def activation(self, x, W, dim):
        return self._activation(x, W, self.opts, dim)

    def match(self, x, W, dim, activation=None):
        if not self._shares_activation:
            activation = None
        return self._match(x, W, self.opts, dim, activation=activation)

    def activation_match(self, x, W, dim):
        T = self.activation(x, W, dim)
        return T, self.match(x, W, dim, activation=T)


def basic_update(x, W, beta):
    """Fuzzy AND learning: ``beta * min(x, W) + (1 - beta) * W``."""
    return beta * np.minimum(x, W) + (1.0 - beta) * W


def learn(store, index, x, beta):
    """Move category ``index`` of ``store`` towards ``x`` and count the instance."""
    store.replace(index, basic_update(x, store.get(index), beta))
    store.increment(index)

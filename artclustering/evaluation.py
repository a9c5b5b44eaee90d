"""
Helpers for scoring clusterings against known classes.

Predicted labels may contain ``MISMATCH`` entries from ``classify``. These
never take part in the label mapping and never win a smoothing vote.
"""

import logging

import numpy as np
from scipy.optimize import linear_sum_assignment
from scipy.stats import mode
from sklearn.metrics import accuracy_score, confusion_matrix
from sklearn.metrics.cluster import contingency_matrix

from .errors import MISMATCH, ConfigurationError

logger = logging.getLogger(__name__)


def performance(y_hat, y):
    """Fraction of estimated labels equal to the true labels."""
    y_hat = np.asarray(y_hat)
    y = np.asarray(y)
    if y_hat.shape != y.shape:
        raise ConfigurationError("Label vectors must be the same length")
    return float(np.mean(y_hat == y))


def map_labels_to_true(predicted_labels, true_labels, unmatched=MISMATCH):
    """
    Relabel clusters with the classes they overlap most.

    Clusters and classes are paired one to one by a maximum overlap assignment.
    Mismatched samples, and clusters left over when there are more clusters
    than classes, are labelled ``unmatched``.
    """
    y_hat = np.asarray(predicted_labels)
    y = np.asarray(true_labels)
    resonant = y_hat != MISMATCH
    if not resonant.any():
        return np.full(y_hat.shape, unmatched)

    classes = np.unique(y[resonant])
    clusters = np.unique(y_hat[resonant])
    # Rows are classes, columns are clusters
    overlap = contingency_matrix(y[resonant], y_hat[resonant])
    rows, cols = linear_sum_assignment(overlap, maximize=True)
    mapping = dict(zip(clusters[cols], classes[rows]))
    return np.array([mapping.get(label, unmatched) for label in y_hat])


def _vote(labels):
    voters = labels[labels != MISMATCH]
    if voters.size == 0:
        return MISMATCH
    return mode(voters, keepdims=False).mode


def smooth_labels(predicted_labels, window=5):
    """
    Majority vote over a centred window, truncated at both ends.

    Ties go to the smallest label. A window holding only mismatches stays a
    mismatch.
    """
    y_hat = np.asarray(predicted_labels)
    half = window // 2
    return np.array(
        [_vote(y_hat[max(i - half, 0):i + half + 1]) for i in range(len(y_hat))],
        dtype=y_hat.dtype,
    )


def evaluate(predicted_labels, true_labels, window=None):
    """Map, optionally smooth, and score a clustering."""
    mapped = map_labels_to_true(predicted_labels, true_labels)
    if window:
        mapped = smooth_labels(mapped, window=window)
    return {
        "accuracy": accuracy_score(true_labels, mapped),
        "conf_matrix": confusion_matrix(true_labels, mapped),
        "labels": mapped,
    }


def sweep_vigilance(factory, features, true_labels, vigilance_values, window=None):
    """
    Train a fresh module per vigilance value and keep the most accurate one.

    ``factory`` builds an untrained module from a vigilance value.
    """
    best = None
    for vigilance in vigilance_values:
        art = factory(vigilance)
        art.train(features)
        predicted_labels = art.predict(features, fallback_to_best_match=True)
        result = evaluate(predicted_labels, true_labels, window=window)
        logger.debug(
            "vigilance %.3f: %d categories, accuracy %.3f",
            vigilance, art.n_categories, result["accuracy"],
        )
        if best is None or result["accuracy"] > best["accuracy"]:
            best = dict(result, vigilance=vigilance, module=art)
    return best

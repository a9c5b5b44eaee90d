"""
Vigilance search over an activation ranking, with match tracking.

Categories are visited in order of decreasing activation and the first one
whose match reaches the threshold wins. In supervised mode a winner carrying a
different label raises the effective threshold just above its match and the
scan restarts from the top of the same ranking, so a conflicting category can
never win twice and the search ends after at most ``len(ranking) + 1`` scans.
"""

import logging
from collections import namedtuple

import numpy as np

logger = logging.getLogger(__name__)

SearchResult = namedtuple("SearchResult", ["bmu", "threshold", "restarts"])


def rank_categories(T):
    """Category indices by decreasing activation; ties keep index order."""
    return np.argsort(-np.asarray(T), kind="stable")


def raise_threshold(match, epsilon):
    # The raised threshold must strictly exceed the conflicting match
    return max(match + epsilon, np.nextafter(match, np.inf))


def match_tracking_search(ranking, M, threshold, labels=None, label=None, epsilon=1e-3):
    """
    Walk ``ranking`` and return the first category that resonates.

    ``M`` holds the match value of every category. ``labels`` and ``label`` are
    only consulted in supervised mode (``label`` not None). The returned
    ``bmu`` is None when no category resonates with a compatible label.
    """
    effective = threshold
    restarts = 0
    while True:
        for bmu in ranking:
            if M[bmu] < effective:
                continue
            if label is None or labels[bmu] == label:
                return SearchResult(int(bmu), effective, restarts)
            effective = raise_threshold(M[bmu], epsilon)
            restarts += 1
            logger.debug(
                "Match tracking: category %d has label %d, not %d; threshold raised to %.6f",
                bmu, labels[bmu], label, effective,
            )
            break
        else:
            return SearchResult(None, effective, restarts)

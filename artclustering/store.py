"""
Append-only storage of category prototypes.
"""

import numpy as np

from .errors import InvariantError


class CategoryStore:
    """
    Growable collection of category weights with one label and one instance
    count per weight.

    Rows are never removed or reordered, so a category index stays valid for the
    life of the store. Weights live in a preallocated matrix that doubles in
    capacity when it fills up.
    """

    def __init__(self, dim_comp=0, capacity=8):
        self.dim_comp = dim_comp
        self._weights = np.empty((capacity, dim_comp), dtype=float)
        self._labels = []
        self._counts = []
        self._size = 0

    def __len__(self):
        return self._size

    def size(self):
        return self._size

    @property
    def weights(self):
        """View of the stored weights, one row per category."""
        return self._weights[: self._size]

    @property
    def labels(self):
        return np.array(self._labels, dtype=int)

    @property
    def instance_counts(self):
        return np.array(self._counts, dtype=int)

    def label(self, index):
        self._check_index(index)
        return self._labels[index]

    def has_label(self, label):
        return label in self._labels

    def get(self, index):
        self._check_index(index)
        return self._weights[index]

    def append(self, weight, label):
        """Store a new category and return its index."""
        weight = np.asarray(weight, dtype=float)
        if self._size == 0 and self.dim_comp == 0:
            self.dim_comp = weight.shape[0]
            self._weights = np.empty((self._weights.shape[0], self.dim_comp))
        if weight.shape != (self.dim_comp,):
            raise InvariantError(
                f"weight of shape {weight.shape} does not fit a store of width {self.dim_comp}"
            )
        if self._size == self._weights.shape[0]:
            grown = np.empty((max(1, 2 * self._size), self.dim_comp))
            grown[: self._size] = self._weights[: self._size]
            self._weights = grown
        self._weights[self._size] = weight
        self._labels.append(int(label))
        self._counts.append(1)
        self._size += 1
        self._check_invariant()
        return self._size - 1

    def replace(self, index, new_weight):
        self._check_index(index)
        self._weights[index] = new_weight

    def increment(self, index):
        self._check_index(index)
        self._counts[index] += 1

    def snapshot(self):
        return self.weights.copy()

    def _check_index(self, index):
        if not 0 <= index < self._size:
            raise InvariantError(f"category {index} does not exist ({self._size} stored)")

    def _check_invariant(self):
        if not len(self._labels) == len(self._counts) == self._size:
            raise InvariantError(
                f"store arrays diverged: {self._size} weights, "
                f"{len(self._labels)} labels, {len(self._counts)} counts"
            )

    def __repr__(self):
        return f"CategoryStore(n_categories={self._size}, dim_comp={self.dim_comp})"

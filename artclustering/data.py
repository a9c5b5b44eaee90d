"""
Data configuration and preprocessing for the ART modules.

Sample matrices follow the scikit-learn convention of one sample per row,
``(n_samples, n_features)``. Every module consumes complement coded samples
``[x, 1 - x]`` with ``x`` linearly normalized to [0, 1] per feature.
"""

import logging

import numpy as np
import pandas as pd
from sklearn.preprocessing import MinMaxScaler

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class DataConfig:
    """
    Per-feature bounds and dimensions of the data an ART module learns from.

    ``dim`` is the number of raw features and ``dim_comp`` the length of a
    complement coded sample. The bounds live in a fitted ``MinMaxScaler``.
    """

    def __init__(self, mins=None, maxs=None):
        self.setup = False
        self.dim = 0
        self.dim_comp = 0
        self._scaler = None
        if mins is not None or maxs is not None:
            if mins is None or maxs is None:
                raise ConfigurationError("mins and maxs must be given together")
            mins = np.atleast_1d(np.asarray(mins, dtype=float))
            maxs = np.atleast_1d(np.asarray(maxs, dtype=float))
            if mins.shape != maxs.shape:
                raise ConfigurationError("mins and maxs must be the same length")
            if np.any(mins > maxs):
                raise ConfigurationError("feature minimum exceeds its maximum")
            self._fit(np.vstack([mins, maxs]))

    @classmethod
    def from_bounds(cls, min_value, max_value, dim):
        """Config where every feature shares the same bounds."""
        return cls(np.full(dim, float(min_value)), np.full(dim, float(max_value)))

    @classmethod
    def from_data(cls, data):
        config = cls()
        config.fit(data)
        return config

    @property
    def mins(self):
        return self._scaler.data_min_ if self.setup else np.empty(0)

    @property
    def maxs(self):
        return self._scaler.data_max_ if self.setup else np.empty(0)

    def fit(self, data):
        """Infer the feature bounds from a batch of samples."""
        if self.setup:
            logger.warning("Data configuration already set up, overwriting config")
        self._fit(as_matrix(data))
        return self

    def _fit(self, bounds):
        bounds = np.asarray(bounds, dtype=float)
        if bounds.ndim != 2 or bounds.shape[0] == 0:
            raise ConfigurationError("data must be a non-empty 2-D array")
        self._scaler = MinMaxScaler(feature_range=(0.0, 1.0)).fit(bounds)
        self.dim = bounds.shape[1]
        self.dim_comp = 2 * self.dim
        self.setup = True

    def normalize(self, data):
        if not self.setup:
            raise ConfigurationError("cannot normalize data before the config is set up")
        data = np.asarray(data, dtype=float)
        matrix = np.atleast_2d(data)
        if matrix.shape[1] != self.dim:
            raise ConfigurationError(
                f"expected {self.dim} features, got {matrix.shape[1]}"
            )
        x_raw = self._scaler.transform(matrix)
        # Constant features carry no information and are zeroed
        x_raw[:, self._scaler.data_range_ == 0] = 0.0
        return x_raw[0] if data.ndim == 1 else x_raw

    def __repr__(self):
        return f"DataConfig(setup={self.setup}, dim={self.dim}, dim_comp={self.dim_comp})"


def as_matrix(data):
    matrix = np.asarray(data, dtype=float)
    if matrix.ndim == 1:
        matrix = matrix.reshape(1, -1)
    if matrix.ndim != 2:
        raise ConfigurationError(f"expected a 1-D or 2-D array, got {matrix.ndim}-D")
    return matrix


def linear_normalization(data, config=None):
    """Normalize a sample or a batch to [0, 1] along each feature."""
    if config is None:
        data = np.asarray(data, dtype=float)
        if data.ndim == 1:
            raise ConfigurationError("normalizing a single sample requires a set-up DataConfig")
        config = DataConfig.from_data(data)
    return config.normalize(data)


def complement_code(data, config=None):
    """Normalize ``data`` and return the augmented ``[x, 1 - x]``."""
    x_raw = linear_normalization(data, config=config)
    return np.concatenate([x_raw, 1.0 - x_raw], axis=-1)


# Map arbitrary class identifiers to sequential labels starting at 1
def map_class_ids(class_ids):
    unique_classes = sorted(set(np.asarray(class_ids).tolist()))
    class_map = {original: idx + 1 for idx, original in enumerate(unique_classes)}
    return np.array([class_map[label] for label in np.asarray(class_ids).tolist()], dtype=int)


def frame_to_samples(frame: pd.DataFrame, label_column=None, exclude=()):
    """
    Split a feature DataFrame into a sample matrix and an optional label vector.

    Columns named in ``exclude`` (timestamps, indices) are dropped; the label
    column, if given, is mapped to sequential labels with ``map_class_ids``.
    """
    dropped = list(exclude)
    if label_column is not None:
        dropped.append(label_column)
    missing = [column for column in dropped if column not in frame.columns]
    if missing:
        raise ConfigurationError(f"columns not found in frame: {missing}")
    features = frame.drop(columns=dropped).to_numpy(dtype=float)
    if label_column is None:
        return features, None
    return features, map_class_ids(frame[label_column].values)

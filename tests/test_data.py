"""
Tests for data configuration and preprocessing
"""

import logging

import numpy as np
import pandas as pd
import pytest

from artclustering.data import (
    DataConfig,
    complement_code,
    frame_to_samples,
    linear_normalization,
    map_class_ids,
)
from artclustering.errors import ConfigurationError

DATA = np.array([[0.0, 10.0], [5.0, 20.0], [10.0, 30.0]])


class TestDataConfig:
    def test_empty(self):
        config = DataConfig()
        assert not config.setup
        assert config.dim == 0
        assert config.dim_comp == 0

    def test_from_data(self):
        config = DataConfig.from_data(DATA)
        assert config.setup
        assert config.dim == 2
        assert config.dim_comp == 4
        np.testing.assert_array_equal(config.mins, [0.0, 10.0])
        np.testing.assert_array_equal(config.maxs, [10.0, 30.0])

    def test_from_bounds(self):
        config = DataConfig.from_bounds(-1.0, 1.0, 3)
        np.testing.assert_array_equal(config.mins, [-1.0, -1.0, -1.0])
        assert config.dim_comp == 6

    def test_explicit_bounds_validated(self):
        with pytest.raises(ConfigurationError):
            DataConfig([0.0, 0.0], [1.0])
        with pytest.raises(ConfigurationError):
            DataConfig([2.0], [1.0])
        with pytest.raises(ConfigurationError):
            DataConfig(mins=[0.0])

    def test_refit_warns(self, caplog):
        config = DataConfig.from_data(DATA)
        with caplog.at_level(logging.WARNING, logger="artclustering.data"):
            config.fit(DATA * 2)
        assert "overwriting" in caplog.text
        np.testing.assert_array_equal(config.maxs, [20.0, 60.0])

    def test_wrong_feature_count(self):
        config = DataConfig.from_data(DATA)
        with pytest.raises(ConfigurationError):
            config.normalize([1.0, 2.0, 3.0])

    def test_normalize_before_setup(self):
        with pytest.raises(ConfigurationError):
            DataConfig().normalize(DATA)


class TestPreprocessing:
    def test_linear_normalization(self):
        x = linear_normalization(DATA)
        np.testing.assert_allclose(x, [[0.0, 0.0], [0.5, 0.5], [1.0, 1.0]])

    def test_complement_code_matrix(self):
        x = complement_code(DATA)
        assert x.shape == (3, 4)
        np.testing.assert_allclose(x[1], [0.5, 0.5, 0.5, 0.5])
        np.testing.assert_allclose(x[:, :2] + x[:, 2:], 1.0)

    def test_complement_code_vector_with_config(self):
        config = DataConfig.from_data(DATA)
        x = complement_code([10.0, 10.0], config=config)
        np.testing.assert_allclose(x, [1.0, 0.0, 0.0, 1.0])

    def test_vector_needs_config(self):
        with pytest.raises(ConfigurationError):
            linear_normalization([1.0, 2.0])

    def test_constant_feature_zeroed(self):
        data = np.array([[1.0, 3.0], [2.0, 3.0], [3.0, 3.0]])
        x = linear_normalization(data)
        np.testing.assert_array_equal(x[:, 1], 0.0)
        config = DataConfig.from_data(data)
        assert linear_normalization([2.0, 4.0], config=config)[1] == 0.0


class TestFrames:
    def test_map_class_ids(self):
        assert map_class_ids([7, 3, 7, 9]).tolist() == [2, 1, 2, 3]

    def test_frame_to_samples(self):
        frame = pd.DataFrame(
            {
                "timestamp": [0.0, 0.1, 0.2],
                "Feature_0": [1.0, 2.0, 3.0],
                "Feature_1": [4.0, 5.0, 6.0],
                "class_id": [0, 2, 0],
            }
        )
        x, y = frame_to_samples(frame, label_column="class_id", exclude=["timestamp"])
        np.testing.assert_array_equal(x, [[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]])
        assert y.tolist() == [1, 2, 1]

    def test_frame_without_labels(self):
        frame = pd.DataFrame({"a": [1.0], "b": [2.0]})
        x, y = frame_to_samples(frame)
        assert x.shape == (1, 2)
        assert y is None

    def test_missing_column(self):
        frame = pd.DataFrame({"a": [1.0]})
        with pytest.raises(ConfigurationError):
            frame_to_samples(frame, label_column="class_id")

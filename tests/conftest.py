import numpy as np
import pytest


def cc(x):
    """Complement code samples already in [0, 1]."""
    x = np.asarray(x, dtype=float)
    return np.concatenate([x, 1.0 - x], axis=-1)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def blobs(rng):
    """Two tight, well separated 2-D blobs in [0, 1], complement coded."""
    low = 0.1 + rng.uniform(-0.02, 0.02, size=(30, 2))
    high = 0.9 + rng.uniform(-0.02, 0.02, size=(30, 2))
    x = np.vstack([low, high])
    y = np.array([1] * 30 + [2] * 30)
    order = rng.permutation(len(y))
    return cc(x[order]), y[order]

"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pycoo import SparseMatrix, from_dense


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_sparse():
    """Factory: SparseMatrix from a 2D array, sized to fit unless told otherwise."""
    def _make(dense, capacity=None, **kwargs):
        dense = np.asarray(dense, dtype=np.float64)
        rows, cols = dense.shape
        if capacity is None:
            capacity = rows * cols
        out = SparseMatrix.allocate(capacity)
        from_dense(out, dense, rows, cols, **kwargs)
        return out
    return _make


@pytest.fixture
def random_dense(rng):
    """Factory: dense array with roughly ``density`` non-zeros well above EPSILON."""
    def _make(rows, cols, density=0.3, *, signed=False):
        values = rng.uniform(0.5, 5.0, size=(rows, cols))
        if signed:
            values *= rng.choice([-1.0, 1.0], size=(rows, cols))
        mask = rng.random((rows, cols)) < density
        return np.where(mask, values, 0.0)
    return _make


@pytest.fixture
def product_pair():
    """Small 2x3 and 3x2 operands with a known product."""
    A = np.array([[1.0, 0.0, 2.0], [0.0, 3.0, 0.0]])
    B = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    expected = np.array([[3.0, 2.0], [0.0, 3.0]])
    return A, B, expected

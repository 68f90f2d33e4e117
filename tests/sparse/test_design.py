"""
Tests for SparseMatrix storage: allocation, capacity-checked append,
swap-remove delete, read-only views and scipy interop.
"""

import numpy as np
import pytest
from scipy import sparse

from pycoo import (
    CapacityExceededError,
    DimensionError,
    Entry,
    InvalidArgumentError,
    SparseMatrix,
    to_dense,
)


class TestAllocate:

    def test_empty_matrix(self):
        m = SparseMatrix.allocate(4, rows=2, cols=3)
        assert m.capacity == 4
        assert m.count == 0
        assert m.nnz == 0
        assert m.shape == (2, 3)
        assert m.is_empty
        assert len(m) == 0
        assert list(m) == []

    def test_zero_capacity_allowed(self):
        assert SparseMatrix.allocate(0).capacity == 0

    def test_negative_capacity_rejected(self):
        with pytest.raises(InvalidArgumentError, match="capacity"):
            SparseMatrix.allocate(-1)

    @pytest.mark.parametrize("rows, cols", [(0, 2), (2, 0)])
    def test_zero_dimension_rejected(self, rows, cols):
        with pytest.raises(InvalidArgumentError):
            SparseMatrix.allocate(2, rows=rows, cols=cols)

    def test_repr(self):
        m = SparseMatrix.allocate(5, rows=2, cols=2)
        assert repr(m) == "SparseMatrix(rows=2, cols=2, nnz=0, capacity=5)"


class TestAppend:

    def test_append_in_order(self):
        m = SparseMatrix.allocate(3, rows=2, cols=2)
        m.append(1, 0, 2.5)
        m.append(0, 1, -1.0)
        assert list(m.entries()) == [Entry(1, 0, 2.5), Entry(0, 1, -1.0)]

    def test_capacity_exceeded(self):
        m = SparseMatrix.allocate(1, rows=2, cols=2)
        m.append(0, 0, 1.0)
        with pytest.raises(CapacityExceededError) as exc_info:
            m.append(1, 1, 1.0)
        assert exc_info.value.required == 2
        assert exc_info.value.capacity == 1
        assert m.count == 1

    def test_duplicate_rejected(self):
        m = SparseMatrix.allocate(3, rows=2, cols=2)
        m.append(0, 1, 1.0)
        with pytest.raises(InvalidArgumentError, match="already stored"):
            m.append(0, 1, 2.0)

    @pytest.mark.parametrize("row, col", [(2, 0), (0, 2), (-1, 0)])
    def test_out_of_range_rejected(self, row, col):
        m = SparseMatrix.allocate(3, rows=2, cols=2)
        with pytest.raises(InvalidArgumentError):
            m.append(row, col, 1.0)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_value_rejected(self, value):
        m = SparseMatrix.allocate(1, rows=1, cols=1)
        with pytest.raises(InvalidArgumentError, match="finite"):
            m.append(0, 0, value)
        assert m.is_empty

    def test_non_numeric_value_rejected_before_write(self):
        m = SparseMatrix.allocate(2, rows=2, cols=2)
        with pytest.raises(InvalidArgumentError, match="real number"):
            m.append(1, 1, "abc")
        assert m.is_empty
        m.append(1, 1, 3.0)
        assert list(m) == [Entry(1, 1, 3.0)]

    def test_near_zero_values_are_stored(self):
        """append() stores as given; prune() is what drops near-zero values."""
        m = SparseMatrix.allocate(1, rows=1, cols=1)
        m.append(0, 0, 1e-9)
        assert m.count == 1


class TestDelete:

    def test_last_entry_moves_into_hole(self):
        m = SparseMatrix.allocate(3, rows=3, cols=3)
        m.append(0, 0, 1.0)
        m.append(1, 1, 2.0)
        m.append(2, 2, 3.0)
        removed = m.delete(0)
        assert removed == Entry(0, 0, 1.0)
        assert list(m) == [Entry(2, 2, 3.0), Entry(1, 1, 2.0)]

    def test_delete_only_entry(self):
        m = SparseMatrix.allocate(1, rows=1, cols=1)
        m.append(0, 0, 1.0)
        m.delete(0)
        assert m.is_empty

    def test_position_out_of_range(self):
        m = SparseMatrix.allocate(2, rows=1, cols=2)
        m.append(0, 0, 1.0)
        with pytest.raises(InvalidArgumentError, match="out of range"):
            m.delete(1)


class TestArrays:

    def test_views_are_read_only(self):
        m = SparseMatrix.allocate(2, rows=2, cols=2)
        m.append(1, 0, 4.0)
        row_idx, col_idx, values = m.arrays()
        assert row_idx.tolist() == [1]
        assert col_idx.tolist() == [0]
        assert values.tolist() == [4.0]
        with pytest.raises(ValueError):
            values[0] = 0.0

    def test_views_cover_only_populated_entries(self):
        m = SparseMatrix.allocate(10, rows=2, cols=2)
        m.append(0, 0, 1.0)
        assert all(arr.shape == (1,) for arr in m.arrays())


class TestSharesStorage:

    def test_self(self):
        m = SparseMatrix.allocate(2)
        assert m.shares_storage(m)

    def test_distinct_matrices(self):
        assert not SparseMatrix.allocate(2).shares_storage(SparseMatrix.allocate(2))

    def test_unrelated_objects(self):
        m = SparseMatrix.allocate(2)
        assert not m.shares_storage([1.0, 2.0])
        assert not m.shares_storage(np.zeros(2))


class TestScipyInterop:

    def test_from_coo_sums_duplicates_and_prunes(self):
        coo = sparse.coo_array(
            (np.array([1.0, 2.0, 4e-4]), (np.array([0, 0, 1]), np.array([0, 0, 1]))),
            shape=(2, 2),
        )
        m = SparseMatrix.from_coo(coo)
        assert m.shape == (2, 2)
        assert m.capacity == 1
        assert list(m) == [Entry(0, 0, 3.0)]

    def test_from_coo_keeps_negative_values(self):
        coo = sparse.coo_array(np.array([[0.0, -2.0], [1.5, 0.0]]))
        m = SparseMatrix.from_coo(coo, capacity=4)
        assert m.capacity == 4
        np.testing.assert_array_equal(
            to_dense(m, 2, 2), np.array([[0.0, -2.0], [1.5, 0.0]])
        )

    def test_from_coo_capacity_too_small(self):
        coo = sparse.coo_array(np.eye(3))
        with pytest.raises(CapacityExceededError):
            SparseMatrix.from_coo(coo, capacity=2)

    def test_from_coo_rejects_1d(self):
        with pytest.raises(DimensionError, match="2D"):
            SparseMatrix.from_coo(sparse.coo_array(np.array([1.0, 0.0, 2.0])))

    def test_from_coo_rejects_dense(self):
        with pytest.raises(InvalidArgumentError, match="scipy.sparse"):
            SparseMatrix.from_coo(np.eye(2))

    def test_to_coo_matches_dense(self, make_sparse, random_dense):
        dense = random_dense(5, 4)
        m = make_sparse(dense)
        coo = m.to_coo()
        assert coo.shape == (5, 4)
        assert coo.nnz == m.nnz
        np.testing.assert_array_equal(coo.toarray(), dense)

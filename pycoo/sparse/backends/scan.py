"""
Reference accumulation backend: linear scans, no index structures.

For every candidate term the output accumulator is searched linearly for
an existing entry at the same coordinate, so a product costs
O(nnz(a) * nnz(b) * nnz(out)). Slow, but it is the baseline the hashed
backend must reproduce exactly (same entries, same order, same sums).
"""

from __future__ import annotations

from numpy.typing import NDArray

from pycoo.core.result import Result
from pycoo.core.compute.timing import Timer
from pycoo.sparse.design import SparseMatrix
from pycoo.sparse.solution import KernelParams
from pycoo.sparse.backends._common import build_result, dense_row_terms, entry_lists


def _accumulate(
    out_rows: list[int],
    out_cols: list[int],
    out_vals: list[float],
    i: int,
    j: int,
    value: float,
) -> None:
    for p in range(len(out_rows)):
        if out_rows[p] == i and out_cols[p] == j:
            out_vals[p] += value
            return
    out_rows.append(i)
    out_cols.append(j)
    out_vals.append(value)


class ScanBackend:
    """Linear-scan accumulation, matching the coordinate-format baseline."""

    @property
    def name(self) -> str:
        return 'cpu_scan'

    def multiply(self, a: SparseMatrix, b: SparseMatrix) -> Result[KernelParams]:
        timer = Timer()
        timer.start()

        a_rows, a_cols, a_vals = entry_lists(a)
        b_rows, b_cols, b_vals = entry_lists(b)
        out_rows: list[int] = []
        out_cols: list[int] = []
        out_vals: list[float] = []
        n_terms = 0

        with timer.section('accumulate'):
            for i, k, v1 in zip(a_rows, a_cols, a_vals):
                for h in range(len(b_rows)):
                    if b_rows[h] != k:
                        continue
                    _accumulate(out_rows, out_cols, out_vals, i, b_cols[h], v1 * b_vals[h])
                    n_terms += 1

        return build_result(
            'multiply', out_rows, out_cols, out_vals,
            (a.rows, b.cols), n_terms, timer, self.name,
        )

    def multiply_dense(self, a: SparseMatrix, dense: NDArray) -> Result[KernelParams]:
        timer = Timer()
        timer.start()

        a_rows, a_cols, a_vals = entry_lists(a)
        with timer.section('dense_rows'):
            row_terms = dense_row_terms(dense)
        out_rows: list[int] = []
        out_cols: list[int] = []
        out_vals: list[float] = []
        n_terms = 0

        with timer.section('accumulate'):
            for i, k, v1 in zip(a_rows, a_cols, a_vals):
                for j, v2 in row_terms[k]:
                    _accumulate(out_rows, out_cols, out_vals, i, j, v1 * v2)
                    n_terms += 1

        return build_result(
            'multiply_dense', out_rows, out_cols, out_vals,
            (a.rows, dense.shape[1]), n_terms, timer, self.name,
        )

    def add(self, a: SparseMatrix, b: SparseMatrix) -> Result[KernelParams]:
        timer = Timer()
        timer.start()

        out_rows, out_cols, out_vals = entry_lists(a)
        b_rows, b_cols, b_vals = entry_lists(b)

        with timer.section('merge'):
            for i, j, v in zip(b_rows, b_cols, b_vals):
                _accumulate(out_rows, out_cols, out_vals, i, j, v)

        return build_result(
            'add', out_rows, out_cols, out_vals,
            a.shape, a.count + b.count, timer, self.name,
        )

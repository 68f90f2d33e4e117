"""
Dict-indexed accumulation backend.

Output coordinates are located through a dict keyed by (row, col) and the
right operand of a product is grouped by row once up front. Terms are
visited in the same order as the scan backend, so the stored entries and
their floating-point sums are identical.
"""

from __future__ import annotations

from collections import defaultdict

from numpy.typing import NDArray

from pycoo.core.result import Result
from pycoo.core.compute.timing import Timer
from pycoo.sparse.design import SparseMatrix
from pycoo.sparse.solution import KernelParams
from pycoo.sparse.backends._common import build_result, dense_row_terms, entry_lists


class _Accumulator:
    """Insertion-ordered (row, col) -> value accumulator."""

    def __init__(self):
        self.rows: list[int] = []
        self.cols: list[int] = []
        self.vals: list[float] = []
        self._index: dict[tuple[int, int], int] = {}

    def add(self, i: int, j: int, value: float) -> None:
        pos = self._index.get((i, j))
        if pos is None:
            self._index[(i, j)] = len(self.vals)
            self.rows.append(i)
            self.cols.append(j)
            self.vals.append(value)
        else:
            self.vals[pos] += value


class HashBackend:
    """Hash-indexed accumulation; default backend."""

    @property
    def name(self) -> str:
        return 'cpu_hash'

    def multiply(self, a: SparseMatrix, b: SparseMatrix) -> Result[KernelParams]:
        timer = Timer()
        timer.start()

        a_rows, a_cols, a_vals = entry_lists(a)
        b_rows, b_cols, b_vals = entry_lists(b)

        with timer.section('index'):
            by_row: dict[int, list[tuple[int, float]]] = defaultdict(list)
            for k, j, v in zip(b_rows, b_cols, b_vals):
                by_row[k].append((j, v))

        acc = _Accumulator()
        n_terms = 0
        with timer.section('accumulate'):
            for i, k, v1 in zip(a_rows, a_cols, a_vals):
                for j, v2 in by_row.get(k, ()):
                    acc.add(i, j, v1 * v2)
                    n_terms += 1

        return build_result(
            'multiply', acc.rows, acc.cols, acc.vals,
            (a.rows, b.cols), n_terms, timer, self.name,
        )

    def multiply_dense(self, a: SparseMatrix, dense: NDArray) -> Result[KernelParams]:
        timer = Timer()
        timer.start()

        a_rows, a_cols, a_vals = entry_lists(a)
        with timer.section('dense_rows'):
            row_terms = dense_row_terms(dense)

        acc = _Accumulator()
        n_terms = 0
        with timer.section('accumulate'):
            for i, k, v1 in zip(a_rows, a_cols, a_vals):
                for j, v2 in row_terms[k]:
                    acc.add(i, j, v1 * v2)
                    n_terms += 1

        return build_result(
            'multiply_dense', acc.rows, acc.cols, acc.vals,
            (a.rows, dense.shape[1]), n_terms, timer, self.name,
        )

    def add(self, a: SparseMatrix, b: SparseMatrix) -> Result[KernelParams]:
        timer = Timer()
        timer.start()

        acc = _Accumulator()
        with timer.section('merge'):
            for source in (a, b):
                for i, j, v in zip(*entry_lists(source)):
                    acc.add(i, j, v)

        return build_result(
            'add', acc.rows, acc.cols, acc.vals,
            a.shape, a.count + b.count, timer, self.name,
        )

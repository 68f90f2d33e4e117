"""
Shared helpers for accumulation backends.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pycoo.core.result import Result
from pycoo.core.compute.timing import Timer
from pycoo.sparse.solution import KernelParams

if TYPE_CHECKING:
    from pycoo.sparse.design import SparseMatrix


def entry_lists(matrix: SparseMatrix) -> tuple[list[int], list[int], list[float]]:
    """Populated entries as plain Python lists (fast scalar iteration)."""
    row_idx, col_idx, values = matrix.arrays()
    return row_idx.tolist(), col_idx.tolist(), values.tolist()


def dense_row_terms(dense: NDArray[np.float64]) -> list[list[tuple[int, float]]]:
    """
    Non-zero (col, value) pairs of each dense row, in column order.

    Exact zeros contribute nothing to a product and are skipped.
    """
    terms = []
    for k in range(dense.shape[0]):
        row = dense[k]
        cols = np.flatnonzero(row)
        terms.append(list(zip(cols.tolist(), row[cols].tolist())))
    return terms


def build_result(
    operation: str,
    out_rows: list[int],
    out_cols: list[int],
    out_vals: list[float],
    shape: tuple[int, int],
    n_terms: int,
    timer: Timer,
    backend_name: str,
) -> Result[KernelParams]:
    timer.stop()
    params = KernelParams(
        row_idx=np.asarray(out_rows, dtype=np.int64),
        col_idx=np.asarray(out_cols, dtype=np.int64),
        values=np.asarray(out_vals, dtype=np.float64),
        shape=shape,
        n_terms=n_terms,
    )
    return Result(
        params=params,
        info={'operation': operation, 'shape': shape},
        timing=timer.result(),
        backend_name=backend_name,
    )

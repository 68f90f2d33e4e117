"""
Public operations on SparseMatrix.

Matrix-producing operations (from_dense, multiply, multiply_dense, add,
copy) write their result into a caller-allocated ``out`` matrix and return
a SparseSolution. Results are computed in scratch storage and capacity is
checked before ``out`` is touched, so a failed call leaves ``out``
unchanged. transpose() and prune() work in place on their argument.
"""

from __future__ import annotations

import dataclasses
import warnings
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycoo.core.result import Result
from pycoo.core.compute.timing import Timer
from pycoo.core.compute.tolerances import EPSILON
from pycoo.core.exceptions import DimensionError, InvalidArgumentError
from pycoo.core.validation import (
    check_array,
    check_dense_size,
    check_epsilon,
    check_finite,
    check_positive_int,
)
from pycoo.sparse.design import SparseMatrix
from pycoo.sparse.solution import KernelParams, SparseSolution
from pycoo.sparse.backends.scan import ScanBackend
from pycoo.sparse.backends.hashed import HashBackend
from pycoo.sparse._dump import render


BackendChoice = Literal['auto', 'scan', 'hash']
ThresholdRule = Literal['signed', 'magnitude']


def _check_matrix(matrix: Any, name: str) -> SparseMatrix:
    if matrix is None:
        raise InvalidArgumentError(f"{name}: expected a SparseMatrix, got None")
    if not isinstance(matrix, SparseMatrix):
        raise InvalidArgumentError(
            f"{name}: expected a SparseMatrix, got {type(matrix).__name__}"
        )
    return matrix


def _check_not_aliased(out: SparseMatrix, **inputs: Any) -> None:
    for name, value in inputs.items():
        if out.shares_storage(value):
            raise InvalidArgumentError(
                f"out and {name} share storage; use a separate destination"
            )


def _get_backend(backend: BackendChoice):
    """Select accumulation backend by name."""
    if backend in ('auto', 'hash'):
        return HashBackend()
    if backend == 'scan':
        return ScanBackend()
    raise InvalidArgumentError(f"Unknown backend: {backend!r}")


def _commit(
    out: SparseMatrix,
    result: Result[KernelParams],
    epsilon: float | None,
    *,
    extra_warnings: tuple[str, ...] = (),
) -> SparseSolution:
    """
    Write accumulated entries into ``out``, then prune if ``epsilon`` is set.

    Capacity is checked against the distinct coordinates before pruning.
    """
    timer = Timer()
    timer.start()
    params = result.params

    with timer.section('commit'):
        out._load(params.shape, params.row_idx, params.col_idx, params.values, 'out')

    n_pruned = 0
    if epsilon is not None:
        with timer.section('prune'):
            n_pruned = out._prune_in_place(epsilon)

    timer.stop()
    timing = dict(result.timing or {})
    commit_timing = timer.result()
    timing['total_seconds'] = timing.get('total_seconds', 0.0) + commit_timing.pop('total_seconds')
    timing.update(commit_timing)

    info = dict(result.info)
    info['n_pruned'] = n_pruned
    info['capacity'] = out.capacity

    final = dataclasses.replace(
        result,
        info=info,
        timing=timing,
        warnings=result.warnings + extra_warnings,
    )
    return SparseSolution(_result=final, _matrix=out)


def from_dense(
    out: SparseMatrix,
    dense: ArrayLike,
    rows: int,
    cols: int,
    *,
    threshold: ThresholdRule = 'signed',
    epsilon: float = EPSILON,
) -> SparseSolution:
    """
    Build a sparse matrix from a row-major dense buffer.

    Parameters
    ----------
    out : SparseMatrix
        Destination. Its header is set to (rows, cols).
    dense : array-like
        ``rows * cols`` reals, either flat row-major or shaped (rows, cols).
    rows, cols : int
        Dense dimensions, both positive.
    threshold : str
        'signed' keeps ``value >= epsilon``, so negative values are dropped
        (historical behaviour, reported through a warning whenever it drops
        a value of magnitude >= epsilon). 'magnitude' keeps
        ``abs(value) >= epsilon``.
    epsilon : float
        Near-zero threshold.

    Returns
    -------
    SparseSolution whose matrix is ``out``, entries in row-major order.

    Raises
    ------
    InvalidArgumentError
        Missing arguments, non-positive dimensions, non-finite values.
    DimensionError
        ``dense`` does not hold rows * cols elements.
    CapacityExceededError
        More retained entries than ``out.capacity``.
    """
    out = _check_matrix(out, 'out')
    rows = check_positive_int(rows, 'rows')
    cols = check_positive_int(cols, 'cols')
    epsilon = check_epsilon(epsilon)
    if threshold not in ('signed', 'magnitude'):
        raise InvalidArgumentError(
            f"Unknown threshold rule: {threshold!r}. Must be 'signed' or 'magnitude'."
        )
    data = check_array(dense, 'dense')
    check_dense_size(data, rows, cols, 'dense')
    check_finite(data, 'dense')
    _check_not_aliased(out, dense=dense)

    timer = Timer()
    timer.start()
    warnings_list: list[str] = []

    with timer.section('scan'):
        flat = data.ravel()
        if threshold == 'signed':
            keep = flat >= epsilon
            n_dropped_negative = int(np.count_nonzero(flat <= -epsilon))
            if n_dropped_negative:
                msg = (
                    f"from_dense dropped {n_dropped_negative} negative value(s) "
                    f"with magnitude >= {epsilon}; pass threshold='magnitude' to keep them"
                )
                warnings_list.append(msg)
                warnings.warn(msg, UserWarning, stacklevel=2)
        else:
            keep = np.abs(flat) >= epsilon
        positions = np.flatnonzero(keep)

    timer.stop()
    params = KernelParams(
        row_idx=positions // cols,
        col_idx=positions % cols,
        values=flat[positions],
        shape=(rows, cols),
        n_terms=rows * cols,
    )
    result = Result(
        params=params,
        info={'operation': 'from_dense', 'shape': (rows, cols), 'threshold': threshold},
        timing=timer.result(),
        backend_name='cpu_direct',
    )
    # retained values already clear the threshold, no prune pass needed
    return _commit(out, result, None, extra_warnings=tuple(warnings_list))


def multiply(
    out: SparseMatrix,
    a: SparseMatrix,
    b: SparseMatrix,
    *,
    backend: BackendChoice = 'auto',
    epsilon: float = EPSILON,
) -> SparseSolution:
    """
    Compute ``out = a @ b``.

    Every entry (i, k, v1) of ``a`` pairs with every entry (k, j, v2) of
    ``b``; products landing on the same (i, j) are summed. Sums below
    ``epsilon`` in magnitude are removed afterwards.

    Raises
    ------
    InvalidArgumentError
        Missing matrices, or ``out`` aliasing an operand.
    DimensionError
        ``a.cols != b.rows``.
    CapacityExceededError
        More distinct output coordinates than ``out.capacity``.
    """
    out = _check_matrix(out, 'out')
    a = _check_matrix(a, 'a')
    b = _check_matrix(b, 'b')
    epsilon = check_epsilon(epsilon)
    _check_not_aliased(out, a=a, b=b)
    if a.cols != b.rows:
        raise DimensionError(
            f"Cannot multiply {a.rows}x{a.cols} by {b.rows}x{b.cols}: "
            f"a.cols ({a.cols}) != b.rows ({b.rows})"
        )

    be = _get_backend(backend)
    result = be.multiply(a, b)
    return _commit(out, result, epsilon)


def multiply_dense(
    out: SparseMatrix,
    a: SparseMatrix,
    dense: ArrayLike,
    rows: int,
    cols: int,
    *,
    backend: BackendChoice = 'auto',
    epsilon: float = EPSILON,
) -> SparseSolution:
    """
    Compute ``out = a @ D`` for a dense ``rows x cols`` matrix D.

    ``dense`` is flat row-major or shaped (rows, cols). Exact zeros in D
    contribute no terms. Accumulation, pruning and capacity rules are
    those of multiply().

    Raises
    ------
    DimensionError
        ``a.cols != rows`` or ``dense`` not holding rows * cols elements.
    """
    out = _check_matrix(out, 'out')
    a = _check_matrix(a, 'a')
    rows = check_positive_int(rows, 'rows')
    cols = check_positive_int(cols, 'cols')
    epsilon = check_epsilon(epsilon)
    data = check_array(dense, 'dense')
    check_dense_size(data, rows, cols, 'dense')
    check_finite(data, 'dense')
    _check_not_aliased(out, a=a, dense=dense)
    if a.cols != rows:
        raise DimensionError(
            f"Cannot multiply {a.rows}x{a.cols} by dense {rows}x{cols}: "
            f"a.cols ({a.cols}) != rows ({rows})"
        )

    be = _get_backend(backend)
    result = be.multiply_dense(a, data.reshape(rows, cols))
    return _commit(out, result, epsilon)


def add(
    out: SparseMatrix,
    a: SparseMatrix,
    b: SparseMatrix,
    *,
    backend: BackendChoice = 'auto',
    epsilon: float = EPSILON,
) -> SparseSolution:
    """
    Compute ``out = a + b``.

    Starts from the entries of ``a`` and merges each entry of ``b`` into
    the matching coordinate, appending when there is none. Sums below
    ``epsilon`` in magnitude (e.g. 5 + -5) are removed afterwards.

    Raises
    ------
    DimensionError
        Shapes differ in rows or in columns.
    CapacityExceededError
        More distinct coordinates than ``out.capacity``.
    """
    out = _check_matrix(out, 'out')
    a = _check_matrix(a, 'a')
    b = _check_matrix(b, 'b')
    epsilon = check_epsilon(epsilon)
    _check_not_aliased(out, a=a, b=b)
    if a.rows != b.rows or a.cols != b.cols:
        raise DimensionError(
            f"Cannot add {a.rows}x{a.cols} and {b.rows}x{b.cols}: shapes differ"
        )

    be = _get_backend(backend)
    result = be.add(a, b)
    return _commit(out, result, epsilon)


def copy(out: SparseMatrix, src: SparseMatrix) -> SparseSolution:
    """
    Deep-copy header and entries of ``src`` into ``out``.

    Raises
    ------
    CapacityExceededError
        ``out.capacity < src.count``.
    """
    out = _check_matrix(out, 'out')
    src = _check_matrix(src, 'src')
    _check_not_aliased(out, src=src)

    timer = Timer()
    timer.start()
    row_idx, col_idx, values = src.arrays()
    timer.stop()
    params = KernelParams(
        row_idx=row_idx.copy(),
        col_idx=col_idx.copy(),
        values=values.copy(),
        shape=src.shape,
        n_terms=src.count,
    )
    result = Result(
        params=params,
        info={'operation': 'copy', 'shape': src.shape},
        timing=timer.result(),
        backend_name='cpu_direct',
    )
    return _commit(out, result, None)


def transpose(matrix: SparseMatrix) -> SparseMatrix:
    """
    Transpose ``matrix`` in place and return it.

    Header dimensions and every entry's coordinates are swapped; entries
    keep their storage positions.
    """
    matrix = _check_matrix(matrix, 'matrix')
    matrix._transpose_in_place()
    return matrix


def prune(matrix: SparseMatrix, *, epsilon: float = EPSILON) -> int:
    """
    Remove entries with ``abs(value) < epsilon`` in place.

    Each removed entry is overwritten by the current last entry, so the
    order of the remaining entries is not preserved. Idempotent.

    Returns
    -------
    Number of removed entries.
    """
    matrix = _check_matrix(matrix, 'matrix')
    epsilon = check_epsilon(epsilon)
    return matrix._prune_in_place(epsilon)


def to_dense(
    src: SparseMatrix,
    rows: int,
    cols: int,
    out: NDArray[np.float64] | None = None,
) -> NDArray[np.float64]:
    """
    Materialize ``src`` as a dense ``rows x cols`` array.

    Parameters
    ----------
    src : SparseMatrix
    rows, cols : int
        Must equal ``src.rows`` and ``src.cols``.
    out : ndarray, optional
        Writable C-contiguous float array with rows * cols elements, flat or
        (rows, cols). Zero-filled and populated in place, then returned.

    Returns
    -------
    ndarray of shape (rows, cols), or ``out`` when given.
    """
    src = _check_matrix(src, 'src')
    rows = check_positive_int(rows, 'rows')
    cols = check_positive_int(cols, 'cols')
    if rows != src.rows or cols != src.cols:
        raise DimensionError(
            f"Requested {rows}x{cols} dense matrix from {src.rows}x{src.cols} sparse matrix"
        )

    if out is None:
        target = np.zeros((rows, cols), dtype=np.float64)
        result = target
    else:
        if not isinstance(out, np.ndarray):
            raise InvalidArgumentError(
                f"out: expected a numpy array, got {type(out).__name__}"
            )
        if not np.issubdtype(out.dtype, np.floating):
            raise InvalidArgumentError(f"out: expected a float array, got dtype {out.dtype}")
        if not out.flags.writeable or not out.flags.c_contiguous:
            raise InvalidArgumentError("out: must be writable and C-contiguous")
        check_dense_size(out, rows, cols, 'out')
        target = out.reshape(rows, cols)
        target[...] = 0.0
        result = out

    row_idx, col_idx, values = src.arrays()
    target[row_idx, col_idx] = values
    return result


def dump(matrix: SparseMatrix) -> str:
    """
    Render ``matrix`` as text.

    First line ``Sparse matrix {rows}x{cols}:``, then ``({row},{col}) = {value}``
    per stored entry with six fractional digits.
    """
    matrix = _check_matrix(matrix, 'matrix')
    return render(matrix)

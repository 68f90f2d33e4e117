"""
Sparse coordinate-list kernels.

Public API:
    from_dense(out, dense, rows, cols)      - Sparse matrix from a dense buffer
    multiply(out, a, b)                     - Sparse product a @ b
    multiply_dense(out, a, dense, r, c)     - Product of a sparse and a dense matrix
    add(out, a, b)                          - Sparse sum a + b
    copy(out, src)                          - Deep copy
    transpose(matrix)                       - In-place transpose
    prune(matrix)                           - Drop near-zero entries in place
    to_dense(src, rows, cols)               - Dense materialization
    dump(matrix)                            - Text rendering
"""

from pycoo.sparse.design import Entry, SparseMatrix
from pycoo.sparse.solution import KernelParams, SparseSolution
from pycoo.sparse.solvers import (
    from_dense,
    multiply,
    multiply_dense,
    add,
    copy,
    transpose,
    prune,
    to_dense,
    dump,
)

__all__ = [
    "from_dense",
    "multiply",
    "multiply_dense",
    "add",
    "copy",
    "transpose",
    "prune",
    "to_dense",
    "dump",
    "Entry",
    "SparseMatrix",
    "KernelParams",
    "SparseSolution",
]

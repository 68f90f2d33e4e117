"""
pycoo: fixed-capacity coordinate-list sparse matrix kernels.

Sparse matrices are stored as (row, col, value) triples in storage whose
capacity is chosen by the caller. Operations never grow storage: a result
that does not fit raises CapacityExceededError and leaves the destination
untouched.

Submodules:
    sparse: SparseMatrix and the operations on it
    core: exceptions, result envelope, validation, timing
"""

__version__ = "0.1.0"

from pycoo.core.compute.tolerances import EPSILON
from pycoo.core.exceptions import (
    PyCOOError,
    InvalidArgumentError,
    DimensionError,
    CapacityExceededError,
)
from pycoo.sparse import (
    Entry,
    SparseMatrix,
    SparseSolution,
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
    "__version__",
    "EPSILON",
    "PyCOOError",
    "InvalidArgumentError",
    "DimensionError",
    "CapacityExceededError",
    "Entry",
    "SparseMatrix",
    "SparseSolution",
    "from_dense",
    "multiply",
    "multiply_dense",
    "add",
    "copy",
    "transpose",
    "prune",
    "to_dense",
    "dump",
]

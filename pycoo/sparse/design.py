"""
SparseMatrix: fixed-capacity coordinate (COO) storage.

A matrix is an explicit header (rows, cols, count) plus three preallocated
entry arrays of length ``capacity``. Capacity is chosen by the owner at
allocation time and never changes; operations that would need more room
raise CapacityExceededError instead of growing the storage.
"""

from __future__ import annotations

from typing import Any, Iterator, NamedTuple
import numpy as np
from numpy.typing import NDArray

from pycoo.core.compute.tolerances import EPSILON
from pycoo.core.exceptions import (
    CapacityExceededError,
    DimensionError,
    InvalidArgumentError,
)
from pycoo.core.validation import (
    check_epsilon,
    check_non_negative_int,
    check_positive_int,
    check_real_finite,
)


class Entry(NamedTuple):
    """One stored coordinate triple."""
    row: int
    col: int
    value: float


class SparseMatrix:
    """
    Coordinate-list sparse matrix with caller-managed capacity.

    Entries are kept as an append/compact list: order carries no meaning and
    is not preserved by pruning. Public operations never leave duplicate
    coordinates behind.

    Construction:
        SparseMatrix.allocate(capacity, rows=..., cols=...)
        SparseMatrix.from_coo(scipy_coo, capacity=...)
    """

    __slots__ = ('_rows', '_cols', '_count', '_row_idx', '_col_idx', '_values')

    def __init__(self, capacity: int, rows: int = 1, cols: int = 1):
        capacity = check_non_negative_int(capacity, 'capacity')
        self._rows = check_positive_int(rows, 'rows')
        self._cols = check_positive_int(cols, 'cols')
        self._count = 0
        self._row_idx: NDArray[np.int64] = np.zeros(capacity, dtype=np.int64)
        self._col_idx: NDArray[np.int64] = np.zeros(capacity, dtype=np.int64)
        self._values: NDArray[np.float64] = np.zeros(capacity, dtype=np.float64)

    @classmethod
    def allocate(cls, capacity: int, rows: int = 1, cols: int = 1) -> SparseMatrix:
        """
        Allocate an empty matrix able to hold ``capacity`` entries.

        Parameters
        ----------
        capacity : int
            Maximum number of stored entries, fixed for the matrix lifetime.
        rows, cols : int
            Initial header dimensions. Operations that populate the matrix
            overwrite them.
        """
        return cls(capacity, rows=rows, cols=cols)

    @classmethod
    def from_coo(
        cls,
        coo,
        *,
        capacity: int | None = None,
        epsilon: float = EPSILON,
    ) -> SparseMatrix:
        """
        Build a SparseMatrix from a scipy.sparse matrix or array.

        Duplicate coordinates are summed and near-zero results dropped.
        Capacity defaults to the number of entries that survive.
        """
        from scipy import sparse

        if not sparse.issparse(coo):
            raise InvalidArgumentError(
                f"coo: expected a scipy.sparse matrix, got {type(coo).__name__}"
            )
        epsilon = check_epsilon(epsilon)

        coo = sparse.coo_array(coo, copy=True)
        if len(coo.shape) != 2:
            raise DimensionError(
                f"coo: expected a 2D sparse matrix, got shape {coo.shape}"
            )
        coo.sum_duplicates()
        keep = np.abs(coo.data) >= epsilon
        rows, cols = coo.shape
        nnz = int(np.count_nonzero(keep))

        if capacity is None:
            capacity = nnz
        matrix = cls(capacity, rows=rows, cols=cols)
        matrix._load(
            (rows, cols),
            coo.row[keep],
            coo.col[keep],
            coo.data[keep],
        )
        return matrix

    # --- Header ---

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def count(self) -> int:
        """Number of stored entries."""
        return self._count

    @property
    def nnz(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        """Maximum number of entries the storage can hold."""
        return self._values.shape[0]

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    # --- Entry access ---

    def arrays(self) -> tuple[NDArray[np.int64], NDArray[np.int64], NDArray[np.float64]]:
        """
        Read-only views of the populated (row, col, value) arrays.

        The views alias the matrix storage and reflect later mutations.
        """
        views = (
            self._row_idx[:self._count],
            self._col_idx[:self._count],
            self._values[:self._count],
        )
        for view in views:
            view.flags.writeable = False
        return views

    def entries(self) -> Iterator[Entry]:
        """Iterate stored entries in storage order."""
        for k in range(self._count):
            yield Entry(
                int(self._row_idx[k]),
                int(self._col_idx[k]),
                float(self._values[k]),
            )

    def __iter__(self) -> Iterator[Entry]:
        return self.entries()

    def __len__(self) -> int:
        return self._count

    def append(self, row: int, col: int, value: float) -> None:
        """
        Append one entry, respecting capacity and the no-duplicate rule.

        Near-zero values are stored as given; call prune() to drop them.

        Raises
        ------
        InvalidArgumentError
            Coordinates outside the matrix or already stored, or a value
            that is not a finite real number.
        CapacityExceededError
            Storage is full.
        """
        row = check_non_negative_int(row, 'row')
        col = check_non_negative_int(col, 'col')
        value = check_real_finite(value, 'value')
        if row >= self._rows or col >= self._cols:
            raise InvalidArgumentError(
                f"entry ({row},{col}) outside {self._rows}x{self._cols} matrix"
            )
        n = self._count
        if np.any((self._row_idx[:n] == row) & (self._col_idx[:n] == col)):
            raise InvalidArgumentError(f"entry ({row},{col}) already stored")
        if n >= self.capacity:
            raise CapacityExceededError(
                f"append needs {n + 1} entries, capacity is {self.capacity}",
                required=n + 1,
                capacity=self.capacity,
            )
        self._row_idx[n] = row
        self._col_idx[n] = col
        self._values[n] = value
        self._count = n + 1

    def delete(self, position: int) -> Entry:
        """
        Remove the entry at ``position`` by moving the last entry into it.

        Returns the removed entry. Ordering of the remaining entries is not
        preserved.
        """
        position = check_non_negative_int(position, 'position')
        if position >= self._count:
            raise InvalidArgumentError(
                f"position: {position} out of range for {self._count} entries"
            )
        removed = Entry(
            int(self._row_idx[position]),
            int(self._col_idx[position]),
            float(self._values[position]),
        )
        self._swap_remove(position)
        return removed

    # --- In-place mechanics used by the operations ---

    def _swap_remove(self, position: int) -> None:
        last = self._count - 1
        self._row_idx[position] = self._row_idx[last]
        self._col_idx[position] = self._col_idx[last]
        self._values[position] = self._values[last]
        self._count = last

    def _prune_in_place(self, epsilon: float) -> int:
        removed = 0
        p = 0
        while p < self._count:
            if abs(self._values[p]) < epsilon:
                # re-examine p: the entry moved in may be near-zero too
                self._swap_remove(p)
                removed += 1
            else:
                p += 1
        return removed

    def _transpose_in_place(self) -> None:
        # Every slot is swapped, unused ones included
        self._rows, self._cols = self._cols, self._rows
        self._row_idx[:], self._col_idx[:] = self._col_idx.copy(), self._row_idx.copy()

    def _load(
        self,
        shape: tuple[int, int],
        row_idx: NDArray[Any],
        col_idx: NDArray[Any],
        values: NDArray[Any],
        matrix_name: str | None = None,
    ) -> None:
        """Replace header and entries. Capacity is checked before any write."""
        n = len(values)
        if n > self.capacity:
            raise CapacityExceededError(
                f"{matrix_name or 'out'}: result needs {n} entries, "
                f"capacity is {self.capacity}",
                required=n,
                capacity=self.capacity,
                matrix_name=matrix_name,
            )
        self._rows, self._cols = int(shape[0]), int(shape[1])
        self._row_idx[:n] = row_idx
        self._col_idx[:n] = col_idx
        self._values[:n] = values
        self._count = n

    # --- Interop and display ---

    def to_coo(self):
        """Return the stored triples as a scipy.sparse.coo_array."""
        from scipy import sparse

        row_idx, col_idx, values = self.arrays()
        return sparse.coo_array(
            (values.copy(), (row_idx.copy(), col_idx.copy())),
            shape=self.shape,
        )

    def shares_storage(self, other: Any) -> bool:
        """Whether this matrix and ``other`` (matrix or array) share memory."""
        if isinstance(other, SparseMatrix):
            if other is self:
                return True
            buffers = (other._row_idx, other._col_idx, other._values)
        elif isinstance(other, np.ndarray):
            buffers = (other,)
        else:
            return False
        mine = (self._row_idx, self._col_idx, self._values)
        return any(np.shares_memory(m, o) for m in mine for o in buffers)

    def __str__(self) -> str:
        from pycoo.sparse._dump import render

        return render(self)

    def __repr__(self) -> str:
        return (
            f"SparseMatrix(rows={self._rows}, cols={self._cols}, "
            f"nnz={self._count}, capacity={self.capacity})"
        )

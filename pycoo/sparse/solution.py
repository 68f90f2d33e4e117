"""
Sparse kernel solution types.

Contains the parameter payload produced by accumulation backends and the
user-facing solution wrapper returned by every matrix-producing operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pycoo.core.result import Result

if TYPE_CHECKING:
    from pycoo.sparse.design import SparseMatrix


@dataclass(frozen=True)
class KernelParams:
    """
    Parameter payload for a sparse operation.

    Holds the distinct output coordinates in first-seen order together with
    their accumulated values, before pruning. ``n_terms`` counts the
    elementary contributions (products or copied/merged entries) that were
    folded into them.
    """
    row_idx: NDArray[np.int64]
    col_idx: NDArray[np.int64]
    values: NDArray[np.float64]
    shape: tuple[int, int]
    n_terms: int

    @property
    def n_candidates(self) -> int:
        """Number of distinct coordinates before pruning."""
        return int(self.values.shape[0])


@dataclass
class SparseSolution:
    """
    User-facing result of a sparse operation.

    Wraps Result[KernelParams] together with the destination matrix the
    result was committed to.
    """
    _result: Result[KernelParams]
    _matrix: 'SparseMatrix'

    @property
    def matrix(self) -> 'SparseMatrix':
        """Destination matrix (the ``out`` argument of the operation)."""
        return self._matrix

    @property
    def shape(self) -> tuple[int, int]:
        return self._result.params.shape

    @property
    def nnz(self) -> int:
        """Entries stored in the destination after pruning."""
        return self._matrix.count

    @property
    def n_candidates(self) -> int:
        """Distinct coordinates produced before pruning."""
        return self._result.params.n_candidates

    @property
    def n_terms(self) -> int:
        return self._result.params.n_terms

    @property
    def n_pruned(self) -> int:
        """Entries removed as near-zero after accumulation."""
        return self._result.info.get('n_pruned', 0)

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Short multi-line description of the operation."""
        rows, cols = self.shape
        lines = [
            f"Operation: {self.info.get('operation', 'unknown')}",
            f"Backend:   {self.backend_name}",
            f"Shape:     {rows}x{cols}",
            f"Terms:     {self.n_terms}",
            f"Distinct:  {self.n_candidates}",
            f"Pruned:    {self.n_pruned}",
            f"Stored:    {self.nnz} / {self._matrix.capacity}",
        ]
        if self.timing is not None:
            lines.append(f"Time:      {self.timing['total_seconds']:.6f}s")
        for w in self.warnings:
            lines.append(f"Warning:   {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SparseSolution(operation={self.info.get('operation')!r}, "
            f"nnz={self.nnz}, backend={self.backend_name!r})"
        )

"""
Human-readable rendering of a SparseMatrix.

Format (one entry per line, storage order):

    Sparse matrix 2x3:
    (0,0) = 1.000000
    (1,2) = -4.500000
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pycoo.sparse.design import SparseMatrix


def render(matrix: SparseMatrix) -> str:
    lines = [f"Sparse matrix {matrix.rows}x{matrix.cols}:"]
    for row, col, value in matrix.entries():
        lines.append(f"({row},{col}) = {value:f}")
    return "\n".join(lines) + "\n"

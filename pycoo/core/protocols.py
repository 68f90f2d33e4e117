"""
Core protocols for pycoo.

These define structural interfaces that accumulation backends must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
backend only has to provide the right methods.
"""

from typing import Protocol, TYPE_CHECKING, runtime_checkable

from numpy.typing import NDArray

if TYPE_CHECKING:
    from pycoo.core.result import Result
    from pycoo.sparse.design import SparseMatrix
    from pycoo.sparse.solution import KernelParams


@runtime_checkable
class KernelBackend(Protocol):
    """
    Protocol for coordinate accumulation backends.

    A backend turns operands into the list of distinct output coordinates
    with their accumulated values, in first-seen order. It never touches
    the destination matrix: committing, capacity checks and pruning belong
    to the caller.

    Backends are stateless, which makes them easy to test and swap.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_scan', 'cpu_hash'
        """
        ...

    def multiply(self, a: 'SparseMatrix', b: 'SparseMatrix') -> 'Result[KernelParams]':
        """Accumulate the terms of the sparse product a @ b."""
        ...

    def multiply_dense(self, a: 'SparseMatrix', dense: NDArray) -> 'Result[KernelParams]':
        """Accumulate the terms of the product of a with a 2-D dense array."""
        ...

    def add(self, a: 'SparseMatrix', b: 'SparseMatrix') -> 'Result[KernelParams]':
        """Merge the entries of b into a copy of the entries of a."""
        ...

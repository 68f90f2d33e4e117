"""
Exception hierarchy for pycoo.

All exceptions inherit from PyCOOError to allow catching any
library-specific error. Operation-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyCOOError(Exception):
    """Base exception for all pycoo errors."""
    pass


class InvalidArgumentError(PyCOOError):
    """
    Invalid argument passed to a sparse operation.

    Raised for missing matrix references, non-positive dimensions,
    aliased input/output storage and out-of-range entry coordinates.
    """
    pass


class DimensionError(InvalidArgumentError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when operand shapes are incompatible (multiply with
    a.cols != b.rows, add with differing shapes) or when a dense buffer
    does not hold rows * cols elements.
    """
    pass


class CapacityExceededError(PyCOOError):
    """
    Result needs more entries than the destination can store.

    Storage capacity is fixed at allocation time; operations fail instead
    of growing it.

    Attributes:
        required: Number of entries the operation needed
        capacity: Capacity of the destination matrix
        matrix_name: Name/description of the destination, if available
    """

    def __init__(
        self,
        message: str,
        required: int,
        capacity: int,
        matrix_name: str | None = None,
    ):
        super().__init__(message)
        self.required = required
        self.capacity = capacity
        self.matrix_name = matrix_name

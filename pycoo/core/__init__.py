"""
Core infrastructure for pycoo.

This module provides shared abstractions and utilities used by the sparse
kernel package.

Key components:
    protocols: KernelBackend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and numeric thresholds
"""

from pycoo.core.protocols import KernelBackend
from pycoo.core.result import Result
from pycoo.core.exceptions import (
    PyCOOError,
    InvalidArgumentError,
    DimensionError,
    CapacityExceededError,
)

__all__ = [
    # Protocols
    "KernelBackend",
    # Result
    "Result",
    # Exceptions
    "PyCOOError",
    "InvalidArgumentError",
    "DimensionError",
    "CapacityExceededError",
]

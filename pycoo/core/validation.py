"""
Input validation utilities for pycoo.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pycoo.core.exceptions import InvalidArgumentError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        InvalidArgumentError: If input is None or cannot be converted to a
            numeric array
    """
    if array is None:
        raise InvalidArgumentError(f"{name}: expected an array, got None")

    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InvalidArgumentError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise InvalidArgumentError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number) or np.issubdtype(result.dtype, np.complexfloating):
        raise InvalidArgumentError(
            f"{name}: non-numeric dtype {result.dtype}, expected real numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        InvalidArgumentError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidArgumentError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is a strictly positive integer and return it as int.

    Raises:
        InvalidArgumentError: If value is not an integer or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(
            f"{name}: expected a positive integer, got {type(value).__name__} {value!r}"
        )
    if value < 1:
        raise InvalidArgumentError(f"{name}: must be positive, got {value}")
    return int(value)


def check_non_negative_int(value: Any, name: str) -> int:
    """Verify value is an integer >= 0 and return it as int."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(
            f"{name}: expected a non-negative integer, got {type(value).__name__} {value!r}"
        )
    if value < 0:
        raise InvalidArgumentError(f"{name}: must be non-negative, got {value}")
    return int(value)


def check_epsilon(epsilon: Any, name: str = 'epsilon') -> float:
    """
    Verify a near-zero threshold is a positive finite real.

    Raises:
        InvalidArgumentError: If epsilon is not a positive finite number
    """
    if isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real):
        raise InvalidArgumentError(
            f"{name}: expected a real number, got {type(epsilon).__name__}"
        )
    epsilon = float(epsilon)
    if not np.isfinite(epsilon) or epsilon <= 0.0:
        raise InvalidArgumentError(f"{name}: must be positive and finite, got {epsilon}")
    return epsilon


def check_dense_size(
    array: NDArray[np.floating[Any]],
    rows: int,
    cols: int,
    name: str,
) -> None:
    """
    Verify a dense buffer holds exactly rows * cols elements.

    Both flat row-major buffers and (rows, cols) arrays are accepted; any
    other 2-D shape is rejected even when the element count matches.

    Raises:
        DimensionError: If the size or 2-D shape does not match
    """
    if array.ndim == 2 and array.shape != (rows, cols):
        raise DimensionError(
            f"{name}: expected shape ({rows}, {cols}), got {array.shape}"
        )
    if array.ndim > 2:
        raise DimensionError(
            f"{name}: expected 1D or 2D array, got {array.ndim}D with shape {array.shape}"
        )
    if array.size != rows * cols:
        raise DimensionError(
            f"{name}: expected {rows * cols} elements ({rows}x{cols}), got {array.size}"
        )


def check_real_finite(value: Any, name: str) -> float:
    """
    Verify value is a finite real scalar and return it as float.

    Raises:
        InvalidArgumentError: If value is not a real number, is a bool, or
            is NaN/Inf
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(
            f"{name}: expected a real number, got {type(value).__name__} {value!r}"
        )
    value = float(value)
    if not np.isfinite(value):
        raise InvalidArgumentError(f"{name}: must be finite, got {value}")
    return value

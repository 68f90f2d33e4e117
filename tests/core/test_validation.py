"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pycoo.core.exceptions import DimensionError, InvalidArgumentError
from pycoo.core.validation import (
    check_array,
    check_dense_size,
    check_epsilon,
    check_finite,
    check_non_negative_int,
    check_positive_int,
    check_real_finite,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "dense")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float32_promoted(self):
        result = check_array(np.array([1.0, 2.0], dtype=np.float32), "dense")
        assert result.dtype == np.float64

    def test_rejects_none(self):
        with pytest.raises(InvalidArgumentError, match="None"):
            check_array(None, "dense")

    def test_rejects_mixed_types(self):
        with pytest.raises(InvalidArgumentError, match="object dtype"):
            check_array([None, 1, 2.0], "dense")

    def test_rejects_strings(self):
        with pytest.raises(InvalidArgumentError, match="non-numeric"):
            check_array(["a", "b"], "dense")

    def test_rejects_complex(self):
        with pytest.raises(InvalidArgumentError, match="non-numeric"):
            check_array(np.array([1 + 2j]), "dense")


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([0.0, 1.0, -2.0]), "dense")

    def test_nan_and_inf_counted(self):
        with pytest.raises(InvalidArgumentError, match=r"1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 1.0]), "dense")


# ═══════════════════════════════════════════════════════════════════════
# Scalars
# ═══════════════════════════════════════════════════════════════════════


class TestIntegerChecks:

    def test_positive_int_accepts_numpy_int(self):
        assert check_positive_int(np.int32(3), "rows") == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_positive_int_rejects_non_positive(self, value):
        with pytest.raises(InvalidArgumentError, match="rows"):
            check_positive_int(value, "rows")

    @pytest.mark.parametrize("value", [1.5, "2", True, None])
    def test_positive_int_rejects_non_integers(self, value):
        with pytest.raises(InvalidArgumentError):
            check_positive_int(value, "rows")

    def test_non_negative_accepts_zero(self):
        assert check_non_negative_int(0, "capacity") == 0

    def test_non_negative_rejects_negative(self):
        with pytest.raises(InvalidArgumentError, match="capacity"):
            check_non_negative_int(-2, "capacity")


class TestCheckEpsilon:

    def test_returns_float(self):
        assert check_epsilon(1) == 1.0

    @pytest.mark.parametrize("value", [0.0, -1e-3, float("nan"), float("inf")])
    def test_rejects_non_positive_or_non_finite(self, value):
        with pytest.raises(InvalidArgumentError, match="epsilon"):
            check_epsilon(value)


# ═══════════════════════════════════════════════════════════════════════
# check_dense_size
# ═══════════════════════════════════════════════════════════════════════


class TestCheckDenseSize:

    def test_flat_buffer(self):
        check_dense_size(np.zeros(6), 2, 3, "dense")

    def test_shaped_buffer(self):
        check_dense_size(np.zeros((2, 3)), 2, 3, "dense")

    def test_wrong_size(self):
        with pytest.raises(DimensionError, match="expected 6 elements"):
            check_dense_size(np.zeros(5), 2, 3, "dense")

    def test_transposed_shape_rejected(self):
        with pytest.raises(DimensionError, match=r"\(2, 3\)"):
            check_dense_size(np.zeros((3, 2)), 2, 3, "dense")

    def test_3d_rejected(self):
        with pytest.raises(DimensionError, match="3D"):
            check_dense_size(np.zeros((1, 2, 3)), 2, 3, "dense")


class TestCheckRealFinite:

    def test_returns_float(self):
        result = check_real_finite(np.int64(3), "value")
        assert result == 3.0
        assert isinstance(result, float)

    @pytest.mark.parametrize("value", [float("nan"), float("-inf")])
    def test_rejects_non_finite(self, value):
        with pytest.raises(InvalidArgumentError, match="finite"):
            check_real_finite(value, "value")

    @pytest.mark.parametrize("value", ["1.0", None, True, 1 + 2j])
    def test_rejects_non_real(self, value):
        with pytest.raises(InvalidArgumentError, match="real number"):
            check_real_finite(value, "value")

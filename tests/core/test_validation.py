"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_1d: dimensionality
    - check_min_samples: minimum sample count
    - check_positive_int / check_probability: scalar parameters
"""

import numpy as np
import pytest

from pysampling.core.exceptions import DimensionError, ValidationError
from pysampling.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_min_samples,
    check_positive_int,
    check_probability,
)


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_bool_becomes_zero_one(self):
        result = check_array([True, False, True], "hits")
        np.testing.assert_array_equal(result, [1.0, 0.0, 1.0])

    def test_float_passthrough_keeps_dtype(self):
        arr = np.array([1.5, 2.5], dtype=np.float32)
        assert check_array(arr, "x").dtype == np.float32

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="x"):
            check_array(["a", "b"], "x")

    def test_mixed_types_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([1, "a", None], "x")


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "x")

    def test_nan_counted(self):
        with pytest.raises(ValidationError, match="1 NaN, 0 Inf"):
            check_finite(np.array([1.0, np.nan]), "x")

    def test_inf_counted(self):
        with pytest.raises(ValidationError, match="0 NaN, 2 Inf"):
            check_finite(np.array([np.inf, -np.inf]), "x")


class TestCheck1d:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "x")

    def test_2d_rejected(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((3, 2)), "x")


class TestCheckMinSamples:

    def test_enough(self):
        check_min_samples(np.zeros(2), 2, "x")

    def test_too_few(self):
        with pytest.raises(ValidationError, match="at least 2"):
            check_min_samples(np.zeros(1), 2, "x")


class TestCheckPositiveInt:

    def test_returns_python_int(self):
        value = check_positive_int(np.int64(5), "size")
        assert value == 5
        assert type(value) is int

    def test_zero_rejected_by_default(self):
        with pytest.raises(ValidationError, match=">= 1"):
            check_positive_int(0, "size")

    def test_zero_allowed(self):
        assert check_positive_int(0, "trials", allow_zero=True) == 0

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            check_positive_int(-1, "trials", allow_zero=True)

    @pytest.mark.parametrize("bad", [2.5, "3", True, None])
    def test_non_integers_rejected(self, bad):
        with pytest.raises(ValidationError, match="expected an integer"):
            check_positive_int(bad, "size")


class TestCheckProbability:

    def test_valid(self):
        assert check_probability(0.95, "conf_level") == 0.95

    @pytest.mark.parametrize("bad", [0.0, 1.0, -0.1, 1.5])
    def test_out_of_range(self, bad):
        with pytest.raises(ValidationError, match="conf_level"):
            check_probability(bad, "conf_level")

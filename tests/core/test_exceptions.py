"""
Tests for the pysampling exception hierarchy.

Validates:
    - Inheritance chain (all errors catchable via PySamplingError)
    - Diagnostic attributes on InvalidSizeError, InsufficientDataError,
      SmallSampleWarning
    - Default attribute values (None for optional attributes)
"""

import warnings

import pytest

from pysampling.core.exceptions import (
    DimensionError,
    EmptyInputError,
    InsufficientDataError,
    InvalidSizeError,
    PySamplingError,
    SmallSampleWarning,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every error is catchable via PySamplingError."""

    @pytest.mark.parametrize("exc_type", [
        ValidationError,
        DimensionError,
        InvalidSizeError,
        EmptyInputError,
        InsufficientDataError,
    ])
    def test_is_pysampling_error(self, exc_type):
        with pytest.raises(PySamplingError):
            raise exc_type("boom")

    @pytest.mark.parametrize("exc_type", [
        DimensionError,
        InvalidSizeError,
        EmptyInputError,
        InsufficientDataError,
    ])
    def test_is_validation_error(self, exc_type):
        assert issubclass(exc_type, ValidationError)

    def test_small_sample_warning_is_not_an_error(self):
        assert issubclass(SmallSampleWarning, UserWarning)
        assert not issubclass(SmallSampleWarning, PySamplingError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestInvalidSizeError:

    def test_attributes(self):
        err = InvalidSizeError("too big", size=11, population_size=10)
        assert err.size == 11
        assert err.population_size == 10
        assert str(err) == "too big"

    def test_defaults(self):
        err = InvalidSizeError("too big")
        assert err.size is None
        assert err.population_size is None


class TestInsufficientDataError:

    def test_attributes(self):
        err = InsufficientDataError("need more", n=1, required=2)
        assert err.n == 1
        assert err.required == 2

    def test_defaults(self):
        err = InsufficientDataError("need more")
        assert err.n is None
        assert err.required is None


class TestSmallSampleWarning:

    def test_attributes_survive_warn(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            warnings.warn(SmallSampleWarning("small", n=10, threshold=30))
        assert len(caught) == 1
        w = caught[0].message
        assert isinstance(w, SmallSampleWarning)
        assert w.n == 10
        assert w.threshold == 30

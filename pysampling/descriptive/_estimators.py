"""
Point estimators applied to a single sample.

Each function maps a 1D sample to one real number. They are the
statistic functions handed to the experiment runner, so they validate
cheaply and raise instead of returning NaN.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysampling.core.exceptions import (
    EmptyInputError,
    InsufficientDataError,
    ValidationError,
)
from pysampling.core.validation import check_array, check_1d


def as_sample(sample: ArrayLike, name: str = 'sample') -> NDArray[np.floating[Any]]:
    """Convert to a 1D float array without copying when possible."""
    arr = check_array(sample, name)
    check_1d(arr, name)
    return arr


def mean(sample: ArrayLike) -> float:
    """
    Arithmetic mean.

    Raises:
        EmptyInputError: If the sample is empty.
    """
    x = as_sample(sample)
    if x.shape[0] == 0:
        raise EmptyInputError("mean: sample is empty")
    return float(np.mean(x))


def sample_standard_deviation(sample: ArrayLike) -> float:
    """
    Standard deviation with the n-1 (Bessel) denominator.

    Raises:
        InsufficientDataError: If the sample has fewer than 2 values.
    """
    x = as_sample(sample)
    n = x.shape[0]
    if n < 2:
        raise InsufficientDataError(
            f"sample_standard_deviation: requires at least 2 values, got {n}",
            n=n,
            required=2,
        )
    return float(np.std(x, ddof=1))


def sample_variance(sample: ArrayLike) -> float:
    """Variance with the n-1 denominator."""
    x = as_sample(sample)
    n = x.shape[0]
    if n < 2:
        raise InsufficientDataError(
            f"sample_variance: requires at least 2 values, got {n}",
            n=n,
            required=2,
        )
    return float(np.var(x, ddof=1))


def standard_error(sample: ArrayLike) -> float:
    """
    Estimated standard error of the mean: s / sqrt(n).
    """
    x = as_sample(sample)
    return sample_standard_deviation(x) / np.sqrt(x.shape[0])


def median(sample: ArrayLike) -> float:
    x = as_sample(sample)
    if x.shape[0] == 0:
        raise EmptyInputError("median: sample is empty")
    return float(np.median(x))


# Named statistics usable as run(..., statistic="mean").
# The GPU backend can evaluate every name in VECTORIZABLE on device.
STATISTICS: dict[str, Callable[[ArrayLike], float]] = {
    'mean': mean,
    'sd': sample_standard_deviation,
    'var': sample_variance,
    'se': standard_error,
    'median': median,
}

VECTORIZABLE = frozenset({'mean', 'sd', 'var', 'se'})


def get_statistic(
    statistic: str | Callable[[NDArray], Any],
) -> tuple[str, Callable[[NDArray], Any]]:
    """
    Resolve a statistic given by name or as a callable.

    Returns:
        (name, function). Callables are named after their __name__.

    Raises:
        ValidationError: Unknown name or non-callable object.
    """
    if isinstance(statistic, str):
        try:
            return statistic, STATISTICS[statistic]
        except KeyError:
            raise ValidationError(
                f"Unknown statistic: {statistic!r}. "
                f"Available: {sorted(STATISTICS)}"
            ) from None
    if not callable(statistic):
        raise ValidationError(
            f"statistic must be a name or a callable, got {type(statistic).__name__}"
        )
    return getattr(statistic, '__name__', 'custom'), statistic

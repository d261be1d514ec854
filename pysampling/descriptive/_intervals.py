"""
Confidence intervals for the mean of a single sample.

Two constructions:
- z: mean ± z_{1-alpha/2} · SE, the large-sample normal approximation
- t: mean ± t_{1-alpha/2, n-1} · SE, exact for normal data at any n

The normal approximation is only trusted from SMALL_SAMPLE_THRESHOLD
observations up. Below it a z interval is still returned, together with
a SmallSampleWarning; "auto" switches to the t interval instead.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Iterator, Literal

import numpy as np
from numpy.typing import ArrayLike
from scipy import stats as sp_stats

from pysampling.core.exceptions import SmallSampleWarning, ValidationError
from pysampling.core.validation import check_probability
from pysampling.descriptive._estimators import (
    as_sample,
    mean,
    standard_error,
)

SMALL_SAMPLE_THRESHOLD = 30
Z_95 = 1.96

IntervalMethod = Literal['z', 't', 'auto']


@dataclass(frozen=True)
class ConfidenceInterval:
    """
    A (lower, upper) interval around a sample mean.

    Unpacks like a tuple: ``lower, upper = ci``.
    """
    lower: float
    upper: float
    estimate: float
    standard_error: float
    conf_level: float
    method: str
    n: int

    def __iter__(self) -> Iterator[float]:
        yield self.lower
        yield self.upper

    def __contains__(self, value: float) -> bool:
        return contains(self, value)

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def margin(self) -> float:
        """Half-width."""
        return (self.upper - self.lower) / 2.0

    def __repr__(self) -> str:
        pct = f"{self.conf_level * 100:g}%"
        return (
            f"ConfidenceInterval({pct} {self.method}: "
            f"[{self.lower:.6g}, {self.upper:.6g}], n={self.n})"
        )


def warn_small_sample(n: int, stacklevel: int = 3) -> None:
    """Emit the SmallSampleWarning for a normal-approximation interval."""
    warnings.warn(
        SmallSampleWarning(
            f"normal-approximation interval on n={n} < {SMALL_SAMPLE_THRESHOLD} "
            f"observations; coverage may fall short of nominal. "
            f"Use method='t' for small samples.",
            n=n,
            threshold=SMALL_SAMPLE_THRESHOLD,
        ),
        stacklevel=stacklevel,
    )


def critical_value(conf_level: float, method: str, n: int) -> float:
    """
    Two-sided multiplier for the interval half-width.
    """
    upper_q = 1.0 - (1.0 - conf_level) / 2.0
    if method == 'z':
        return float(sp_stats.norm.ppf(upper_q))
    if method == 't':
        return float(sp_stats.t.ppf(upper_q, df=n - 1))
    raise ValidationError(f"Unknown interval method: {method!r}. Use 'z' or 't'.")


def resolve_method(method: str, n: int) -> str:
    if method == 'auto':
        return 't' if n < SMALL_SAMPLE_THRESHOLD else 'z'
    if method not in ('z', 't'):
        raise ValidationError(
            f"Unknown interval method: {method!r}. Use 'z', 't' or 'auto'."
        )
    return method


def confidence_interval_95(sample: ArrayLike) -> ConfidenceInterval:
    """
    95% normal-approximation interval: mean ± 1.96 · SE.

    Warns with SmallSampleWarning when n < SMALL_SAMPLE_THRESHOLD.

    Raises:
        InsufficientDataError: If the sample has fewer than 2 values.
    """
    x = as_sample(sample)
    n = x.shape[0]
    se = standard_error(x)
    m = mean(x)
    if n < SMALL_SAMPLE_THRESHOLD:
        warn_small_sample(n)
    return ConfidenceInterval(
        lower=m - Z_95 * se,
        upper=m + Z_95 * se,
        estimate=m,
        standard_error=se,
        conf_level=0.95,
        method='z',
        n=n,
    )


def confidence_interval(
    sample: ArrayLike,
    conf_level: float = 0.95,
    method: IntervalMethod = 'z',
) -> ConfidenceInterval:
    """
    Confidence interval for the population mean.

    Parameters
    ----------
    sample : array-like
        1D sample, at least 2 values.
    conf_level : float
        Nominal coverage in (0, 1).
    method : str
        'z' (normal quantile), 't' (Student-t with n-1 df) or 'auto'
        (t below SMALL_SAMPLE_THRESHOLD, z otherwise). A 'z' interval on a
        small sample warns with SmallSampleWarning.

    Returns
    -------
    ConfidenceInterval
    """
    conf_level = check_probability(conf_level, 'conf_level')
    x = as_sample(sample)
    n = x.shape[0]
    se = standard_error(x)
    m = mean(x)

    resolved = resolve_method(method, n)
    if resolved == 'z' and n < SMALL_SAMPLE_THRESHOLD:
        warn_small_sample(n)

    q = critical_value(conf_level, resolved, n)
    return ConfidenceInterval(
        lower=m - q * se,
        upper=m + q * se,
        estimate=m,
        standard_error=se,
        conf_level=conf_level,
        method=resolved,
        n=n,
    )


def contains(interval: ConfidenceInterval | tuple[float, float], value: float) -> bool:
    """
    Coverage predicate: lower <= value <= upper.

    Raises:
        ValidationError: If the interval bounds are reversed or not finite.
    """
    lower, upper = interval
    if not (np.isfinite(lower) and np.isfinite(upper)):
        raise ValidationError(f"interval bounds must be finite, got ({lower}, {upper})")
    if lower > upper:
        raise ValidationError(f"interval lower bound {lower} exceeds upper bound {upper}")
    return bool(lower <= value <= upper)

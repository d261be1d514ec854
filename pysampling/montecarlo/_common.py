"""
Common data structures for sampling experiments.

SamplingParams and CoverageParams are the payloads wrapped by Result[P]
and exposed through the Solution classes. Summary is the scalar report
on one sampling distribution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysampling.core.exceptions import EmptyInputError
from pysampling.core.validation import check_array, check_1d


@dataclass(frozen=True)
class Summary:
    """
    Descriptive summary of a sampling distribution.

    - mean: average of the trial results
    - std_dev: their standard deviation (n-1 denominator); for the
      sampling distribution of the mean this estimates the standard error
    - n: number of trial results
    """
    mean: float
    std_dev: float
    n: int


@dataclass(frozen=True)
class SamplingParams:
    """
    Payload for a sampling-distribution experiment.

    - distribution: one statistic value per trial, shape (trials,)
    - summary: None when trials == 0
    """
    distribution: NDArray[np.floating[Any]]    # shape (trials,)
    trials: int
    sample_size: int
    replace: bool
    statistic: str
    summary: Summary | None


@dataclass(frozen=True)
class CoverageParams:
    """
    Payload for a confidence-interval coverage experiment.

    - intervals: (lower, upper) per trial, shape (trials, 2)
    - hits: whether each interval contains the parameter, shape (trials,)
    - coverage: fraction of hits, NaN when trials == 0
    """
    intervals: NDArray[np.floating[Any]]       # shape (trials, 2)
    hits: NDArray[np.bool_]                    # shape (trials,)
    coverage: float
    parameter: float
    conf_level: float
    method: str                                 # "z" | "t"
    critical_value: float
    trials: int
    sample_size: int


def summarize(distribution: ArrayLike) -> Summary:
    """
    Mean and standard deviation of a sampling distribution.

    A single trial yields std_dev = NaN (no spread to estimate).

    Raises:
        EmptyInputError: If the distribution is empty.
    """
    t = check_array(distribution, 'distribution')
    check_1d(t, 'distribution')
    n = t.shape[0]
    if n == 0:
        raise EmptyInputError("summarize: sampling distribution is empty")
    std_dev = float(np.std(t, ddof=1)) if n > 1 else float('nan')
    return Summary(mean=float(np.mean(t)), std_dev=std_dev, n=n)


def coverage_rate(results: ArrayLike) -> float:
    """
    Fraction of true values in a sequence of coverage indicators.

    Accepts booleans or 0/1 numbers.

    Raises:
        EmptyInputError: If there are no results.
    """
    r = check_array(results, 'results')
    check_1d(r, 'results')
    if r.shape[0] == 0:
        raise EmptyInputError("coverage_rate: no results")
    return float(np.count_nonzero(r) / r.shape[0])

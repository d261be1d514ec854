"""
Statistic functions for single samples.

Public API:
    mean(x)                       - arithmetic mean
    sample_standard_deviation(x)  - n-1 denominator
    sample_variance(x)            - n-1 denominator
    standard_error(x)             - s / sqrt(n)
    median(x)
    confidence_interval_95(x)     - mean ± 1.96·SE
    confidence_interval(x, ...)   - z, t or auto interval at any level
    contains(interval, value)     - coverage predicate
    get_statistic(name_or_fn)     - resolve a named statistic
"""

from pysampling.descriptive._estimators import (
    STATISTICS,
    VECTORIZABLE,
    get_statistic,
    mean,
    median,
    sample_standard_deviation,
    sample_variance,
    standard_error,
)
from pysampling.descriptive._intervals import (
    SMALL_SAMPLE_THRESHOLD,
    Z_95,
    ConfidenceInterval,
    confidence_interval,
    confidence_interval_95,
    contains,
)

__all__ = [
    "mean",
    "median",
    "sample_standard_deviation",
    "sample_variance",
    "standard_error",
    "confidence_interval_95",
    "confidence_interval",
    "contains",
    "get_statistic",
    "ConfidenceInterval",
    "STATISTICS",
    "VECTORIZABLE",
    "SMALL_SAMPLE_THRESHOLD",
    "Z_95",
]

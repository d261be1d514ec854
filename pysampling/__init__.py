"""
pysampling: sampling-distribution experiments for Python.

Repeatedly draw samples from a finite population, compute a statistic on
each, and compare the empirical sampling distribution with theory
(standard error of the mean, Central Limit Theorem, confidence-interval
coverage).

Submodules:
    core: Population, Result envelope, exceptions, validation
    descriptive: statistic functions and confidence intervals
    montecarlo: sampler, experiment runner, summary reporter
"""

__version__ = "0.1.0"

from pysampling import descriptive
from pysampling import montecarlo
from pysampling.core import (
    Population,
    PySamplingError,
    ValidationError,
    InvalidSizeError,
    EmptyInputError,
    InsufficientDataError,
    SmallSampleWarning,
)
from pysampling.descriptive import (
    mean,
    sample_standard_deviation,
    standard_error,
    confidence_interval_95,
    confidence_interval,
    contains,
)
from pysampling.montecarlo import (
    draw,
    run,
    summarize,
    coverage_rate,
    coverage_experiment,
)

__all__ = [
    "__version__",
    "descriptive",
    "montecarlo",
    "Population",
    # Exceptions
    "PySamplingError",
    "ValidationError",
    "InvalidSizeError",
    "EmptyInputError",
    "InsufficientDataError",
    "SmallSampleWarning",
    # Statistics
    "mean",
    "sample_standard_deviation",
    "standard_error",
    "confidence_interval_95",
    "confidence_interval",
    "contains",
    # Experiments
    "draw",
    "run",
    "summarize",
    "coverage_rate",
    "coverage_experiment",
]

"""
Core infrastructure for pysampling.

Key components:
    population: immutable Population value and its loaders
    result: Generic Result[P] envelope
    exceptions: Exception and warning hierarchy
    validation: Input validators
    compute: Device detection and timing
"""

from pysampling.core.population import Population, as_population
from pysampling.core.result import Result
from pysampling.core.exceptions import (
    PySamplingError,
    ValidationError,
    DimensionError,
    InvalidSizeError,
    EmptyInputError,
    InsufficientDataError,
    SmallSampleWarning,
)

__all__ = [
    # Population
    "Population",
    "as_population",
    # Result
    "Result",
    # Exceptions
    "PySamplingError",
    "ValidationError",
    "DimensionError",
    "InvalidSizeError",
    "EmptyInputError",
    "InsufficientDataError",
    "SmallSampleWarning",
]

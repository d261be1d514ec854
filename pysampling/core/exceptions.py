"""
Exception hierarchy for pysampling.

All exceptions inherit from PySamplingError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PySamplingError(Exception):
    """Base exception for all pysampling errors."""
    pass


class ValidationError(PySamplingError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect.

    Raised when a population or sample is not one-dimensional.
    """
    pass


class InvalidSizeError(ValidationError):
    """
    Requested sample size cannot be drawn from the population.

    Raised when sampling without replacement asks for more elements
    than the population holds.

    Attributes:
        size: Requested sample size
        population_size: Number of elements available
    """

    def __init__(
        self,
        message: str,
        size: int | None = None,
        population_size: int | None = None,
    ):
        super().__init__(message)
        self.size = size
        self.population_size = population_size


class EmptyInputError(ValidationError):
    """
    A statistic was requested on a zero-length input.
    """
    pass


class InsufficientDataError(ValidationError):
    """
    Too few observations for the requested statistic.

    Raised by spread-dependent statistics (standard deviation, standard
    error, confidence intervals) on samples smaller than two.

    Attributes:
        n: Number of observations supplied
        required: Minimum number of observations needed
    """

    def __init__(
        self,
        message: str,
        n: int | None = None,
        required: int | None = None,
    ):
        super().__init__(message)
        self.n = n
        self.required = required


class SmallSampleWarning(UserWarning):
    """
    Normal-approximation interval requested on a small sample.

    Non-fatal: the interval is still computed. Callers who need exact
    small-sample coverage should use the Student-t interval instead.

    Attributes:
        n: Sample size
        threshold: Sample size at which the normal approximation is trusted
    """

    def __init__(
        self,
        message: str,
        n: int | None = None,
        threshold: int | None = None,
    ):
        super().__init__(message)
        self.n = n
        self.threshold = threshold

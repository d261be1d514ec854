"""
Design classes for sampling experiments.

ExperimentDesign and CoverageDesign encapsulate all inputs needed by
backends to run repeated draws. Immutable, validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from numpy.typing import ArrayLike

from pysampling.core.exceptions import InsufficientDataError, ValidationError
from pysampling.core.population import Population, as_population
from pysampling.core.validation import check_positive_int, check_probability
from pysampling.descriptive import (
    SMALL_SAMPLE_THRESHOLD,
    STATISTICS,
    VECTORIZABLE,
    get_statistic,
)
from pysampling.montecarlo._sampler import SeedLike, check_sample_size, check_seed


@dataclass(frozen=True)
class ExperimentDesign:
    """
    Frozen design for a sampling-distribution experiment.

    Attributes:
        population: Population to sample from (read-only).
        sample_size: Size of every sample.
        trials: Number of samples to draw; 0 is allowed.
        replace: Sample with replacement.
        statistic: fn(sample) -> real.
        statistic_name: Registered name, or the callable's __name__.
        seed: Integer seed, Generator, or None.
    """
    population: Population
    sample_size: int
    trials: int
    replace: bool
    statistic: Callable[..., Any]
    statistic_name: str
    seed: SeedLike

    @property
    def vectorizable(self) -> bool:
        """True if the statistic is a registered one the GPU backend can batch."""
        return (
            self.statistic_name in VECTORIZABLE
            and STATISTICS[self.statistic_name] is self.statistic
        )

    @classmethod
    def for_experiment(
        cls,
        population: Population | ArrayLike,
        sample_size: int,
        trials: int,
        *,
        replace: bool = False,
        statistic: str | Callable[..., Any] = 'mean',
        seed: SeedLike = None,
    ) -> ExperimentDesign:
        """
        Create an experiment design with validation.

        Args:
            population: Population or 1D array-like of finite numbers.
            sample_size: Positive integer.
            trials: Integer >= 0.
            replace: Sample with replacement.
            statistic: Registered name ("mean", "sd", "var", "se",
                "median") or fn(sample) -> real.
            seed: Random seed or Generator.

        Returns:
            Validated ExperimentDesign.

        Raises:
            InvalidSizeError: sample_size exceeds the population without
                replacement.
            ValidationError: Any other invalid input.
        """
        pop = as_population(population)
        sample_size = check_positive_int(sample_size, 'sample_size')
        trials = check_positive_int(trials, 'trials', allow_zero=True)
        check_sample_size(sample_size, pop.size, bool(replace))
        name, fn = get_statistic(statistic)
        seed = check_seed(seed)

        return cls(
            population=pop,
            sample_size=sample_size,
            trials=trials,
            replace=bool(replace),
            statistic=fn,
            statistic_name=name,
            seed=seed,
        )


@dataclass(frozen=True)
class CoverageDesign:
    """
    Frozen design for a confidence-interval coverage experiment.

    Attributes:
        population: Population to sample from.
        sample_size: Size of every sample (>= 2).
        trials: Number of intervals to build; 0 is allowed.
        conf_level: Nominal coverage.
        method: "z", "t" or "auto" (resolved later against sample_size).
        parameter: Value each interval is checked against; the
            population mean unless given.
        replace: Sample with replacement.
        seed: Integer seed, Generator, or None.
    """
    population: Population
    sample_size: int
    trials: int
    conf_level: float
    method: str
    parameter: float
    replace: bool
    seed: SeedLike

    @property
    def resolved_method(self) -> str:
        if self.method == 'auto':
            return 't' if self.sample_size < SMALL_SAMPLE_THRESHOLD else 'z'
        return self.method

    @property
    def small_sample(self) -> bool:
        """True when a z interval is used below the normal-approximation threshold."""
        return self.resolved_method == 'z' and self.sample_size < SMALL_SAMPLE_THRESHOLD

    @classmethod
    def for_coverage(
        cls,
        population: Population | ArrayLike,
        sample_size: int,
        trials: int,
        *,
        conf_level: float = 0.95,
        method: str = 'z',
        parameter: float | None = None,
        replace: bool = False,
        seed: SeedLike = None,
    ) -> CoverageDesign:
        """
        Create a coverage design with validation.

        Raises:
            InsufficientDataError: sample_size < 2.
            InvalidSizeError: sample_size exceeds the population without
                replacement.
            ValidationError: Any other invalid input.
        """
        pop = as_population(population)
        sample_size = check_positive_int(sample_size, 'sample_size')
        if sample_size < 2:
            raise InsufficientDataError(
                f"coverage experiments need sample_size >= 2 to estimate "
                f"a standard error, got {sample_size}",
                n=sample_size,
                required=2,
            )
        trials = check_positive_int(trials, 'trials', allow_zero=True)
        check_sample_size(sample_size, pop.size, bool(replace))
        conf_level = check_probability(conf_level, 'conf_level')
        if method not in ('z', 't', 'auto'):
            raise ValidationError(
                f"method must be 'z', 't' or 'auto', got {method!r}"
            )
        seed = check_seed(seed)

        return cls(
            population=pop,
            sample_size=sample_size,
            trials=trials,
            conf_level=conf_level,
            method=method,
            parameter=pop.mean() if parameter is None else float(parameter),
            replace=bool(replace),
            seed=seed,
        )

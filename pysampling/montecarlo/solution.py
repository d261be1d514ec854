"""
Solution wrappers for sampling experiments.

SamplingDistributionSolution and CoverageSolution wrap Result[P] and
provide convenient accessors and plain-text reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pysampling.core.exceptions import EmptyInputError
from pysampling.core.result import Result
from pysampling.montecarlo._common import CoverageParams, SamplingParams, Summary

if TYPE_CHECKING:
    from pysampling.core.population import Population
    from pysampling.montecarlo.design import CoverageDesign, ExperimentDesign


@dataclass
class SamplingDistributionSolution:
    """
    User-facing sampling-distribution results.

    The raw distribution is meant for histograms; summary and
    theoretical_standard_error() are meant for comparing the empirical
    spread against sigma / sqrt(n).
    """
    _result: Result[SamplingParams]
    _design: 'ExperimentDesign'

    # --- Core fields ---

    @property
    def distribution(self) -> NDArray[np.floating[Any]]:
        """One statistic value per trial, shape (trials,)."""
        return self._result.params.distribution

    @property
    def trials(self) -> int:
        return self._result.params.trials

    @property
    def sample_size(self) -> int:
        return self._result.params.sample_size

    @property
    def replace(self) -> bool:
        return self._result.params.replace

    @property
    def statistic(self) -> str:
        """Name of the statistic computed on every sample."""
        return self._result.params.statistic

    @property
    def summary(self) -> Summary:
        """
        Mean and standard deviation of the distribution.

        Raises:
            EmptyInputError: If the experiment ran zero trials.
        """
        summary = self._result.params.summary
        if summary is None:
            raise EmptyInputError("summary: experiment ran zero trials")
        return summary

    @property
    def mean(self) -> float:
        return self.summary.mean

    @property
    def std_dev(self) -> float:
        return self.summary.std_dev

    def __len__(self) -> int:
        return self.trials

    # --- Theory ---

    def theoretical_standard_error(self, fpc: bool = True) -> float:
        """
        Predicted standard error of the sample mean, sigma / sqrt(n).

        Args:
            fpc: Apply the finite population correction
                sqrt((N - n) / (N - 1)) when sampling without replacement.
        """
        pop = self.population
        big_n = pop.size
        n = self.sample_size
        se = pop.std(ddof=0) / np.sqrt(n)
        if fpc and not self.replace and big_n > 1:
            se *= np.sqrt((big_n - n) / (big_n - 1))
        return float(se)

    # --- Metadata ---

    @property
    def population(self) -> 'Population':
        return self._design.population

    @property
    def seed(self):
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def describe(self) -> str:
        """
        Plain-text report.

        Produces:
            SAMPLING DISTRIBUTION OF THE MEAN

            Population: 'Height' (N=8000, mean=161.878, sd=20.186)
            Samples: 5000 of size 50, without replacement
            ...
        """
        pop = self.population
        label = f"{pop.name!r} " if pop.name else ""
        mode = "with" if self.replace else "without"
        lines = [
            f"\nSAMPLING DISTRIBUTION OF THE {self.statistic.upper()}\n",
            f"Population: {label}(N={pop.size}, mean={pop.mean():.6g}, "
            f"sd={pop.std():.6g})",
            f"Samples: {self.trials} of size {self.sample_size}, "
            f"{mode} replacement",
            "",
        ]
        if self.trials == 0:
            lines.append("No trials run.")
        else:
            s = self.summary
            lines.append(f"{'mean of statistic':>28s}: {s.mean:.6g}")
            lines.append(f"{'std. dev. of statistic':>28s}: {s.std_dev:.6g}")
            if self.statistic == 'mean':
                lines.append(
                    f"{'theoretical std. error':>28s}: "
                    f"{self.theoretical_standard_error():.6g}"
                )
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SamplingDistributionSolution(trials={self.trials}, "
            f"sample_size={self.sample_size}, statistic={self.statistic!r}, "
            f"backend={self.backend_name!r})"
        )


@dataclass
class CoverageSolution:
    """
    User-facing confidence-interval coverage results.
    """
    _result: Result[CoverageParams]
    _design: 'CoverageDesign'

    @property
    def intervals(self) -> NDArray[np.floating[Any]]:
        """(lower, upper) per trial, shape (trials, 2)."""
        return self._result.params.intervals

    @property
    def hits(self) -> NDArray[np.bool_]:
        """Whether each interval contains the parameter, shape (trials,)."""
        return self._result.params.hits

    @property
    def coverage(self) -> float:
        """Empirical coverage rate; NaN for zero trials."""
        return self._result.params.coverage

    @property
    def nominal(self) -> float:
        """Nominal coverage (conf_level)."""
        return self._result.params.conf_level

    @property
    def parameter(self) -> float:
        return self._result.params.parameter

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def critical_value(self) -> float:
        return self._result.params.critical_value

    @property
    def trials(self) -> int:
        return self._result.params.trials

    @property
    def sample_size(self) -> int:
        return self._result.params.sample_size

    def monte_carlo_error(self) -> float:
        """Binomial standard error of the coverage estimate at nominal level."""
        if self.trials == 0:
            return float('nan')
        p = self.nominal
        return float(np.sqrt(p * (1.0 - p) / self.trials))

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def describe(self) -> str:
        """Coverage experiment report."""
        pct = f"{self.nominal * 100:g}%"
        lines = [
            "\nCONFIDENCE INTERVAL COVERAGE",
            "",
            f"Intervals: {self.trials} {pct} {self.method} intervals, "
            f"samples of size {self.sample_size}",
            f"Parameter: {self.parameter:.6g}",
            f"Critical value: {self.critical_value:.6g}",
            f"Coverage: {self.coverage:.4f} (nominal {self.nominal:.4f}, "
            f"MC s.e. {self.monte_carlo_error():.4f})",
        ]
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CoverageSolution(trials={self.trials}, "
            f"coverage={self.coverage:.4g}, nominal={self.nominal:.4g})"
        )

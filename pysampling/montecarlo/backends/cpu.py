"""
CPU backends for sampling experiments.

CPUExperimentBackend: repeated draw + statistic, any statistic function.
CPUCoverageBackend: repeated draw + confidence interval + coverage check.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pysampling.core.exceptions import ValidationError
from pysampling.core.result import Result
from pysampling.core.compute.timing import Timer
from pysampling.descriptive import mean, standard_error
from pysampling.descriptive._intervals import critical_value, warn_small_sample
from pysampling.montecarlo._common import (
    CoverageParams,
    SamplingParams,
    summarize,
)
from pysampling.montecarlo._sampler import draw_indices, resolve_rng
from pysampling.montecarlo.design import CoverageDesign, ExperimentDesign


def as_trial_result(value, statistic_name: str) -> float:
    """Coerce one statistic output (number or bool) to a float."""
    arr = np.asarray(value, dtype=np.float64)
    if arr.size != 1:
        raise ValidationError(
            f"statistic {statistic_name!r} must return a single real number, "
            f"got shape {arr.shape}"
        )
    return float(arr.reshape(()))


class CPUExperimentBackend:
    """
    CPU backend for sampling-distribution experiments.

    One Generator is seeded per run and consumed trial after trial, so a
    fixed seed reproduces the whole distribution. Errors raised by the
    sampler or statistic abort the run.
    """

    @property
    def name(self) -> str:
        return 'cpu_experiment'

    def solve(self, design: ExperimentDesign) -> Result[SamplingParams]:
        """Run the experiment and return Result[SamplingParams]."""
        timer = Timer()
        timer.start()

        values = design.population.values
        n_pop = design.population.size
        n = design.sample_size
        trials = design.trials
        replace = design.replace
        statistic = design.statistic
        name = design.statistic_name

        rng = resolve_rng(design.seed)
        t = np.empty(trials, dtype=np.float64)

        with timer.section('sampling'):
            for b in range(trials):
                idx = draw_indices(n_pop, n, replace, rng)
                t[b] = as_trial_result(statistic(values[idx]), name)

        with timer.section('summary_statistics'):
            summary = summarize(t) if trials > 0 else None

        timer.stop()

        params = SamplingParams(
            distribution=t,
            trials=trials,
            sample_size=n,
            replace=replace,
            statistic=name,
            summary=summary,
        )

        return Result(
            params=params,
            info=experiment_info(design),
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class CPUCoverageBackend:
    """
    CPU backend for confidence-interval coverage experiments.

    The critical value is computed once; each trial only needs the
    sample mean and standard error.
    """

    @property
    def name(self) -> str:
        return 'cpu_coverage'

    def solve(self, design: CoverageDesign) -> Result[CoverageParams]:
        """Run the coverage experiment and return Result[CoverageParams]."""
        timer = Timer()
        timer.start()

        values = design.population.values
        n_pop = design.population.size
        n = design.sample_size
        trials = design.trials
        method = design.resolved_method
        parameter = design.parameter

        warnings_list: list[str] = []
        if design.small_sample:
            warn_small_sample(n, stacklevel=4)
            warnings_list.append(
                f"normal-approximation interval with sample_size={n}; "
                f"nominal coverage may not hold"
            )

        q = critical_value(design.conf_level, method, n)
        rng = resolve_rng(design.seed)
        intervals = np.empty((trials, 2), dtype=np.float64)

        with timer.section('intervals'):
            for b in range(trials):
                sample = values[draw_indices(n_pop, n, design.replace, rng)]
                m = mean(sample)
                se = standard_error(sample)
                intervals[b, 0] = m - q * se
                intervals[b, 1] = m + q * se

        with timer.section('coverage'):
            hits = coverage_hits(intervals, parameter)
            coverage = float(hits.mean()) if trials > 0 else float('nan')

        timer.stop()

        params = CoverageParams(
            intervals=intervals,
            hits=hits,
            coverage=coverage,
            parameter=parameter,
            conf_level=design.conf_level,
            method=method,
            critical_value=q,
            trials=trials,
            sample_size=n,
        )

        return Result(
            params=params,
            info={
                'sample_size': n,
                'trials': trials,
                'replace': design.replace,
                'population_size': n_pop,
                'conf_level': design.conf_level,
                'method': method,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def coverage_hits(intervals: NDArray, parameter: float) -> NDArray[np.bool_]:
    """Row-wise lower <= parameter <= upper."""
    return (intervals[:, 0] <= parameter) & (parameter <= intervals[:, 1])


def experiment_info(design: ExperimentDesign) -> dict:
    return {
        'sample_size': design.sample_size,
        'trials': design.trials,
        'replace': design.replace,
        'statistic': design.statistic_name,
        'population_size': design.population.size,
    }

"""
Solver dispatch for sampling experiments.

Provides run() for sampling distributions of any statistic and
coverage_experiment() for confidence-interval coverage.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal

from numpy.typing import ArrayLike

from pysampling.core.compute.device import select_device
from pysampling.core.exceptions import ValidationError
from pysampling.core.population import Population
from pysampling.montecarlo._sampler import SeedLike
from pysampling.montecarlo.backends.cpu import (
    CPUCoverageBackend,
    CPUExperimentBackend,
)
from pysampling.montecarlo.design import CoverageDesign, ExperimentDesign
from pysampling.montecarlo.solution import (
    CoverageSolution,
    SamplingDistributionSolution,
)

logger = logging.getLogger(__name__)

BackendChoice = Literal['auto', 'cpu', 'gpu']


def _get_backend(backend: BackendChoice, design: ExperimentDesign):
    """
    Select an experiment backend.

    'auto' only moves to the GPU when one exists and the statistic has a
    batched form; everything else stays on the CPU.
    """
    if backend == 'cpu':
        return CPUExperimentBackend()

    if backend == 'auto':
        if not design.vectorizable:
            return CPUExperimentBackend()
        device = select_device('auto')
        if device.is_gpu:
            try:
                from pysampling.montecarlo.backends.gpu import GPUExperimentBackend
                return GPUExperimentBackend(device=device.torch_device)
            except ImportError:
                return CPUExperimentBackend()
        return CPUExperimentBackend()

    if backend == 'gpu':
        device = select_device('gpu')
        from pysampling.montecarlo.backends.gpu import GPUExperimentBackend
        return GPUExperimentBackend(device=device.torch_device)

    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'auto', 'cpu' or 'gpu'."
    )


def run(
    population: Population | ArrayLike | ExperimentDesign,
    sample_size: int | None = None,
    trials: int | None = None,
    replace: bool = False,
    statistic: str | Callable[..., Any] = 'mean',
    *,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> SamplingDistributionSolution:
    """
    Empirical sampling distribution of a statistic.

    Repeats ``trials`` times: draw a sample of ``sample_size`` from the
    population, apply ``statistic``, record the result.

    Parameters
    ----------
    population : Population, array-like or ExperimentDesign
        Finite population (no missing values). A prebuilt design carries
        every other argument itself.
    sample_size : int
        Size of every sample.
    trials : int
        Number of samples; 0 yields an empty distribution.
    replace : bool
        Sample with replacement (default False).
    statistic : str or callable
        "mean" (default), "sd", "var", "se", "median", or fn(sample) -> real.
        Boolean results are stored as 0.0 / 1.0.
    seed : int, numpy.random.Generator or None
        Random source; a fixed seed reproduces the distribution.
    backend : str
        'cpu' (default), 'gpu', or 'auto'.

    Returns
    -------
    SamplingDistributionSolution

    Raises
    ------
    InvalidSizeError
        sample_size exceeds the population without replacement.
    PySamplingError
        Anything the statistic raises propagates and aborts the run.
    """
    if isinstance(population, ExperimentDesign):
        design = population
    else:
        if sample_size is None or trials is None:
            raise ValidationError("run: sample_size and trials are required")
        design = ExperimentDesign.for_experiment(
            population,
            sample_size,
            trials,
            replace=replace,
            statistic=statistic,
            seed=seed,
        )

    be = _get_backend(backend, design)
    logger.info(
        "running %d trials of %s(n=%d) on %s",
        design.trials, design.statistic_name, design.sample_size, be.name,
    )
    result = be.solve(design)
    logger.info(
        "finished %d trials in %.3fs",
        design.trials, result.timing['total_seconds'] if result.timing else float('nan'),
    )
    return SamplingDistributionSolution(_result=result, _design=design)


def coverage_experiment(
    population: Population | ArrayLike | CoverageDesign,
    sample_size: int | None = None,
    trials: int | None = None,
    conf_level: float = 0.95,
    method: Literal['z', 't', 'auto'] = 'z',
    *,
    parameter: float | None = None,
    replace: bool = False,
    seed: SeedLike = None,
) -> CoverageSolution:
    """
    Empirical coverage of confidence intervals for the mean.

    Each trial draws one sample, builds a ``conf_level`` interval from its
    mean and standard error, and checks whether the interval contains
    ``parameter`` (the population mean by default).

    Parameters
    ----------
    population : Population, array-like or CoverageDesign
    sample_size : int
        Size of every sample, >= 2.
    trials : int
        Number of intervals; 0 yields NaN coverage.
    conf_level : float
        Nominal coverage in (0, 1).
    method : str
        'z' (normal), 't' (Student-t) or 'auto'. A 'z' interval below the
        small-sample threshold warns once with SmallSampleWarning.
    parameter : float, optional
        Target value; defaults to the population mean.
    replace : bool
        Sample with replacement.
    seed : int, numpy.random.Generator or None

    Returns
    -------
    CoverageSolution
    """
    if isinstance(population, CoverageDesign):
        design = population
    else:
        if sample_size is None or trials is None:
            raise ValidationError(
                "coverage_experiment: sample_size and trials are required"
            )
        design = CoverageDesign.for_coverage(
            population,
            sample_size,
            trials,
            conf_level=conf_level,
            method=method,
            parameter=parameter,
            replace=replace,
            seed=seed,
        )

    be = CPUCoverageBackend()
    logger.info(
        "building %d %s intervals (n=%d, conf_level=%g)",
        design.trials, design.resolved_method, design.sample_size, design.conf_level,
    )
    result = be.solve(design)
    logger.info(
        "coverage %.4f over %d intervals in %.3fs",
        result.params.coverage, design.trials, result.timing['total_seconds'],
    )
    return CoverageSolution(_result=result, _design=design)

"""
Sampling-distribution experiments.

Draw many fixed-size samples from a finite population, compute a
statistic on each, and study the resulting empirical distribution.

Usage:
    from pysampling.montecarlo import draw, run, summarize, coverage_experiment

    sample = draw(population, 50, seed=1)
    result = run(population, sample_size=50, trials=5000, seed=42)
    summarize(result.distribution)

    cov = coverage_experiment(population, sample_size=250, trials=2500, seed=42)
    cov.coverage
"""

from pysampling.montecarlo._common import (
    CoverageParams,
    SamplingParams,
    Summary,
    coverage_rate,
    summarize,
)
from pysampling.montecarlo._sampler import draw, draw_index_matrix, draw_indices
from pysampling.montecarlo.design import CoverageDesign, ExperimentDesign
from pysampling.montecarlo.solution import (
    CoverageSolution,
    SamplingDistributionSolution,
)
from pysampling.montecarlo.solvers import coverage_experiment, run

__all__ = [
    "draw",
    "draw_indices",
    "draw_index_matrix",
    "run",
    "summarize",
    "coverage_rate",
    "coverage_experiment",
    "ExperimentDesign",
    "CoverageDesign",
    "SamplingDistributionSolution",
    "CoverageSolution",
    "SamplingParams",
    "CoverageParams",
    "Summary",
]

"""
Backends for sampling experiments.

CPU is always available; the GPU backend needs PyTorch (``gpu`` extra)
and is imported lazily by the solvers.
"""

from pysampling.montecarlo.backends.cpu import (
    CPUCoverageBackend,
    CPUExperimentBackend,
)

__all__ = [
    "CPUExperimentBackend",
    "CPUCoverageBackend",
]

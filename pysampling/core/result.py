"""
Generic result container for all pysampling computations.

The Result class provides a standardized envelope that every experiment
result uses. This enables shared tooling for timing, reproducibility and
reporting while allowing each experiment to define its own payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (sample size, trials, statistic)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for sampling experiments.

    Type Parameters:
        P: The experiment-specific payload type

    Attributes:
        params: Experiment payload (sampling distribution, intervals, etc.)
        info: Structured metadata (sample size, trials, statistic name)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=SamplingParams(distribution=t, trials=1000),
        ...     info={'sample_size': 50, 'statistic': 'mean'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_experiment'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

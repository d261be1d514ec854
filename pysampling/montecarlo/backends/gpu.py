"""
GPU backend for sampling experiments.

Registered statistics with a batched form (mean, sd, var, se) are
evaluated on device: each batch draws a (rows, sample_size) index matrix
and reduces along the sample axis. Without replacement, small samples
take their indices from numpy's Generator.choice on the host, so a draw
never scans the whole population; samples covering at least half of it
are drawn by sorting random keys on device.

Arbitrary Python statistics cannot run on the GPU and fall back to the
CPU backend.

Results are reproducible for a fixed seed but are not bit-identical to
the CPU backend, which consumes numpy's generator instead of torch's.
"""

from __future__ import annotations

import logging

import numpy as np

from pysampling.core.exceptions import InsufficientDataError
from pysampling.core.result import Result
from pysampling.core.compute.timing import Timer
from pysampling.montecarlo._common import SamplingParams, summarize
from pysampling.montecarlo._sampler import SeedLike, draw_index_matrix
from pysampling.montecarlo.backends.cpu import experiment_info
from pysampling.montecarlo.design import ExperimentDesign

logger = logging.getLogger(__name__)

# Upper bound on index-matrix elements materialised per batch.
BATCH_ELEMENTS = 1 << 24

# Without replacement, samples with n * DENSE_FRACTION >= N use a per-row
# argsort on device; smaller samples draw their indices on the host.
DENSE_FRACTION = 2


class GPUExperimentBackend:
    """
    GPU backend for sampling-distribution experiments.
    """

    def __init__(self, device: str = 'auto'):
        import torch

        self._torch = torch

        if device == 'auto':
            if torch.cuda.is_available():
                self._device = 'cuda'
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                self._device = 'mps'
            else:
                raise RuntimeError("No GPU available (need CUDA or MPS)")
        else:
            self._device = device

        # MPS has no float64 support
        self._dtype = torch.float32 if self._device == 'mps' else torch.float64

    @property
    def name(self) -> str:
        return f'gpu_{self._device}_experiment'

    def solve(self, design: ExperimentDesign) -> Result[SamplingParams]:
        """
        Run the experiment on device, or on CPU for non-batchable statistics.
        """
        if not design.vectorizable:
            return self._cpu_fallback(design)

        torch = self._torch
        timer = Timer(sync_cuda=self._device.startswith('cuda'))
        timer.start()

        n_pop = design.population.size
        n = design.sample_size
        trials = design.trials
        name = design.statistic_name

        if trials > 0 and name != 'mean' and n < 2:
            raise InsufficientDataError(
                f"statistic {name!r} requires sample_size >= 2, got {n}",
                n=n,
                required=2,
            )

        values = torch.as_tensor(
            design.population.values, dtype=self._dtype, device=self._device,
        )
        seed = _torch_seed(design.seed)
        gen = torch.Generator(device=self._device)
        gen.manual_seed(seed)
        host_rng = np.random.default_rng(seed)

        dense = not design.replace and n * DENSE_FRACTION >= n_pop
        width = n_pop if dense else n
        rows = max(1, min(trials, BATCH_ELEMENTS // max(width, 1)))
        t = np.empty(trials, dtype=np.float64)

        with timer.section('sampling'):
            for start in range(0, trials, rows):
                b = min(rows, trials - start)
                if design.replace:
                    idx = torch.randint(
                        n_pop, (b, n), generator=gen, device=self._device,
                    )
                elif dense:
                    keys = torch.rand(b, n_pop, generator=gen, device=self._device)
                    idx = torch.argsort(keys, dim=1)[:, :n]
                else:
                    idx = torch.as_tensor(
                        draw_index_matrix(n_pop, n, b, False, host_rng),
                        device=self._device,
                    )
                stats = _batched_statistic(values[idx], name)
                t[start:start + b] = stats.double().cpu().numpy()

        with timer.section('summary_statistics'):
            summary = summarize(t) if trials > 0 else None

        timer.stop()

        params = SamplingParams(
            distribution=t,
            trials=trials,
            sample_size=n,
            replace=design.replace,
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

    def _cpu_fallback(self, design: ExperimentDesign) -> Result[SamplingParams]:
        from pysampling.montecarlo.backends.cpu import CPUExperimentBackend

        logger.debug(
            "statistic %r has no batched form, running on CPU",
            design.statistic_name,
        )
        result = CPUExperimentBackend().solve(design)

        return Result(
            params=result.params,
            info=result.info,
            timing=result.timing,
            backend_name=self.name + " (cpu_fallback)",
            warnings=result.warnings + (
                f"statistic {design.statistic_name!r} cannot run on GPU; "
                f"computed on CPU",
            ),
        )


def _batched_statistic(samples, name: str):
    """Reduce a (rows, n) tensor to one statistic per row."""
    if name == 'mean':
        return samples.mean(dim=1)
    if name == 'sd':
        return samples.std(dim=1, correction=1)
    if name == 'var':
        return samples.var(dim=1, correction=1)
    if name == 'se':
        return samples.std(dim=1, correction=1) / (samples.shape[1] ** 0.5)
    raise ValueError(f"No batched form for statistic {name!r}")


def _torch_seed(seed: SeedLike) -> int:
    """Derive a torch seed from an int, a numpy Generator, or fresh entropy."""
    if isinstance(seed, np.random.Generator):
        return int(seed.integers(0, 2**63 - 1))
    if seed is None:
        return int(np.random.SeedSequence().generate_state(1, dtype=np.uint64)[0] >> 1)
    return int(seed)

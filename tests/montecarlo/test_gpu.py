"""
Tests for the GPU experiment backend.

Batched statistics (mean, sd, var, se) run on device; anything else
falls back to the CPU backend. Skipped if no GPU (CUDA or MPS) is
available.
"""

import numpy as np
import pytest

from pysampling.core.exceptions import InsufficientDataError, InvalidSizeError
from pysampling.montecarlo import run


@pytest.fixture
def gpu_available():
    """Skip if no GPU is available."""
    try:
        import torch
        has_cuda = torch.cuda.is_available()
        has_mps = hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
        if not (has_cuda or has_mps):
            pytest.skip("No GPU available")
        return 'cuda' if has_cuda else 'mps'
    except ImportError:
        pytest.skip("PyTorch not installed")


class TestGPUExperiment:

    def test_mean_distribution(self, gpu_available, integer_population):
        result = run(integer_population, 50, 5000, seed=42, backend='gpu')
        assert result.distribution.shape == (5000,)
        assert result.backend_name.startswith(f'gpu_{gpu_available}')
        assert result.mean == pytest.approx(500.5, abs=2.5)
        assert result.std_dev == pytest.approx(
            result.theoretical_standard_error(), rel=0.06,
        )

    def test_without_replacement_distinct(self, gpu_available):
        # sd of a size-10 sample of 0..9 without replacement is constant
        result = run(np.arange(10.0), 10, 20, statistic='sd', seed=0, backend='gpu')
        np.testing.assert_allclose(
            result.distribution, np.std(np.arange(10.0), ddof=1), rtol=1e-5,
        )

    def test_small_sample_from_large_population(self, gpu_available, normal_population):
        result = run(normal_population, 50, 2000, seed=9, backend='gpu')
        assert result.distribution.shape == (2000,)
        assert result.mean == pytest.approx(normal_population.mean(), abs=0.5)
        assert result.std_dev == pytest.approx(
            result.theoretical_standard_error(), rel=0.08,
        )

    def test_with_replacement(self, gpu_available):
        result = run([1.0, 2.0, 3.0], 30, 100, replace=True, seed=0, backend='gpu')
        assert result.distribution.shape == (100,)
        assert ((result.distribution >= 1.0) & (result.distribution <= 3.0)).all()

    def test_seed_reproducibility(self, gpu_available, normal_population):
        a = run(normal_population, 40, 300, seed=123, backend='gpu')
        b = run(normal_population, 40, 300, seed=123, backend='gpu')
        np.testing.assert_array_equal(a.distribution, b.distribution)

    def test_zero_trials(self, gpu_available, integer_population):
        result = run(integer_population, 10, 0, backend='gpu')
        assert result.distribution.shape == (0,)

    def test_sd_needs_two(self, gpu_available, integer_population):
        with pytest.raises(InsufficientDataError):
            run(integer_population, 1, 10, statistic='sd', backend='gpu')

    def test_oversize(self, gpu_available, integer_population):
        with pytest.raises(InvalidSizeError):
            run(integer_population, 1001, 10, backend='gpu')


class TestGPUFallback:

    def test_custom_statistic_falls_back(self, gpu_available, integer_population):
        def sample_range(sample):
            return sample.max() - sample.min()

        cpu = run(integer_population, 20, 100, statistic=sample_range, seed=1, backend='cpu')
        gpu = run(integer_population, 20, 100, statistic=sample_range, seed=1, backend='gpu')

        np.testing.assert_array_equal(gpu.distribution, cpu.distribution)
        assert 'cpu_fallback' in gpu.backend_name
        assert gpu._result.has_warning('cannot run on GPU')

    def test_median_falls_back(self, gpu_available, integer_population):
        result = run(integer_population, 20, 10, statistic='median', seed=1, backend='gpu')
        assert 'cpu_fallback' in result.backend_name

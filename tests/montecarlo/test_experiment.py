"""
Tests for run(): distribution length, determinism, error propagation,
and the statistical behaviour of the sampling distribution of the mean
(law of large numbers, sigma / sqrt(n) spread).
"""

import logging

import numpy as np
import pytest

from pysampling import Population
from pysampling.core.exceptions import (
    EmptyInputError,
    InsufficientDataError,
    InvalidSizeError,
    ValidationError,
)
from pysampling.descriptive import confidence_interval_95, contains
from pysampling.montecarlo import (
    ExperimentDesign,
    coverage_rate,
    run,
    summarize,
)


# ---------------------------------------------------------------------------
# Shape and bookkeeping
# ---------------------------------------------------------------------------

class TestDistributionShape:

    @pytest.mark.parametrize("trials", [1, 10, 250])
    def test_length_equals_trials(self, integer_population, trials):
        result = run(integer_population, 20, trials, seed=1)
        assert result.distribution.shape == (trials,)
        assert len(result) == trials
        assert result.trials == trials

    def test_zero_trials(self, integer_population):
        result = run(integer_population, 20, 0, seed=1)
        assert result.distribution.shape == (0,)
        with pytest.raises(EmptyInputError):
            result.summary

    def test_metadata(self, integer_population):
        result = run(integer_population, 20, 5, replace=True, statistic="sd", seed=1)
        assert result.info == {
            "sample_size": 20,
            "trials": 5,
            "replace": True,
            "statistic": "sd",
            "population_size": 1000,
        }
        assert result.backend_name == "cpu_experiment"
        assert "sampling" in result.timing
        assert "total_seconds" in result.timing
        assert result.warnings == ()

    def test_accepts_prebuilt_design(self, integer_population):
        design = ExperimentDesign.for_experiment(integer_population, 10, 30, seed=4)
        a = run(design)
        b = run(integer_population, 10, 30, seed=4)
        np.testing.assert_array_equal(a.distribution, b.distribution)

    def test_missing_arguments(self, integer_population):
        with pytest.raises(ValidationError, match="required"):
            run(integer_population, 10)

    def test_repr(self, integer_population):
        text = repr(run(integer_population, 10, 3, seed=0))
        assert "trials=3" in text
        assert "'mean'" in text


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

class TestDeterminism:

    def test_same_seed_same_distribution(self, normal_population):
        a = run(normal_population, 50, 500, seed=42)
        b = run(normal_population, 50, 500, seed=42)
        np.testing.assert_array_equal(a.distribution, b.distribution)

    def test_different_seed_differs(self, normal_population):
        a = run(normal_population, 50, 200, seed=42)
        b = run(normal_population, 50, 200, seed=43)
        assert not np.array_equal(a.distribution, b.distribution)

    def test_with_replacement_reproducible(self, normal_population):
        a = run(normal_population, 30, 100, replace=True, seed=9)
        b = run(normal_population, 30, 100, replace=True, seed=9)
        np.testing.assert_array_equal(a.distribution, b.distribution)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:

    def test_invalid_seed_fails_before_sampling(self, integer_population):
        with pytest.raises(ValidationError, match="seed"):
            ExperimentDesign.for_experiment(integer_population, 10, 5, seed=-1)

    def test_oversize_without_replacement(self, integer_population):
        with pytest.raises(InvalidSizeError):
            run(integer_population, 1001, 10)

    def test_oversize_with_replacement_allowed(self):
        result = run([1.0, 2.0, 3.0], 10, 5, replace=True, seed=0)
        assert result.distribution.shape == (5,)

    def test_negative_trials(self, integer_population):
        with pytest.raises(ValidationError):
            run(integer_population, 10, -1)

    def test_statistic_error_propagates(self, integer_population):
        calls = []

        def failing(sample):
            calls.append(1)
            if len(calls) == 3:
                raise RuntimeError("bad trial")
            return 0.0

        with pytest.raises(RuntimeError, match="bad trial"):
            run(integer_population, 10, 100, statistic=failing, seed=0)
        assert len(calls) == 3

    def test_sd_of_single_element_samples(self, integer_population):
        with pytest.raises(InsufficientDataError):
            run(integer_population, 1, 10, statistic="sd")

    def test_non_scalar_statistic(self, integer_population):
        with pytest.raises(ValidationError, match="single real number"):
            run(integer_population, 10, 5, statistic=lambda s: s[:2])

    def test_unknown_backend(self, integer_population):
        with pytest.raises(ValidationError, match="backend"):
            run(integer_population, 10, 5, backend="tpu")


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

class TestStatistics:

    def test_custom_statistic(self, integer_population):
        def sample_max(sample):
            return sample.max()

        result = run(integer_population, 10, 50, statistic=sample_max, seed=0)
        assert result.statistic == "sample_max"
        assert (result.distribution >= 10).all()

    def test_boolean_statistic_stored_as_float(self, integer_population):
        result = run(
            integer_population, 10, 20, statistic=lambda s: bool(s[0] > 500), seed=0,
        )
        assert set(np.unique(result.distribution)) <= {0.0, 1.0}

    def test_full_population_mean_is_exact(self, integer_population):
        result = run(integer_population, 1000, 5, seed=0)
        np.testing.assert_allclose(result.distribution, 500.5)

    def test_law_of_large_numbers(self, normal_population):
        """Mean of sample means approaches mu as trials grows."""
        mu = normal_population.mean()

        def avg_error(trials):
            errors = [
                abs(run(normal_population, 25, trials, seed=s).mean - mu)
                for s in range(20)
            ]
            return np.mean(errors)

        small, large = avg_error(20), avg_error(2000)
        assert large < small
        # sigma / sqrt(25 * 2000) ≈ 0.067
        assert large < 0.2

    def test_spread_matches_standard_error(self, normal_population):
        """SD of sample means ≈ sigma / sqrt(n)."""
        n = 100
        result = run(normal_population, n, 4000, seed=7)
        expected = normal_population.std() / np.sqrt(n)
        assert result.std_dev == pytest.approx(expected, rel=0.08)
        assert result.theoretical_standard_error(fpc=False) == pytest.approx(expected)

    def test_integers_one_to_thousand(self, integer_population):
        """5000 samples of size 50 from 1..1000."""
        result = run(integer_population, 50, 5000, seed=2024)
        s = summarize(result.distribution)
        assert s.n == 5000
        assert s.mean == pytest.approx(500.5, abs=1.0)
        assert s.std_dev == pytest.approx(288.97 / np.sqrt(50), rel=0.15)
        # finite population correction tightens the prediction
        assert s.std_dev == pytest.approx(result.theoretical_standard_error(), rel=0.06)

    def test_clt_on_skewed_population(self, skewed_population):
        """Sample means of a skewed variable are far less skewed."""
        from scipy import stats as sp_stats

        result = run(skewed_population, 100, 3000, seed=11)
        assert abs(sp_stats.skew(skewed_population.values)) > 1.5
        assert abs(sp_stats.skew(result.distribution)) < 0.5

    def test_coverage_via_statistic(self, normal_population):
        """Coverage indicator as a statistic, aggregated with coverage_rate."""
        mu = normal_population.mean()
        result = run(
            normal_population, 100, 2500,
            statistic=lambda s: contains(confidence_interval_95(s), mu),
            seed=3,
        )
        assert coverage_rate(result.distribution) == pytest.approx(0.95, abs=0.02)


class TestDescribe:

    def test_mean_report(self, integer_population):
        text = run(integer_population, 50, 100, seed=0).describe()
        assert "SAMPLING DISTRIBUTION OF THE MEAN" in text
        assert "theoretical std. error" in text
        assert "without replacement" in text

    def test_zero_trials_report(self, integer_population):
        text = run(integer_population, 50, 0).describe()
        assert "No trials run." in text

    def test_other_statistic_has_no_theory_line(self, integer_population):
        text = run(integer_population, 50, 10, statistic="median", seed=0).describe()
        assert "MEDIAN" in text
        assert "theoretical" not in text


class TestLogging:

    def test_run_logs_progress_at_info(self, integer_population, caplog):
        caplog.set_level(logging.INFO, logger="pysampling")
        run(integer_population, 10, 20, seed=0)
        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert any("running 20 trials of mean(n=10)" in m for m in messages)
        assert any(m.startswith("finished 20 trials") for m in messages)

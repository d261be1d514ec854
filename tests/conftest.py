"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pysampling import Population


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def integer_population():
    """Integers 1..1000: mean 500.5, population sd ≈ 288.67."""
    return Population.from_array(np.arange(1, 1001), name="k")


@pytest.fixture
def normal_population(rng):
    """Synthetic normal population with known parameters (mu=100, sigma=15)."""
    values = rng.normal(100.0, 15.0, size=20000)
    return Population.from_array(values, name="score")


@pytest.fixture
def skewed_population(rng):
    """Right-skewed population, like yearly drinking days in survey data."""
    values = rng.exponential(scale=50.0, size=10000)
    return Population.from_array(values, name="AlcoholYear")

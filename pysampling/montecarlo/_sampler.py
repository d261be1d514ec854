"""
Random draws from a finite population.

Without replacement every index in a sample is distinct and every subset
of the requested size is equally likely; with replacement each index is
an independent uniform draw. All randomness comes from a
numpy.random.Generator supplied by the caller (or built from a seed), so
a fixed seed reproduces the same samples.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysampling.core.exceptions import InvalidSizeError
from pysampling.core.population import Population, as_population
from pysampling.core.validation import check_positive_int

SeedLike = int | np.random.Generator | None


def check_seed(seed: SeedLike) -> SeedLike:
    """
    Verify seed is None, a Generator, or a non-negative integer.

    Raises:
        ValidationError: For any other value.
    """
    if seed is None or isinstance(seed, np.random.Generator):
        return seed
    return check_positive_int(seed, 'seed', allow_zero=True)


def resolve_rng(seed: SeedLike) -> np.random.Generator:
    """Generators pass through untouched; anything else seeds a new one."""
    seed = check_seed(seed)
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def check_sample_size(size: int, population_size: int, replace: bool) -> None:
    """
    Raises:
        InvalidSizeError: If size > population_size without replacement.
    """
    if not replace and size > population_size:
        raise InvalidSizeError(
            f"cannot draw {size} elements without replacement from a "
            f"population of {population_size}",
            size=size,
            population_size=population_size,
        )


def draw_indices(
    population_size: int,
    size: int,
    replace: bool,
    rng: np.random.Generator,
) -> NDArray[np.intp]:
    """
    Indices of one sample, shape (size,).

    Generator.choice without replacement runs in O(size) for large
    populations, so repeated draws never rescan the population.
    """
    check_sample_size(size, population_size, replace)
    return rng.choice(population_size, size=size, replace=replace)


def draw_index_matrix(
    population_size: int,
    size: int,
    rows: int,
    replace: bool,
    rng: np.random.Generator,
) -> NDArray[np.intp]:
    """
    Indices of `rows` independent samples, shape (rows, size).

    Each row costs O(size); without replacement no index repeats within
    a row.
    """
    check_sample_size(size, population_size, replace)
    if replace:
        return rng.integers(0, population_size, size=(rows, size))
    out = np.empty((rows, size), dtype=np.intp)
    for r in range(rows):
        out[r] = rng.choice(population_size, size=size, replace=False)
    return out


def draw(
    population: Population | ArrayLike,
    size: int,
    replace: bool = False,
    *,
    seed: SeedLike = None,
) -> NDArray[np.floating[Any]]:
    """
    Draw one random sample from a population.

    Parameters
    ----------
    population : Population or array-like
        Non-empty, finite, 1D data. Never modified.
    size : int
        Sample size, >= 1.
    replace : bool
        Sample with replacement. Without replacement size must not
        exceed the population size.
    seed : int, numpy.random.Generator or None
        Source of randomness.

    Returns
    -------
    ndarray of shape (size,), a fresh copy of the selected values.

    Raises
    ------
    InvalidSizeError
        size > len(population) with replace=False.
    ValidationError
        size is not a positive integer, or the population is invalid.
    """
    pop = as_population(population)
    size = check_positive_int(size, 'size')
    rng = resolve_rng(seed)
    return pop.values[draw_indices(pop.size, size, replace, rng)]

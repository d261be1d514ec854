"""
Population: the finite set of observations that experiments sample from.

A Population holds one measured variable across every individual of a
reference dataset. It is immutable for its whole lifetime and never
contains missing values: cleaning happens in the loaders below, once,
before any sampler sees the data.

Usage:
    from pysampling import Population

    pop = Population.from_array(heights)
    pop = Population.from_dataframe(nhanes, "Height")
    pop = Population.from_file("nhanes.csv", "AlcoholYear")

    len(pop), pop.mean(), pop.std()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysampling.core.exceptions import ValidationError
from pysampling.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_min_samples,
)

if TYPE_CHECKING:
    import pandas as pd


def drop_missing(values: NDArray) -> tuple[NDArray, int]:
    """
    Remove NaN entries from a 1D array.

    Returns:
        (clean values, number of entries removed)
    """
    mask = np.isnan(values)
    return values[~mask], int(mask.sum())


@dataclass(frozen=True, eq=False)
class Population:
    """
    Immutable, ordered, finite sequence of real observations.

    Construct via the factory classmethods, not directly. The stored array
    is a private read-only copy, so neither the caller nor a sampler can
    mutate it.
    """
    _values: NDArray[np.floating[Any]]
    _name: str | None = None
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Access ===

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        """Read-only view of the observations."""
        return self._values

    @property
    def name(self) -> str | None:
        """Variable name, if known."""
        return self._name

    @property
    def size(self) -> int:
        return int(self._values.shape[0])

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index):
        return self._values[index]

    def __iter__(self):
        return iter(self._values)

    def __repr__(self) -> str:
        label = f"{self._name!r}, " if self._name else ""
        return f"Population({label}size={self.size})"

    # === Population parameters ===

    def mean(self) -> float:
        """Population mean (mu)."""
        return float(np.mean(self._values))

    def std(self, ddof: int = 0) -> float:
        """
        Population standard deviation (sigma).

        ddof defaults to 0: the population is the whole set, not a sample.
        """
        return float(np.std(self._values, ddof=ddof))

    # === Factory Methods ===

    @classmethod
    def from_array(
        cls,
        values: ArrayLike,
        name: str | None = None,
        *,
        dropna: bool = False,
        source: str = 'array',
        source_path: str | None = None,
    ) -> Population:
        """
        Construct from an array-like of numbers.

        Args:
            values: 1D numeric data.
            name: Optional variable name.
            dropna: Remove NaN entries instead of rejecting them.
            source: Provenance recorded in metadata.
            source_path: File the values were read from, if any.

        Raises:
            ValidationError: Non-numeric, non-finite (with dropna=False)
                or empty input.
            DimensionError: Input is not 1D.
        """
        arr = check_array(values, 'population').astype(np.float64, copy=True)
        check_1d(arr, 'population')

        n_missing = 0
        if dropna:
            arr, n_missing = drop_missing(arr)
        check_finite(arr, 'population')
        check_min_samples(arr, 1, 'population')

        metadata = {
            'n_observations': int(arr.shape[0]),
            'n_missing': n_missing,
            'source': source,
        }
        if source_path is not None:
            metadata['source_path'] = source_path

        arr.flags.writeable = False
        return cls(_values=arr, _name=name, _metadata=metadata)

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        column: str,
        *,
        dropna: bool = True,
        source_path: str | None = None,
    ) -> Population:
        """
        Construct from one column of a pandas DataFrame.

        Missing values are dropped by default, which is the cleaning step
        every experiment on survey data needs.
        """
        if column not in df.columns:
            raise ValidationError(
                f"DataFrame has no column {column!r}. "
                f"Available: {list(df.columns)}"
            )
        try:
            values = df[column].to_numpy(dtype=np.float64, na_value=np.nan)
        except (ValueError, TypeError) as e:
            raise ValidationError(
                f"column {column!r}: cannot convert to numeric: {e}"
            ) from e

        return cls.from_array(
            values, name=column, dropna=dropna,
            source='dataframe', source_path=source_path,
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        column: str | None = None,
        *,
        dropna: bool = True,
    ) -> Population:
        """
        Construct from a file (CSV, TSV, NPY).

        Args:
            path: File to read.
            column: Column to use. Required for CSV/TSV; ignored for NPY.
            dropna: Remove missing values.
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in ('.csv', '.tsv'):
            if column is None:
                raise ValidationError(
                    f"column is required when reading {suffix} files"
                )
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            df = pd.read_csv(path, sep=sep)
            return cls.from_dataframe(
                df, column, dropna=dropna, source_path=str(path),
            )
        elif suffix == '.npy':
            data = np.load(path)
            return cls.from_array(
                data, name=column or path.stem, dropna=dropna,
                source='npy', source_path=str(path),
            )
        else:
            raise ValidationError(f"Unknown file format: {suffix}")


def as_population(data: Population | ArrayLike) -> Population:
    """Wrap raw arrays in a Population; pass Populations through."""
    if isinstance(data, Population):
        return data
    return Population.from_array(data)

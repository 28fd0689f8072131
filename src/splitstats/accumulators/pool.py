"""Pools of per-partition scalar values and their percentile tables.

A pool holds one value per partition, so it is bounded by the number of
partitions and not by the number of rows. Percentiles are therefore
computed exactly over the full pool.
"""
from __future__ import annotations

from typing import Iterable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

PERCENTILE_PROBS: tuple[float, ...] = tuple(
    np.round(np.linspace(0.0, 1.0, 101), 2).tolist()
)


class ValuePool(BaseModel):
    """An ordered collection of scalar values, one per partition."""

    model_config = ConfigDict(frozen=True)

    values: tuple[float, ...] = Field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """Whether the pool holds no value."""
        return len(self.values) == 0


class PercentileTable(BaseModel):
    """Quantile estimates at 1% steps, from the 0th to the 100th percentile."""

    model_config = ConfigDict(frozen=True)

    probs: tuple[float, ...] = PERCENTILE_PROBS
    values: tuple[float, ...]


def combine_pools(a: ValuePool, b: ValuePool) -> ValuePool:
    """Concatenate two value pools.

    Args:
        a (ValuePool): The first pool.
        b (ValuePool): The second pool.

    Returns:
        ValuePool: The pool holding the values of both.
    """
    return ValuePool(values=a.values + b.values)


def pool_values(values: Iterable[float]) -> ValuePool:
    """Create a pool from scalar values."""
    return ValuePool(values=tuple(float(v) for v in values))


def percentile_table(pool: ValuePool) -> PercentileTable:
    """Compute the 101-point percentile table of a value pool.

    Quantiles are estimated by linear interpolation between the order
    statistics. Missing (:code:`NaN`) values are ignored, and a pool without
    any valid value yields a table of :code:`NaN` values.

    Args:
        pool (ValuePool): The value pool.

    Returns:
        PercentileTable: The percentile table.
    """
    arr = np.asarray(pool.values, dtype=np.float64)
    arr = arr[~np.isnan(arr)]

    if arr.size == 0:
        return PercentileTable(values=(float("nan"),) * len(PERCENTILE_PROBS))

    quantiles = np.quantile(arr, PERCENTILE_PROBS, method="linear")
    return PercentileTable(values=tuple(quantiles.tolist()))

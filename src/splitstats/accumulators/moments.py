"""Running central moments of numeric columns.

Moments are accumulated with a numerically stable one-pass update and
merged with the pairwise update formulas of Bennett et al., "Numerically
stable, single-pass, parallel statistics algorithms" (CLUSTER 2009). Both
avoid the cancellation errors of naive sum-of-powers formulas, so the
statistics derived from the merged moments are independent (up to floating
point tolerance) of how the values were split into partitions and in which
order the partial results were combined.
"""
from __future__ import annotations

import math
from functools import reduce
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class MomentAccumulator(BaseModel):
    """Central moment sums of a set of values.

    An accumulator with :code:`n == 0` is the identity element of
    :func:`combine_moments`.
    """

    model_config = ConfigDict(frozen=True)

    n: int = Field(default=0, ge=0)
    """The number of values."""

    mean: float = 0.0
    """The mean of the values."""

    m2: float = 0.0
    """The sum of squared deviations from the mean."""

    m3: float = 0.0
    """The sum of cubed deviations from the mean."""

    m4: float = 0.0
    """The sum of deviations from the mean to the fourth power."""

    @property
    def is_empty(self) -> bool:
        """Whether no values have been accumulated."""
        return self.n == 0


class MomentStatistics(BaseModel):
    """Reportable statistics derived from a :class:`MomentAccumulator`.

    Undefined statistics are reported as :code:`NaN`.
    """

    model_config = ConfigDict(frozen=True)

    mean: float
    variance: float
    skewness: float
    kurtosis: float


def compute_moments(values: Iterable[float]) -> MomentAccumulator:
    """Compute the central moment sums of the given values in a single pass.

    Args:
        values (Iterable[float]): The non-missing values.

    Returns:
        MomentAccumulator: The accumulated moments.
    """
    n, mean, m2, m3, m4 = 0, 0.0, 0.0, 0.0, 0.0

    for x in values:
        n1 = n
        n += 1
        delta = float(x) - mean
        delta_n = delta / n
        delta_n2 = delta_n * delta_n
        term1 = delta * delta_n * n1

        mean += delta_n
        # update order matters, higher moments read the old lower ones
        m4 += (
            term1 * delta_n2 * (n * n - 3 * n + 3)
            + 6 * delta_n2 * m2
            - 4 * delta_n * m3
        )
        m3 += term1 * delta_n * (n - 2) - 3 * delta_n * m2
        m2 += term1

    return MomentAccumulator(n=n, mean=mean, m2=m2, m3=m3, m4=m4)


def combine_moments(
    a: MomentAccumulator, b: MomentAccumulator
) -> MomentAccumulator:
    """Merge the moments of two disjoint groups of values.

    Args:
        a (MomentAccumulator): The moments of the first group.
        b (MomentAccumulator): The moments of the second group.

    Returns:
        MomentAccumulator: The moments of the union of both groups.
    """
    if b.is_empty:
        return a
    if a.is_empty:
        return b

    na, nb = a.n, b.n
    n = na + nb
    delta = b.mean - a.mean
    delta2 = delta * delta

    mean = a.mean + delta * nb / n
    m2 = a.m2 + b.m2 + delta2 * na * nb / n
    m3 = (
        a.m3
        + b.m3
        + delta2 * delta * na * nb * (na - nb) / (n * n)
        + 3 * delta * (na * b.m2 - nb * a.m2) / n
    )
    m4 = (
        a.m4
        + b.m4
        + delta2 * delta2 * na * nb * (na * na - na * nb + nb * nb) / n**3
        + 6 * delta2 * (na * na * b.m2 + nb * nb * a.m2) / (n * n)
        + 4 * delta * (na * b.m3 - nb * a.m3) / n
    )

    return MomentAccumulator(n=n, mean=mean, m2=m2, m3=m3, m4=m4)


def combine_many_moments(
    accumulators: Iterable[MomentAccumulator],
) -> MomentAccumulator:
    """Fold any number of moment accumulators into one.

    Args:
        accumulators (Iterable[MomentAccumulator]): The accumulators.

    Returns:
        MomentAccumulator: The combined accumulator.
    """
    return reduce(combine_moments, accumulators, MomentAccumulator())


def moments_to_statistics(acc: MomentAccumulator) -> MomentStatistics:
    """Derive mean, variance, skewness and kurtosis from moment sums.

    The variance is the unbiased sample variance and undefined for less than
    two values. Skewness and (excess) kurtosis are undefined when all values
    are equal.

    Args:
        acc (MomentAccumulator): The accumulated moments.

    Returns:
        MomentStatistics: The derived statistics.
    """
    n = acc.n
    mean = acc.mean if n > 0 else math.nan
    variance = acc.m2 / (n - 1) if n > 1 else math.nan

    if n > 0 and acc.m2 > 0:
        skewness = math.sqrt(n) * acc.m3 / acc.m2**1.5
        kurtosis = n * acc.m4 / (acc.m2 * acc.m2) - 3
    else:
        skewness = kurtosis = math.nan

    return MomentStatistics(
        mean=mean, variance=variance, skewness=skewness, kurtosis=kurtosis
    )

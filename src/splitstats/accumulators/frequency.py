"""Capped category frequency tables.

A frequency table tracks at most :code:`cap` distinct categories. Once the
cap is reached, newly seen categories are dropped instead of evicting or
merging existing ones. Consequently, when the cap binds, the retained
categories depend on the order in which partitions are combined. The table
remembers the total number of observed rows, so truncation can always be
detected from the table alone.
"""
from __future__ import annotations

from typing import Any, Hashable, Iterable

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CAP = 10_000


class FrequencyAccumulator(BaseModel):
    """Category counts of a categorical column."""

    model_config = ConfigDict(frozen=True)

    counts: dict[Hashable, int] = Field(default_factory=dict)
    """The counts of the tracked categories, in order of first appearance."""

    na_count: int = Field(default=0, ge=0)
    """The number of missing values."""

    n_obs: int = Field(default=0, ge=0)
    """The total number of observed rows, missing and dropped ones included."""

    cap: int = Field(default=DEFAULT_CAP, gt=0)
    """The maximum number of distinct categories tracked."""

    @property
    def is_empty(self) -> bool:
        """Whether no row has been observed."""
        return self.n_obs == 0

    @property
    def complete(self) -> bool:
        """Whether every non-missing row is accounted for in :code:`counts`."""
        return self.n_obs == sum(self.counts.values()) + self.na_count


def _add_counts(
    counts: dict[Hashable, int],
    items: Iterable[tuple[Hashable, int]],
    cap: int,
) -> dict[Hashable, int]:
    counts = dict(counts)
    for category, count in items:
        if category in counts:
            counts[category] += count
        elif len(counts) < cap:
            counts[category] = count
    return counts


def tabulate(
    values: Iterable[Any], na_count: int = 0, cap: int = DEFAULT_CAP
) -> FrequencyAccumulator:
    """Build the frequency table of a set of non-missing values.

    Args:
        values (Iterable[Any]): The non-missing values.
        na_count (int): The number of missing values alongside them.
        cap (int): The maximum number of distinct categories to track.

    Returns:
        FrequencyAccumulator: The frequency table.
    """
    values = list(values)
    counts = _add_counts({}, ((v, 1) for v in values), cap)
    return FrequencyAccumulator(
        counts=counts,
        na_count=na_count,
        n_obs=len(values) + na_count,
        cap=cap,
    )


def combine_frequencies(
    a: FrequencyAccumulator, b: FrequencyAccumulator
) -> FrequencyAccumulator:
    """Merge two frequency tables.

    Counts of shared categories are summed. Categories only seen in
    :code:`b` are inserted while the merged table is below the cap.

    Args:
        a (FrequencyAccumulator): The first table.
        b (FrequencyAccumulator): The second table.

    Returns:
        FrequencyAccumulator: The merged table.
    """
    if b.is_empty:
        return a
    if a.is_empty and a.cap >= b.cap:
        return b

    cap = min(a.cap, b.cap)
    return FrequencyAccumulator(
        counts=_add_counts(a.counts, b.counts.items(), cap),
        na_count=a.na_count + b.na_count,
        n_obs=a.n_obs + b.n_obs,
        cap=cap,
    )

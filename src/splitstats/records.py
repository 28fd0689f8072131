"""The records produced by the attribute engine.

The main record is :class:`GlobalAttributes`, holding all dataset-level
attributes computed in a single pass. Per-column summaries are represented
by a discriminated union of :class:`NumericSummary`,
:class:`CategoricalSummary` and :class:`DatetimeSummary`.
"""
from __future__ import annotations

from typing import Any, Hashable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from splitstats.accumulators import MomentStatistics, PercentileTable


class NumericSummary(BaseModel):
    """Summary of a numeric column."""

    model_config = ConfigDict(frozen=True)

    type: Literal["numeric"] = "numeric"

    na_count: int
    """The number of missing values."""

    stats: MomentStatistics
    """Mean, variance, skewness and kurtosis of the non-missing values."""

    range: tuple[Any, Any]
    """The smallest and largest value, :code:`None` if all values are missing."""


class CategoricalSummary(BaseModel):
    """Summary of a categorical column."""

    model_config = ConfigDict(frozen=True)

    type: Literal["categorical"] = "categorical"

    na_count: int
    """The number of missing values."""

    freq_table: dict[Hashable, int]
    """The number of occurrences of each tracked category."""

    complete: bool
    """Whether the frequency table covers all non-missing values.

    False if the column has more distinct categories than could be tracked.
    """


class DatetimeSummary(BaseModel):
    """Summary of a datetime column."""

    model_config = ConfigDict(frozen=True)

    type: Literal["datetime"] = "datetime"

    na_count: int
    """The number of missing values."""

    range: tuple[Any, Any]
    """The earliest and latest value, :code:`None` if all values are missing."""


SummaryEntry = Annotated[
    Union[NumericSummary, CategoricalSummary, DatetimeSummary],
    Field(discriminator="type"),
]


class GlobalAttributes(BaseModel):
    """Dataset-level attributes computed from all partitions.

    Only the attributes that were needed are set, all others are
    :code:`None`. Field names follow the attribute names used by the
    dataset descriptor.
    """

    model_config = ConfigDict(frozen=True)

    totObjectSize: None | float = None
    """The summed in-memory size of all partitions in bytes."""

    nDiv: None | int = None
    """The number of partitions."""

    nRow: None | int = None
    """The total number of rows."""

    keys: None | list[Any] = None
    """The partition keys."""

    keyHashes: None | list[str] = None
    """The fingerprints of the partition keys, in the same order as :code:`keys`."""

    splitSizeDistn: None | PercentileTable = None
    """The percentile table of the partition sizes."""

    splitRowDistn: None | PercentileTable = None
    """The percentile table of the partition row counts."""

    summary: None | dict[str, SummaryEntry] = None
    """The per-column summaries, in column order."""

    def to_attributes(self) -> dict[str, Any]:
        """Get the computed attributes as a plain mapping.

        Returns:
            dict[str, Any]: The attributes that are set, keyed by name.
        """
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }

"""Provides aggregators for the per-column summaries of tabular datasets.

Each aggregator handles one column family and emits one contribution per
column of that family, tagged with the column name so that every column is
combined independently:

- :class:`QuantSummaryAggregator`: missing count, central moments and range
  of numeric columns,
- :class:`CategSummaryAggregator`: missing count and capped frequency table
  of categorical columns,
- :class:`DatetimeSummaryAggregator`: missing count and range of datetime
  columns,
- :class:`MissingSummaryAggregator`: missing count of columns that hold no
  typed value in a partition. Such columns only get their type from other
  partitions, so their counts are folded into the column's summary when the
  summaries are assembled.
"""
from __future__ import annotations

from typing import Iterator

from datasets import ClassLabel
from pydantic import BaseModel, ConfigDict, Field

from splitstats.accumulators import (
    DEFAULT_CAP,
    FrequencyAccumulator,
    MomentAccumulator,
    RangeAccumulator,
    combine_frequencies,
    combine_moments,
    combine_range,
    compute_moments,
    compute_range,
    moments_to_statistics,
    tabulate,
)
from splitstats.aggregators.base import (
    BaseAttributeAggregator,
    BaseAttributeAggregatorConfig,
    Contribution,
    PartitionContext,
)
from splitstats.common.features import ColumnFamily
from splitstats.common.missing import split_missing
from splitstats.records import (
    CategoricalSummary,
    DatetimeSummary,
    NumericSummary,
)
from splitstats.tags import SUMMARY, AttributeTag


class QuantSummaryAccumulator(BaseModel):
    """Partial summary of a numeric column."""

    model_config = ConfigDict(frozen=True)

    na_count: int = Field(default=0, ge=0)
    moments: MomentAccumulator = MomentAccumulator()
    range: RangeAccumulator = RangeAccumulator()


class DatetimeSummaryAccumulator(BaseModel):
    """Partial summary of a datetime column."""

    model_config = ConfigDict(frozen=True)

    na_count: int = Field(default=0, ge=0)
    range: RangeAccumulator = RangeAccumulator()


class SummaryAggregatorConfig(BaseAttributeAggregatorConfig):
    """Configuration for the numeric and datetime summary aggregators."""


class QuantSummaryAggregator(
    BaseAttributeAggregator[SummaryAggregatorConfig, QuantSummaryAccumulator]
):
    """Summarizes numeric columns."""

    attribute = SUMMARY
    family = ColumnFamily.QUANT

    def initialize(self) -> QuantSummaryAccumulator:
        return QuantSummaryAccumulator()

    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        for column in ctx.columns_of(self.family):
            present, na_count = split_missing(ctx.data[column])
            yield AttributeTag.summary(self.family, column), (
                QuantSummaryAccumulator(
                    na_count=na_count,
                    moments=compute_moments(present),
                    range=compute_range(present),
                )
            )

    def update(
        self,
        val: QuantSummaryAccumulator,
        contribution: QuantSummaryAccumulator,
    ) -> QuantSummaryAccumulator:
        return QuantSummaryAccumulator(
            na_count=val.na_count + contribution.na_count,
            moments=combine_moments(val.moments, contribution.moments),
            range=combine_range(val.range, contribution.range),
        )

    def finalize(self, val: QuantSummaryAccumulator) -> NumericSummary:
        return NumericSummary(
            na_count=val.na_count,
            stats=moments_to_statistics(val.moments),
            range=(val.range.min, val.range.max),
        )


class CategSummaryAggregatorConfig(BaseAttributeAggregatorConfig):
    """Configuration for the :class:`CategSummaryAggregator`."""

    cap: int = Field(default=DEFAULT_CAP, gt=0)
    """The maximum number of distinct categories tracked per column.

    Once reached, newly seen categories are dropped and the summary is
    marked as incomplete.
    """


class CategSummaryAggregator(
    BaseAttributeAggregator[
        CategSummaryAggregatorConfig, FrequencyAccumulator
    ]
):
    """Summarizes categorical columns.

    Class label columns are tabulated by their label names.
    """

    attribute = SUMMARY
    family = ColumnFamily.CATEG

    def initialize(self) -> FrequencyAccumulator:
        return FrequencyAccumulator(cap=self.config.cap)

    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        for column in ctx.columns_of(self.family):
            present, na_count = split_missing(ctx.data[column])

            feature = ctx.features[column]
            if isinstance(feature, ClassLabel):
                # negative labels mark missing values
                labels = [int(v) for v in present]
                na_count += sum(1 for v in labels if v < 0)
                present = [feature.int2str(v) for v in labels if v >= 0]

            yield AttributeTag.summary(self.family, column), tabulate(
                present, na_count=na_count, cap=self.config.cap
            )

    def update(
        self, val: FrequencyAccumulator, contribution: FrequencyAccumulator
    ) -> FrequencyAccumulator:
        return combine_frequencies(val, contribution)

    def finalize(self, val: FrequencyAccumulator) -> CategoricalSummary:
        return CategoricalSummary(
            na_count=val.na_count,
            freq_table=dict(val.counts),
            complete=val.complete,
        )


class DatetimeSummaryAggregator(
    BaseAttributeAggregator[
        SummaryAggregatorConfig, DatetimeSummaryAccumulator
    ]
):
    """Summarizes datetime columns."""

    attribute = SUMMARY
    family = ColumnFamily.DATETIME

    def initialize(self) -> DatetimeSummaryAccumulator:
        return DatetimeSummaryAccumulator()

    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        for column in ctx.columns_of(self.family):
            present, na_count = split_missing(ctx.data[column])
            yield AttributeTag.summary(self.family, column), (
                DatetimeSummaryAccumulator(
                    na_count=na_count, range=compute_range(present)
                )
            )

    def update(
        self,
        val: DatetimeSummaryAccumulator,
        contribution: DatetimeSummaryAccumulator,
    ) -> DatetimeSummaryAccumulator:
        return DatetimeSummaryAccumulator(
            na_count=val.na_count + contribution.na_count,
            range=combine_range(val.range, contribution.range),
        )

    def finalize(self, val: DatetimeSummaryAccumulator) -> DatetimeSummary:
        return DatetimeSummary(
            na_count=val.na_count, range=(val.range.min, val.range.max)
        )



class MissingSummaryAggregator(
    BaseAttributeAggregator[SummaryAggregatorConfig, int]
):
    """Counts the values of columns that are missing throughout a partition."""

    attribute = SUMMARY
    family = ColumnFamily.NULL

    def initialize(self) -> int:
        return 0

    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        for column in ctx.columns_of(self.family):
            yield AttributeTag.summary(self.family, column), len(
                ctx.data[column]
            )

    def update(self, val: int, contribution: int) -> int:
        return val + contribution

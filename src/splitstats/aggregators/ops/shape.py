"""Provides aggregators for the size and shape attributes of a dataset.

These aggregators compute attributes that describe how a dataset is split
into partitions:

- :class:`TotalSizeAggregator` (:code:`totObjectSize`): summed partition sizes,
- :class:`DivisionCountAggregator` (:code:`nDiv`): number of partitions,
- :class:`KeysAggregator` (:code:`keys`): all partition keys,
- :class:`RowCountAggregator` (:code:`nRow`): total number of rows,
- :class:`SplitSizeDistnAggregator` (:code:`splitSizeDistn`): percentile table
  of the partition sizes,
- :class:`SplitRowDistnAggregator` (:code:`splitRowDistn`): percentile table
  of the partition row counts.
"""
from __future__ import annotations

from abc import abstractmethod
from typing import Any, Iterator

from splitstats.accumulators import (
    PercentileTable,
    ValuePool,
    combine_pools,
    percentile_table,
    pool_values,
)
from splitstats.aggregators.base import (
    BaseAttributeAggregator,
    BaseAttributeAggregatorConfig,
    Contribution,
    PartitionContext,
)
from splitstats.tags import AttributeTag


class SumAggregatorConfig(BaseAttributeAggregatorConfig):
    """Configuration for aggregators summing a per-partition quantity."""

    start: float = 0
    """The initial value of the summation. Defaults to 0."""


class _SumAggregator(BaseAttributeAggregator[SumAggregatorConfig, float]):
    """Sums a scalar quantity over all partitions."""

    def initialize(self) -> float:
        return self.config.start

    @abstractmethod
    def extract_value(self, ctx: PartitionContext) -> float:
        """Get the quantity of a single partition."""
        ...

    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        yield AttributeTag(name=self.attribute), self.extract_value(ctx)

    def update(self, val: float, contribution: float) -> float:
        return val + contribution


class TotalSizeAggregator(_SumAggregator):
    """Sums the estimated in-memory size of all partitions."""

    attribute = "totObjectSize"

    def extract_value(self, ctx: PartitionContext) -> float:
        return ctx.size

    def finalize(self, val: float) -> float:
        return float(val)


class DivisionCountAggregator(_SumAggregator):
    """Counts the partitions."""

    attribute = "nDiv"

    def extract_value(self, ctx: PartitionContext) -> int:
        return 1

    def finalize(self, val: float) -> int:
        return int(val)


class RowCountAggregator(_SumAggregator):
    """Counts the rows of the (transformed) row data of all partitions."""

    attribute = "nRow"

    def extract_value(self, ctx: PartitionContext) -> int:
        return ctx.num_rows

    def finalize(self, val: float) -> int:
        return int(val)


class KeysAggregatorConfig(BaseAttributeAggregatorConfig):
    """Configuration for the :class:`KeysAggregator`."""


class KeysAggregator(BaseAttributeAggregator[KeysAggregatorConfig, tuple]):
    """Collects the keys of all partitions.

    Keys are concatenated in the order in which contributions are combined,
    which is not guaranteed to match the storage order of the partitions.
    """

    attribute = "keys"

    def initialize(self) -> tuple:
        return ()

    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        yield AttributeTag(name=self.attribute), (ctx.key,)

    def update(self, val: tuple, contribution: tuple) -> tuple:
        return val + contribution

    def finalize(self, val: tuple) -> list[Any]:
        return list(val)


class DistnAggregatorConfig(BaseAttributeAggregatorConfig):
    """Configuration for aggregators of per-partition value distributions."""


class _DistnAggregator(
    BaseAttributeAggregator[DistnAggregatorConfig, ValuePool]
):
    """Pools a per-partition quantity and reports its percentile table."""

    def initialize(self) -> ValuePool:
        return ValuePool()

    @abstractmethod
    def extract_value(self, ctx: PartitionContext) -> float:
        """Get the quantity of a single partition."""
        ...

    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        yield AttributeTag(name=self.attribute), pool_values(
            [self.extract_value(ctx)]
        )

    def update(self, val: ValuePool, contribution: ValuePool) -> ValuePool:
        return combine_pools(val, contribution)

    def finalize(self, val: ValuePool) -> PercentileTable:
        return percentile_table(val)


class SplitSizeDistnAggregator(_DistnAggregator):
    """Distribution of the estimated in-memory sizes of the partitions."""

    attribute = "splitSizeDistn"

    def extract_value(self, ctx: PartitionContext) -> float:
        return ctx.size


class SplitRowDistnAggregator(_DistnAggregator):
    """Distribution of the row counts of the partitions."""

    attribute = "splitRowDistn"

    def extract_value(self, ctx: PartitionContext) -> float:
        return ctx.num_rows

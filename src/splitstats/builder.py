"""The map stage: local contributions of single partitions.

The :class:`LocalContributionBuilder` turns one partition into the tagged
local contributions of all needed attributes. It holds no state shared
between partitions and never mutates partition data, so it can run on any
number of partitions concurrently.
"""
from __future__ import annotations

from typing import Any, Sequence

from datasets import Features

from splitstats.aggregators import (
    BaseAttributeAggregator,
    Contribution,
    PartitionContext,
    Transform,
    default_aggregators,
)
from splitstats.common.size import SizeEstimator, estimate_size
from splitstats.planner import AttributeNeed


class LocalContributionBuilder(object):
    """Computes the local contributions of a partition for all needed attributes."""

    def __init__(
        self,
        need: AttributeNeed,
        aggregators: None | Sequence[BaseAttributeAggregator] = None,
        transform: None | Transform = None,
        features: None | Features = None,
        size_estimator: SizeEstimator = estimate_size,
    ) -> None:
        """Initialize the builder.

        Args:
            need (AttributeNeed): The attributes to compute.
            aggregators (None | Sequence[BaseAttributeAggregator]): The
                aggregators implementing the attributes. Defaults to
                :func:`default_aggregators`.
            transform (None | Transform): Function applied to each
                :code:`(key, value)` pair before computing row counts and
                summaries.
            features (None | Features): The features of the (transformed)
                row data. Inferred per partition if not given.
            size_estimator (SizeEstimator): Estimates partition sizes in bytes.
        """
        aggregators = (
            aggregators if aggregators is not None else default_aggregators()
        )
        # only keep the aggregators of needed attributes
        self._aggregators = [
            agg for agg in aggregators if need[agg.attribute]
        ]
        self._transform = transform
        self._features = features
        self._size_estimator = size_estimator

    @property
    def aggregators(self) -> list[BaseAttributeAggregator]:
        """The aggregators of the needed attributes."""
        return list(self._aggregators)

    def __call__(self, key: Any, value: Any) -> list[Contribution]:
        """Compute the local contributions of a single partition.

        Args:
            key (Any): The partition key.
            value (Any): The partition value.

        Returns:
            list[Contribution]: The tagged local contributions.
        """
        ctx = PartitionContext(
            key,
            value,
            transform=self._transform,
            features=self._features,
            size_estimator=self._size_estimator,
        )

        contributions = []
        for agg in self._aggregators:
            contributions.extend(agg.extract(ctx))

        return contributions

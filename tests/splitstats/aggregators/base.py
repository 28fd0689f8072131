from typing import Any

import pytest
from datasets import Features

from splitstats.aggregators.base import (
    BaseAttributeAggregator,
    BaseAttributeAggregatorConfig,
    PartitionContext,
    Transform,
)
from tests.splitstats.helpers import assert_close

UNSET = object()


class BaseAttributeAggregatorTest:
    # aggregator to test
    aggregator_type: type[BaseAttributeAggregator]
    aggregator_config: BaseAttributeAggregatorConfig
    # input partitions
    partitions: list[tuple[Any, Any]]
    features: None | Features = None
    transform: None | Transform = None
    # expected local contributions per partition, keyed by tag string
    expected_contributions: list[dict[str, Any]] | Any = UNSET
    # expected finalized output, keyed by tag string
    expected_output: dict[str, Any] | Any = UNSET
    # whether the finalized output depends on the combine order
    order_sensitive: bool = False

    @pytest.fixture
    def aggregator(self):
        cls = type(self)
        return cls.aggregator_type.from_config(cls.aggregator_config)

    def build_contexts(self, partitions) -> list[PartitionContext]:
        cls = type(self)
        return [
            PartitionContext(
                key, value, transform=cls.transform, features=cls.features
            )
            for key, value in partitions
        ]

    def run(self, aggregator, partitions) -> dict[str, Any]:
        values = {}
        for ctx in self.build_contexts(partitions):
            for tag, contribution in aggregator.extract(ctx):
                assert aggregator.handles(tag)
                value = values.get(tag, aggregator.initialize())
                values[tag] = aggregator.update(value, contribution)

        return {str(t): aggregator.finalize(v) for t, v in values.items()}

    def test_case(self, aggregator):
        cls = type(self)
        contexts = self.build_contexts(cls.partitions)

        # check local contributions
        contributions = [
            {str(tag): c for tag, c in aggregator.extract(ctx)}
            for ctx in contexts
        ]
        if cls.expected_contributions is not UNSET:
            assert_close(contributions, cls.expected_contributions)

        # check finalized output
        output = self.run(aggregator, cls.partitions)
        if cls.expected_output is not UNSET:
            assert_close(output, cls.expected_output)

    def test_order_independence(self, aggregator):
        cls = type(self)
        if cls.order_sensitive:
            pytest.skip("output depends on the combine order")

        forward = self.run(aggregator, cls.partitions)
        backward = self.run(aggregator, list(reversed(cls.partitions)))
        assert_close(backward, forward)

    def test_identity(self, aggregator):
        cls = type(self)
        for ctx in self.build_contexts(cls.partitions):
            for _, contribution in aggregator.extract(ctx):
                init = aggregator.initialize()
                assert_close(
                    aggregator.update(init, contribution), contribution
                )
                assert_close(
                    aggregator.merge(contribution, init), contribution
                )

    def test_partitions_unchanged(self, aggregator):
        cls = type(self)
        snapshot = repr(cls.partitions)
        self.run(aggregator, cls.partitions)
        assert repr(cls.partitions) == snapshot

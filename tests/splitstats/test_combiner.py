import random

import pytest

from splitstats.accumulators import moments_to_statistics
from splitstats.aggregators.ops.summary import QuantSummaryAccumulator
from splitstats.builder import LocalContributionBuilder
from splitstats.combiner import GlobalCombiner
from splitstats.common.errors import UnsupportedAttributeError
from splitstats.common.features import ColumnFamily
from splitstats.planner import AttributeNeed
from splitstats.records import NumericSummary
from splitstats.tags import AttributeTag
from tests.splitstats.helpers import assert_close

NROW = AttributeTag(name="nRow")
QUANT_X = AttributeTag.summary(ColumnFamily.QUANT, "x")


def contributions_of(partitions, tag):
    need = AttributeNeed(needs={"nRow": True, "summary": True})
    builder = LocalContributionBuilder(need)
    return [
        c
        for key, value in partitions
        for t, c in builder(key, value)
        if t == tag
    ]


class TestGlobalCombiner:
    def test_reduce(self):
        combiner = GlobalCombiner()
        assert combiner.reduce(NROW, [10, 0, 5]) == 15
        assert combiner.finalize(NROW, 15) == 15

    def test_streaming_reduce(self):
        combiner = GlobalCombiner()
        value = combiner.reduce(NROW, [10])
        value = combiner.reduce(NROW, [], value)
        value = combiner.reduce(NROW, [0, 5], value)
        assert value == 15

    def test_merge(self):
        combiner = GlobalCombiner()
        a = combiner.reduce(NROW, [1, 2])
        b = combiner.reduce(NROW, [3])
        assert combiner.merge(NROW, a, b) == 6

    def test_unsupported_tag(self):
        combiner = GlobalCombiner()
        with pytest.raises(UnsupportedAttributeError):
            combiner.reduce(AttributeTag(name="medianRow"), [1])
        with pytest.raises(UnsupportedAttributeError):
            combiner.reduce(AttributeTag(name="summary"), [1])

    def test_moments_across_partitions(self):
        partitions = [("a", {"x": [1.0, 2.0, 3.0]}), ("b", {"x": [4.0, 5.0]})]
        combiner = GlobalCombiner()
        value = combiner.reduce(QUANT_X, contributions_of(partitions, QUANT_X))
        summary = combiner.finalize(QUANT_X, value)

        assert isinstance(summary, NumericSummary)
        assert summary.stats.mean == pytest.approx(3.0)
        assert summary.stats.variance == pytest.approx(2.5)
        assert summary.range == (1.0, 5.0)

    def test_grouping_does_not_matter(self):
        rng = random.Random(42)
        partitions = [
            (i, {"x": [rng.gauss(0, 1) for _ in range(rng.randint(0, 15))]})
            for i in range(40)
        ]
        contributions = contributions_of(partitions, QUANT_X)
        combiner = GlobalCombiner()
        expected = combiner.finalize(
            QUANT_X, combiner.reduce(QUANT_X, contributions)
        )

        for _ in range(5):
            rng.shuffle(contributions)
            # fold in randomly sized batches, merge the partial results
            partials, i = [], 0
            while i < len(contributions):
                size = rng.randint(1, 7)
                partials.append(
                    combiner.reduce(QUANT_X, contributions[i : i + size])
                )
                i += size

            value = combiner.initialize(QUANT_X)
            for partial in partials:
                value = combiner.merge(QUANT_X, partial, value)

            assert_close(combiner.finalize(QUANT_X, value), expected)

    def test_identity(self):
        combiner = GlobalCombiner()
        value = combiner.reduce(
            QUANT_X, contributions_of([("a", {"x": [1.0, 4.0]})], QUANT_X)
        )
        empty = QuantSummaryAccumulator()
        assert combiner.merge(QUANT_X, value, empty) == value
        assert moments_to_statistics(value.moments).mean == 2.5

import math
from datetime import datetime

from datasets import ClassLabel, Features, Value

from splitstats.accumulators import (
    FrequencyAccumulator,
    MomentAccumulator,
    MomentStatistics,
    RangeAccumulator,
    compute_moments,
)
from splitstats.aggregators.base import PartitionContext
from splitstats.aggregators.ops.summary import (
    CategSummaryAggregator,
    CategSummaryAggregatorConfig,
    DatetimeSummaryAccumulator,
    DatetimeSummaryAggregator,
    MissingSummaryAggregator,
    QuantSummaryAccumulator,
    QuantSummaryAggregator,
    SummaryAggregatorConfig,
)
from splitstats.records import (
    CategoricalSummary,
    DatetimeSummary,
    NumericSummary,
)
from tests.splitstats.aggregators.base import BaseAttributeAggregatorTest

FEATURES = Features(
    {
        "x": Value("float64"),
        "s": Value("string"),
        "t": Value("timestamp[s]"),
        "e": Value("float64"),
    }
)

PARTITIONS = [
    (
        "a",
        {
            "x": [1.0, 2.0, None, 3.0],
            "s": ["a", "a", None, "b"],
            "t": [datetime(2020, 1, 1), None, None, datetime(2020, 6, 1)],
            "e": [None, None, None, None],
        },
    ),
    ("b", {"x": [], "s": [], "t": [], "e": []}),
    (
        "c",
        {
            "x": [4.0, float("nan"), 5.0],
            "s": ["c", None, "a"],
            "t": [datetime(2019, 3, 1), datetime(2021, 1, 1), None],
            "e": [None, float("nan"), None],
        },
    ),
]


class TestQuantSummaryAggregator(BaseAttributeAggregatorTest):
    aggregator_type = QuantSummaryAggregator
    aggregator_config = SummaryAggregatorConfig()
    partitions = PARTITIONS
    features = FEATURES
    expected_contributions = [
        {
            "summary_quant_x": QuantSummaryAccumulator(
                na_count=1,
                moments=compute_moments([1.0, 2.0, 3.0]),
                range=RangeAccumulator(min=1.0, max=3.0),
            ),
            "summary_quant_e": QuantSummaryAccumulator(na_count=4),
        },
        {
            "summary_quant_x": QuantSummaryAccumulator(),
            "summary_quant_e": QuantSummaryAccumulator(),
        },
        {
            "summary_quant_x": QuantSummaryAccumulator(
                na_count=1,
                moments=compute_moments([4.0, 5.0]),
                range=RangeAccumulator(min=4.0, max=5.0),
            ),
            "summary_quant_e": QuantSummaryAccumulator(na_count=3),
        },
    ]
    expected_output = {
        "summary_quant_x": NumericSummary(
            na_count=2,
            stats=MomentStatistics(
                mean=3.0, variance=2.5, skewness=0.0, kurtosis=-1.3
            ),
            range=(1.0, 5.0),
        ),
        "summary_quant_e": NumericSummary(
            na_count=7,
            stats=MomentStatistics(
                mean=math.nan,
                variance=math.nan,
                skewness=math.nan,
                kurtosis=math.nan,
            ),
            range=(None, None),
        ),
    }

    def test_empty_column_moments(self, aggregator):
        ctx = self.build_contexts(self.partitions)[0]
        contributions = {str(t): c for t, c in aggregator.extract(ctx)}
        assert contributions["summary_quant_e"].moments == MomentAccumulator()
        assert contributions["summary_quant_e"].range.is_empty


class TestQuantSummaryAggregatorInferred(BaseAttributeAggregatorTest):
    aggregator_type = QuantSummaryAggregator
    aggregator_config = SummaryAggregatorConfig()
    partitions = [
        (
            0,
            {
                "n": [1, 2, 3],
                "flag": [True, False, True],
                "s": ["a", "b", "c"],
            },
        ),
        (1, {"n": [4, 5], "flag": [None, None], "s": ["d", "e"]}),
    ]
    # all-missing columns are inferred as null and left to the
    # missing value aggregator
    expected_contributions = [
        {
            "summary_quant_n": QuantSummaryAccumulator(
                moments=compute_moments([1, 2, 3]),
                range=RangeAccumulator(min=1, max=3),
            ),
            "summary_quant_flag": QuantSummaryAccumulator(
                moments=compute_moments([1.0, 0.0, 1.0]),
                range=RangeAccumulator(min=False, max=True),
            ),
        },
        {
            "summary_quant_n": QuantSummaryAccumulator(
                moments=compute_moments([4, 5]),
                range=RangeAccumulator(min=4, max=5),
            ),
        },
    ]


class TestCategSummaryAggregator(BaseAttributeAggregatorTest):
    aggregator_type = CategSummaryAggregator
    aggregator_config = CategSummaryAggregatorConfig()
    partitions = PARTITIONS
    features = FEATURES
    expected_contributions = [
        {
            "summary_categ_s": FrequencyAccumulator(
                counts={"a": 2, "b": 1}, na_count=1, n_obs=4
            )
        },
        {"summary_categ_s": FrequencyAccumulator()},
        {
            "summary_categ_s": FrequencyAccumulator(
                counts={"c": 1, "a": 1}, na_count=1, n_obs=3
            )
        },
    ]
    expected_output = {
        "summary_categ_s": CategoricalSummary(
            na_count=2, freq_table={"a": 3, "b": 1, "c": 1}, complete=True
        )
    }


class TestCategSummaryAggregatorCapped(BaseAttributeAggregatorTest):
    aggregator_type = CategSummaryAggregator
    aggregator_config = CategSummaryAggregatorConfig(cap=2)
    partitions = [
        ("p1", {"s": ["a", "a"]}),
        ("p2", {"s": ["b"]}),
        ("p3", {"s": ["c"]}),
    ]
    expected_output = {
        "summary_categ_s": CategoricalSummary(
            na_count=0, freq_table={"a": 2, "b": 1}, complete=False
        )
    }
    order_sensitive = True

    def test_any_order_is_incomplete(self, aggregator):
        output = self.run(aggregator, list(reversed(self.partitions)))
        summary = output["summary_categ_s"]
        assert len(summary.freq_table) == 2
        assert not summary.complete


class TestCategSummaryAggregatorClassLabel(BaseAttributeAggregatorTest):
    aggregator_type = CategSummaryAggregator
    aggregator_config = CategSummaryAggregatorConfig()
    partitions = [
        (0, {"label": [0, 1, 1]}),
        (1, {"label": [None, 2, -1]}),
    ]
    features = Features({"label": ClassLabel(names=["neg", "neu", "pos"])})
    expected_contributions = [
        {
            "summary_categ_label": FrequencyAccumulator(
                counts={"neg": 1, "neu": 2}, n_obs=3
            )
        },
        {
            # -1 is the missing label
            "summary_categ_label": FrequencyAccumulator(
                counts={"pos": 1}, na_count=2, n_obs=3
            )
        },
    ]
    expected_output = {
        "summary_categ_label": CategoricalSummary(
            na_count=2,
            freq_table={"neg": 1, "neu": 2, "pos": 1},
            complete=True,
        )
    }


class TestDatetimeSummaryAggregator(BaseAttributeAggregatorTest):
    aggregator_type = DatetimeSummaryAggregator
    aggregator_config = SummaryAggregatorConfig()
    partitions = PARTITIONS
    features = FEATURES
    expected_contributions = [
        {
            "summary_datetime_t": DatetimeSummaryAccumulator(
                na_count=2,
                range=RangeAccumulator(
                    min=datetime(2020, 1, 1), max=datetime(2020, 6, 1)
                ),
            )
        },
        {"summary_datetime_t": DatetimeSummaryAccumulator()},
        {
            "summary_datetime_t": DatetimeSummaryAccumulator(
                na_count=1,
                range=RangeAccumulator(
                    min=datetime(2019, 3, 1), max=datetime(2021, 1, 1)
                ),
            )
        },
    ]
    expected_output = {
        "summary_datetime_t": DatetimeSummary(
            na_count=3, range=(datetime(2019, 3, 1), datetime(2021, 1, 1))
        )
    }


class TestMissingSummaryAggregator(BaseAttributeAggregatorTest):
    aggregator_type = MissingSummaryAggregator
    aggregator_config = SummaryAggregatorConfig()
    partitions = [
        (0, {"x": [1.0, None], "s": [None, None]}),
        (1, {"x": [None, None, None], "s": ["a", None, "b"]}),
        (2, {"x": [], "s": []}),
    ]
    expected_contributions = [
        {"summary_null_s": 2},
        {"summary_null_x": 3},
        {"summary_null_x": 0, "summary_null_s": 0},
    ]
    expected_output = {"summary_null_x": 3, "summary_null_s": 2}

    def test_declared_columns_are_typed(self, aggregator):
        ctx = PartitionContext(
            0, {"x": [None, None]}, features=Features({"x": Value("int64")})
        )
        assert list(aggregator.extract(ctx)) == []


def test_build_from_keyword_arguments():
    aggregator = CategSummaryAggregator(cap=3)
    assert aggregator.config == CategSummaryAggregatorConfig(cap=3)
    assert aggregator.initialize().cap == 3

from datetime import date, datetime

from splitstats.accumulators import (
    RangeAccumulator,
    combine_range,
    compute_range,
)


def test_compute_range():
    assert compute_range([3, 1, 2]) == RangeAccumulator(min=1, max=3)
    assert compute_range([]) == RangeAccumulator()
    assert compute_range([]).is_empty


def test_compute_range_datetime():
    values = [datetime(2020, 5, 1), datetime(2019, 1, 1), datetime(2021, 1, 1)]
    acc = compute_range(values)
    assert acc.min == datetime(2019, 1, 1)
    assert acc.max == datetime(2021, 1, 1)


def test_combine_range():
    a = compute_range([1.0, 5.0])
    b = compute_range([-2.0, 3.0])
    assert combine_range(a, b) == RangeAccumulator(min=-2.0, max=5.0)
    assert combine_range(b, a) == combine_range(a, b)


def test_combine_range_identity():
    a = compute_range([date(2020, 1, 1), date(2020, 2, 1)])
    empty = RangeAccumulator()
    assert combine_range(a, empty) == a
    assert combine_range(empty, a) == a
    assert combine_range(empty, empty).is_empty

import math

import pytest

from splitstats.common.missing import is_missing, split_missing


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        (float("nan"), True),
        (math.nan, True),
        (0, False),
        (0.0, False),
        ("", False),
        ("nan", False),
        (False, False),
    ],
)
def test_is_missing(value, expected):
    assert is_missing(value) == expected


def test_split_missing():
    present, na_count = split_missing([1, None, 2.0, float("nan"), 3])
    assert present == [1, 2.0, 3]
    assert na_count == 2


def test_split_missing_empty():
    assert split_missing([]) == ([], 0)
    assert split_missing([None, None]) == ([], 2)

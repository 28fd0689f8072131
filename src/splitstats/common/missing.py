"""Helpers for detecting missing values in column data."""
from __future__ import annotations

import math
from typing import Any, Iterable


def is_missing(value: Any) -> bool:
    """Check whether a single value counts as missing.

    Both :code:`None` and floating point :code:`NaN` values are missing.

    Args:
        value (Any): The value to check.

    Returns:
        bool: True if the value is missing.
    """
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def split_missing(values: Iterable[Any]) -> tuple[list[Any], int]:
    """Separate the present values of a column from its missing ones.

    Args:
        values (Iterable[Any]): The column values.

    Returns:
        tuple[list[Any], int]: The non-missing values in their original
            order and the number of missing values.
    """
    present, na_count = [], 0
    for v in values:
        if is_missing(v):
            na_count += 1
        else:
            present.append(v)
    return present, na_count

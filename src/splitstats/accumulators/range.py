"""Min/max ranges over ordered values such as numbers and datetimes."""
from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict


class RangeAccumulator(BaseModel):
    """The smallest and largest value of a set of values.

    Both bounds are :code:`None` (absent) when no non-missing value was
    observed. Such an accumulator is the identity of :func:`combine_range`.
    """

    model_config = ConfigDict(frozen=True)

    min: Any = None
    max: Any = None

    @property
    def is_empty(self) -> bool:
        """Whether no value has been observed."""
        return self.min is None and self.max is None


def compute_range(values: Iterable[Any]) -> RangeAccumulator:
    """Compute the range of the given non-missing values.

    Args:
        values (Iterable[Any]): The non-missing values.

    Returns:
        RangeAccumulator: The range, empty if there are no values.
    """
    values = list(values)
    if len(values) == 0:
        return RangeAccumulator()
    return RangeAccumulator(min=min(values), max=max(values))


def _min(a: Any, b: Any) -> Any:
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


def _max(a: Any, b: Any) -> Any:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


def combine_range(
    a: RangeAccumulator, b: RangeAccumulator
) -> RangeAccumulator:
    """Merge two ranges, propagating absent bounds.

    Args:
        a (RangeAccumulator): The first range.
        b (RangeAccumulator): The second range.

    Returns:
        RangeAccumulator: The range covering both inputs.
    """
    return RangeAccumulator(min=_min(a.min, b.min), max=_max(a.max, b.max))

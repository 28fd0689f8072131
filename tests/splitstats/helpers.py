import math
from typing import Any

from pydantic import BaseModel


def assert_close(actual: Any, expected: Any, rel: float = 1e-9) -> None:
    """Recursively compare values, floats up to a relative tolerance.

    NaN values compare equal to each other.
    """
    if isinstance(actual, BaseModel):
        assert type(actual) is type(expected)
        assert_close(actual.model_dump(), expected.model_dump(), rel)
    elif isinstance(expected, dict):
        assert isinstance(actual, dict)
        assert set(actual.keys()) == set(expected.keys())
        for k in expected:
            assert_close(actual[k], expected[k], rel)
    elif isinstance(expected, (list, tuple)):
        assert len(actual) == len(expected)
        for a, e in zip(actual, expected):
            assert_close(a, e, rel)
    elif isinstance(expected, float):
        if math.isnan(expected):
            assert math.isnan(actual), f"Expected NaN, got {actual}"
        else:
            assert math.isclose(
                actual, expected, rel_tol=rel, abs_tol=1e-12
            ), f"Expected {expected}, got {actual}"
    else:
        assert actual == expected, f"Expected {expected}, got {actual}"

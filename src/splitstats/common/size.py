"""Object size estimation of partition payloads."""
from __future__ import annotations

import pickle
from typing import Any, Callable

import pyarrow as pa
from typing_extensions import TypeAlias

SizeEstimator: TypeAlias = Callable[[Any], float]


def estimate_size(value: Any) -> float:
    """Estimate the in-memory size of a partition payload in bytes.

    Tabular payloads (pyarrow tables and column batches) are measured by the
    size of their arrow buffers. All other payloads are measured by the
    length of their pickled representation.

    Args:
        value (Any): The partition payload.

    Returns:
        float: The estimated size in bytes.
    """
    if isinstance(value, pa.Table):
        return float(value.nbytes)

    if isinstance(value, dict):
        try:
            return float(pa.table(value).nbytes)
        except (pa.ArrowException, TypeError, ValueError):
            # not a column batch, e.g. ragged or nested python objects
            pass

    return float(len(pickle.dumps(value)))

"""Column type introspection based on :code:`datasets` features.

Every column of a tabular partition belongs to exactly one column family,
which determines the summary computed for it. The family is resolved once
per column from the column's feature type, either declared on the dataset
or inferred from the partition data through pyarrow.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

import pyarrow as pa
from datasets import ClassLabel, Features, Value
from datasets.features.features import FeatureType
from typing_extensions import TypeAlias

Batch: TypeAlias = dict[str, list[Any]]

NUMERIC_DTYPES = frozenset(
    [
        "bool",
        "float16",
        "float32",
        "float64",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
    ]
)
CATEGORICAL_DTYPES = frozenset(["string", "large_string"])
DATETIME_DTYPES = frozenset(["date32", "date64"])


class ColumnFamily(str, Enum):
    """The closed set of column families a summary can be computed for."""

    QUANT = "quant"
    CATEG = "categ"
    DATETIME = "datetime"
    NULL = "null"
    UNSUPPORTED = "unsupported"


def resolve_family(feature: FeatureType) -> ColumnFamily:
    """Resolve the column family of a feature type.

    Args:
        feature (FeatureType): The feature type of the column.

    Returns:
        ColumnFamily: The family. :code:`ColumnFamily.NULL` for columns
            without any typed value, :code:`ColumnFamily.UNSUPPORTED` for
            nested and other feature types.
    """
    if isinstance(feature, ClassLabel):
        return ColumnFamily.CATEG

    if not isinstance(feature, Value):
        return ColumnFamily.UNSUPPORTED

    if feature.dtype == "null":
        return ColumnFamily.NULL
    if feature.dtype in NUMERIC_DTYPES:
        return ColumnFamily.QUANT
    if feature.dtype in CATEGORICAL_DTYPES:
        return ColumnFamily.CATEG
    if (
        feature.dtype in DATETIME_DTYPES
        or feature.dtype.startswith("timestamp")
    ):
        return ColumnFamily.DATETIME

    return ColumnFamily.UNSUPPORTED


def infer_features(batch: Batch) -> Features:
    """Infer the features of a column batch.

    Args:
        batch (Batch): The column batch.

    Returns:
        Features: The inferred features. Columns that only contain missing
            values are inferred as :code:`Value("null")`.
    """
    schema = (
        batch.schema if isinstance(batch, pa.Table) else pa.table(batch).schema
    )
    return Features.from_arrow_schema(schema)


def num_rows(batch: Any) -> int:
    """Get the number of rows of a partition payload.

    Column batches report the length of their columns, pyarrow tables their
    row count and any other sized payload its length.

    Args:
        batch (Any): The partition payload.

    Returns:
        int: The number of rows.
    """
    if isinstance(batch, pa.Table):
        return batch.num_rows
    if isinstance(batch, dict):
        return len(next(iter(batch.values()), []))
    return len(batch)

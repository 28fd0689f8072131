"""Single-pass computation of dataset attributes of divided datasets."""
from .common.errors import (
    CardinalityOverflow,
    EmptyColumnWarning,
    PreconditionError,
    SplitStatsError,
    UnsupportedAttributeError,
)
from .dataset import DividedDataset, PartitionRecord, TransformedDataset
from .planner import AttributeNeed, AttributeRegistry, plan_needs
from .records import (
    CategoricalSummary,
    DatetimeSummary,
    GlobalAttributes,
    NumericSummary,
)
from .update import UpdateResult, update_attributes

__all__ = [
    "CardinalityOverflow",
    "EmptyColumnWarning",
    "PreconditionError",
    "SplitStatsError",
    "UnsupportedAttributeError",
    "DividedDataset",
    "PartitionRecord",
    "TransformedDataset",
    "AttributeNeed",
    "AttributeRegistry",
    "plan_needs",
    "CategoricalSummary",
    "DatetimeSummary",
    "GlobalAttributes",
    "NumericSummary",
    "UpdateResult",
    "update_attributes",
]

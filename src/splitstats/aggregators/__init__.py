"""Attribute aggregators and the default set of implemented attributes."""
from __future__ import annotations

from splitstats.accumulators import DEFAULT_CAP

from .base import (
    BaseAttributeAggregator,
    BaseAttributeAggregatorConfig,
    Contribution,
    PartitionContext,
    Transform,
)
from .ops.shape import (
    DivisionCountAggregator,
    KeysAggregator,
    RowCountAggregator,
    SplitRowDistnAggregator,
    SplitSizeDistnAggregator,
    TotalSizeAggregator,
)
from .ops.summary import (
    CategSummaryAggregator,
    DatetimeSummaryAggregator,
    MissingSummaryAggregator,
    QuantSummaryAggregator,
)


def default_aggregators(
    cap: int = DEFAULT_CAP,
) -> list[BaseAttributeAggregator]:
    """Create one aggregator for every implemented attribute kind.

    Args:
        cap (int): The maximum number of distinct categories tracked per
            categorical column.

    Returns:
        list[BaseAttributeAggregator]: The aggregators.
    """
    return [
        TotalSizeAggregator(),
        DivisionCountAggregator(),
        KeysAggregator(),
        SplitSizeDistnAggregator(),
        RowCountAggregator(),
        SplitRowDistnAggregator(),
        QuantSummaryAggregator(),
        CategSummaryAggregator(cap=cap),
        DatetimeSummaryAggregator(),
        MissingSummaryAggregator(),
    ]


__all__ = [
    "BaseAttributeAggregator",
    "BaseAttributeAggregatorConfig",
    "Contribution",
    "PartitionContext",
    "Transform",
    "DivisionCountAggregator",
    "KeysAggregator",
    "RowCountAggregator",
    "SplitRowDistnAggregator",
    "SplitSizeDistnAggregator",
    "TotalSizeAggregator",
    "CategSummaryAggregator",
    "DatetimeSummaryAggregator",
    "MissingSummaryAggregator",
    "QuantSummaryAggregator",
    "default_aggregators",
]

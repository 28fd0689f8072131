"""Pure accumulator primitives and their associative combine functions."""
from .frequency import (
    DEFAULT_CAP,
    FrequencyAccumulator,
    combine_frequencies,
    tabulate,
)
from .moments import (
    MomentAccumulator,
    MomentStatistics,
    combine_many_moments,
    combine_moments,
    compute_moments,
    moments_to_statistics,
)
from .pool import (
    PERCENTILE_PROBS,
    PercentileTable,
    ValuePool,
    combine_pools,
    percentile_table,
    pool_values,
)
from .range import RangeAccumulator, combine_range, compute_range

__all__ = [
    "DEFAULT_CAP",
    "FrequencyAccumulator",
    "combine_frequencies",
    "tabulate",
    "MomentAccumulator",
    "MomentStatistics",
    "combine_many_moments",
    "combine_moments",
    "compute_moments",
    "moments_to_statistics",
    "PERCENTILE_PROBS",
    "PercentileTable",
    "ValuePool",
    "combine_pools",
    "percentile_table",
    "pool_values",
    "RangeAccumulator",
    "combine_range",
    "compute_range",
]

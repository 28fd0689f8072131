"""Error and warning types raised by the attribute engine.

Structural problems, such as running the engine on a dataset with a pending
deferred transformation, abort the whole operation before any distributed
work starts. Data-shape anomalies, such as all-missing columns or
categorical columns with more distinct values than can be tracked, are
absorbed into the statistics and only reported through warnings.
"""


class SplitStatsError(Exception):
    """Base class of all errors raised by the package."""


class PreconditionError(SplitStatsError):
    """Raised when attributes are requested for a dataset that cannot be processed.

    Attributes must be computed on the base data and never through an
    unresolved deferred transformation.
    """


class UnsupportedAttributeError(SplitStatsError):
    """Raised when a contribution arrives for an attribute no aggregator handles."""


class EmptyColumnWarning(UserWarning):
    """A numeric or datetime column has no non-missing values."""


class CardinalityOverflow(UserWarning):
    """A categorical column has more distinct values than the tracking cap."""

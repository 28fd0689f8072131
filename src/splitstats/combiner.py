"""The reduce stage: folding local contributions into global values.

The :class:`GlobalCombiner` routes every contribution to the aggregator of
its tag. Contributions of a tag can be folded in any number of batches
(:meth:`GlobalCombiner.reduce`) and partial values can be merged in any
association order (:meth:`GlobalCombiner.merge`). Every combine step takes
two values and returns a new one, values are never updated in place.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from splitstats.aggregators import BaseAttributeAggregator, default_aggregators
from splitstats.common.errors import UnsupportedAttributeError
from splitstats.tags import AttributeTag

_UNSET = object()


class GlobalCombiner(object):
    """Combines and finalizes tagged contributions."""

    def __init__(
        self, aggregators: None | Sequence[BaseAttributeAggregator] = None
    ) -> None:
        """Initialize the combiner.

        Args:
            aggregators (None | Sequence[BaseAttributeAggregator]): The
                aggregators to route contributions to. Defaults to
                :func:`default_aggregators`.
        """
        aggregators = (
            aggregators if aggregators is not None else default_aggregators()
        )
        self._lookup = {agg.routing_key: agg for agg in aggregators}

    def aggregator_for(self, tag: AttributeTag) -> BaseAttributeAggregator:
        """Get the aggregator responsible for a tag.

        Args:
            tag (AttributeTag): The contribution tag.

        Returns:
            BaseAttributeAggregator: The aggregator.

        Raises:
            UnsupportedAttributeError: If no aggregator handles the tag.
        """
        try:
            return self._lookup[(tag.name, tag.family)]
        except KeyError as e:
            raise UnsupportedAttributeError(
                "No aggregator registered for contributions tagged '%s'." % tag
            ) from e

    def initialize(self, tag: AttributeTag) -> Any:
        """Get the identity value of a tag."""
        return self.aggregator_for(tag).initialize()

    def reduce(
        self,
        tag: AttributeTag,
        contributions: Iterable[Any],
        value: Any = _UNSET,
    ) -> Any:
        """Fold a batch of contributions into a running value.

        Args:
            tag (AttributeTag): The tag shared by all contributions.
            contributions (Iterable[Any]): The local contributions.
            value (Any, optional): The running value. Starts from the
                identity value if not given.

        Returns:
            Any: The updated running value.
        """
        agg = self.aggregator_for(tag)
        if value is _UNSET:
            value = agg.initialize()

        for contribution in contributions:
            value = agg.update(value, contribution)

        return value

    def merge(self, tag: AttributeTag, a: Any, b: Any) -> Any:
        """Merge two partial values of the same tag.

        Args:
            tag (AttributeTag): The tag of both values.
            a (Any): The first partial value.
            b (Any): The second partial value.

        Returns:
            Any: The merged value.
        """
        return self.aggregator_for(tag).merge(a, b)

    def finalize(self, tag: AttributeTag, value: Any) -> Any:
        """Convert a fully combined value into its reportable form.

        Args:
            tag (AttributeTag): The tag of the value.
            value (Any): The combined value.

        Returns:
            Any: The reportable value.
        """
        return self.aggregator_for(tag).finalize(value)

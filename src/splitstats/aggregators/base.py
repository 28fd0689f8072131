"""Provides base classes for attribute aggregators.

An attribute aggregator implements the full life cycle of one attribute
kind in the single distributed pass that computes dataset attributes:

- :meth:`BaseAttributeAggregator.extract` computes the local contributions
  of a single partition (map stage),
- :meth:`BaseAttributeAggregator.update` folds a local contribution into a
  running value (reduce stage),
- :meth:`BaseAttributeAggregator.merge` merges two partial values, which
  allows tree-shaped reductions,
- :meth:`BaseAttributeAggregator.finalize` converts the combined value into
  its reportable form.

:code:`update` and :code:`merge` must be associative and commutative and
must treat the value returned by :meth:`BaseAttributeAggregator.initialize`
as identity, so that the result does not depend on how partitions are
scheduled and grouped.

Classes:
    - :class:`PartitionContext`: Lazily computed views of a single partition.
    - :class:`BaseAttributeAggregatorConfig`: Base class for aggregator configurations.
    - :class:`BaseAttributeAggregator`: Base class for attribute aggregators.

Usage Example:
    Define a custom aggregator by subclassing :code:`BaseAttributeAggregator`:

    .. code-block:: python

        from splitstats.aggregators.base import (
            BaseAttributeAggregator, BaseAttributeAggregatorConfig, PartitionContext
        )
        from splitstats.tags import AttributeTag

        class MaxRowsConfig(BaseAttributeAggregatorConfig):
            start: int = 0

        class MaxRowsAggregator(BaseAttributeAggregator[MaxRowsConfig, int]):
            attribute = "maxRows"

            def initialize(self) -> int:
                return self.config.start

            def extract(self, ctx: PartitionContext):
                yield AttributeTag(name=self.attribute), ctx.num_rows

            def update(self, val: int, contribution: int) -> int:
                return max(val, contribution)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from typing import Any, Callable, ClassVar, Generic, Iterator, TypeVar

import pyarrow as pa
from datasets import Features
from typing_extensions import TypeAlias

from splitstats.base.config import BaseConfig, BaseConfigurable
from splitstats.common.features import (
    Batch,
    ColumnFamily,
    infer_features,
    num_rows,
    resolve_family,
)
from splitstats.common.size import SizeEstimator, estimate_size
from splitstats.tags import AttributeTag

Contribution: TypeAlias = tuple[AttributeTag, Any]
Transform: TypeAlias = Callable[[Any, Any], Any]


class PartitionContext(object):
    """Lazily computed views of a single partition.

    The context is created once per partition and shared by all
    aggregators, so that the (potentially expensive) transformation, size
    estimation and type introspection happen at most once per partition.
    Size attributes are computed on the untransformed value to reflect the
    physical storage, row attributes and summaries on the transformed one.
    """

    def __init__(
        self,
        key: Any,
        value: Any,
        transform: None | Transform = None,
        features: None | Features = None,
        size_estimator: SizeEstimator = estimate_size,
    ) -> None:
        """Initialize the partition context.

        Args:
            key (Any): The partition key.
            value (Any): The stored partition value.
            transform (None | Transform): Function applied to :code:`(key, value)`
                to obtain the logical row data of the partition.
            features (None | Features): The declared features of the row data.
                Inferred from the data if not given.
            size_estimator (SizeEstimator): Estimates the size of the value in bytes.
        """
        self.key = key
        self.value = value
        self._transform = transform
        self._features = features
        self._size_estimator = size_estimator

    @cached_property
    def size(self) -> float:
        """The estimated size of the untransformed value in bytes."""
        return float(self._size_estimator(self.value))

    @cached_property
    def data(self) -> Batch:
        """The row data of the partition, i.e. the transformed value."""
        data = (
            self.value
            if self._transform is None
            else self._transform(self.key, self.value)
        )
        # column access below expects a column batch
        if isinstance(data, pa.Table):
            data = data.to_pydict()
        return data

    @cached_property
    def num_rows(self) -> int:
        """The number of rows of the row data."""
        return num_rows(self.data)

    @cached_property
    def features(self) -> Features:
        """The features of the row data."""
        if self._features is not None:
            return self._features
        return infer_features(self.data)

    @cached_property
    def families(self) -> dict[str, ColumnFamily]:
        """The column family of every column present in the row data."""
        return {
            name: resolve_family(feature)
            for name, feature in self.features.items()
            if name in self.data
        }

    def columns_of(self, family: ColumnFamily) -> list[str]:
        """Get all columns belonging to the given family.

        Args:
            family (ColumnFamily): The column family.

        Returns:
            list[str]: The column names, in column order.
        """
        return [name for name, f in self.families.items() if f is family]


class BaseAttributeAggregatorConfig(BaseConfig):
    """Base configuration class for attribute aggregators.

    This class serves as the base configuration class for attribute
    aggregators. It inherits from :class:`BaseConfig`, providing basic
    configuration functionality.
    """


C = TypeVar("C", bound=BaseAttributeAggregatorConfig)
T = TypeVar("T")


class BaseAttributeAggregator(BaseConfigurable[C], Generic[C, T], ABC):
    """Base class for attribute aggregators.

    Attributes:
        attribute (ClassVar[str]): The name of the attribute the aggregator computes.
        family (ClassVar[None | ColumnFamily]): The column family for summary
            aggregators, None otherwise.
    """

    attribute: ClassVar[str]
    family: ClassVar[None | ColumnFamily] = None

    @property
    def routing_key(self) -> tuple[str, None | ColumnFamily]:
        """The key used to route tagged contributions to this aggregator."""
        return self.attribute, self.family

    def handles(self, tag: AttributeTag) -> bool:
        """Check whether the aggregator combines contributions of a tag.

        Args:
            tag (AttributeTag): The contribution tag.

        Returns:
            bool: True if the tag belongs to this aggregator.
        """
        return (tag.name, tag.family) == self.routing_key

    @abstractmethod
    def initialize(self) -> T:
        """Get the identity value of the aggregation.

        Returns:
            T: The initial value, which leaves any value unchanged when
                combined with it.
        """
        ...

    @abstractmethod
    def extract(self, ctx: PartitionContext) -> Iterator[Contribution]:
        """Compute the local contributions of a single partition.

        Args:
            ctx (PartitionContext): The partition context.

        Returns:
            Iterator[Contribution]: The tagged local contributions.
        """
        ...

    @abstractmethod
    def update(self, val: T, contribution: Any) -> T:
        """Fold a local contribution into the running value.

        Args:
            val (T): The current aggregation value.
            contribution (Any): The local contribution of a partition.

        Returns:
            T: The updated aggregation value.
        """
        ...

    def merge(self, a: T, b: T) -> T:
        """Merge two partial aggregation values.

        Defaults to :meth:`update`, which is correct whenever local
        contributions and aggregation values share the same type.

        Args:
            a (T): The first partial value.
            b (T): The second partial value.

        Returns:
            T: The merged value.
        """
        return self.update(a, b)

    def finalize(self, val: T) -> Any:
        """Convert the combined value into its reportable form.

        Args:
            val (T): The combined aggregation value.

        Returns:
            Any: The reportable value, defaults to the value itself.
        """
        return val

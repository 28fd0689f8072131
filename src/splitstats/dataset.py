"""In-memory divided datasets.

A divided dataset is a collection of partitions, each identified by an
opaque key and holding an arbitrary payload. Tabular divided datasets
(kind :code:`"ddf"`) hold column batches, i.e. mappings from column name to
a list of values, and describe their columns with :code:`datasets.Features`.

Datasets carry a mutable set of named attributes, such as the number of
partitions or per-column summaries, which are filled in by
:func:`splitstats.update.update_attributes`.

Usage Example:

    .. code-block:: python

        from splitstats.dataset import DividedDataset

        ds = DividedDataset(
            {"a": {"x": [1, 2, 3]}, "b": {"x": [4, 5]}}, kind="ddf"
        )
        ds.columns  # ["x"]
        ds.get_attribute("nRow")  # None, not computed yet
"""
from __future__ import annotations

from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    Literal,
    Mapping,
    NamedTuple,
)

from datasets import Features, Value

from splitstats.common.features import infer_features

DatasetKind = Literal["ddo", "ddf"]


class PartitionRecord(NamedTuple):
    """A single partition of a divided dataset."""

    key: Any
    value: Any


class DividedDataset(object):
    """A dataset physically split into independently stored partitions."""

    def __init__(
        self,
        partitions: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
        kind: DatasetKind = "ddo",
        features: None | Features = None,
        attributes: None | Mapping[str, Any] = None,
    ) -> None:
        """Initialize the divided dataset.

        Args:
            partitions (Mapping[Any, Any] | Iterable[tuple[Any, Any]]): The
                partitions, either as a mapping from key to value or as
                key-value pairs.
            kind (DatasetKind): :code:`"ddf"` for tabular datasets whose partitions
                are column batches, :code:`"ddo"` otherwise.
            features (None | Features): The column features of a tabular
                dataset. Inferred from the partitions if not given.
            attributes (None | Mapping[str, Any]): Initial attributes.
        """
        if isinstance(partitions, Mapping):
            partitions = partitions.items()

        self._partitions = [PartitionRecord(k, v) for k, v in partitions]
        self._kind = kind
        self._declared_features = features
        self._features = features
        self._attributes: dict[str, Any] = dict(attributes or {})

    @property
    def kind(self) -> DatasetKind:
        """The kind of the dataset."""
        return self._kind

    @property
    def declared_features(self) -> None | Features:
        """The column features given on creation, None if not declared."""
        return self._declared_features if self._kind == "ddf" else None

    @property
    def features(self) -> None | Features:
        """The column features of a tabular dataset, None otherwise.

        Undeclared features are inferred from the partitions, which reads
        every partition once. Columns that only hold missing values in one
        partition take their type from the first partition in which they do
        not.
        """
        if self._kind != "ddf":
            return None

        if self._features is None:
            features = Features()
            for record in self._partitions:
                for name, feature in infer_features(record.value).items():
                    if features.get(name, Value("null")) == Value("null"):
                        features[name] = feature
            self._features = features

        return self._features

    @property
    def columns(self) -> list[str]:
        """The column names of a tabular dataset in declaration order."""
        features = self.features
        return [] if features is None else list(features.keys())

    def partitions(self) -> Iterator[PartitionRecord]:
        """Iterate over the partitions of the dataset.

        Returns:
            Iterator[PartitionRecord]: The partitions.
        """
        return iter(self._partitions)

    def __len__(self) -> int:
        return len(self._partitions)

    def get_attribute(self, name: str) -> Any:
        """Get an attribute of the dataset.

        Args:
            name (str): The attribute name.

        Returns:
            Any: The attribute value, None if the attribute is not set.
        """
        return self._attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        """Check whether an attribute is set."""
        return self._attributes.get(name) is not None

    def set_attributes(self, attrs: Mapping[str, Any]) -> DividedDataset:
        """Set multiple attributes at once.

        Args:
            attrs (Mapping[str, Any]): The attributes to set.

        Returns:
            DividedDataset: The dataset itself.
        """
        self._attributes.update(attrs)
        return self

    def transform(self, fn: Callable[[Any, Any], Any]) -> TransformedDataset:
        """Create a deferred transformation view of the dataset.

        Args:
            fn (Callable[[Any, Any], Any]): Function applied lazily to every
                :code:`(key, value)` pair.

        Returns:
            TransformedDataset: The transformed view.
        """
        return TransformedDataset(self, fn)

    def __repr__(self) -> str:
        return "DividedDataset(kind=%r, partitions=%d)" % (
            self._kind,
            len(self._partitions),
        )


class TransformedDataset(object):
    """A view of a divided dataset with a pending deferred transformation.

    The transformation is only applied when partitions are read. Attributes
    can not be computed through such a view, they must be computed on the
    base dataset.
    """

    def __init__(
        self, base: DividedDataset, fn: Callable[[Any, Any], Any]
    ) -> None:
        """Initialize the transformed view.

        Args:
            base (DividedDataset): The underlying dataset.
            fn (Callable[[Any, Any], Any]): The transformation.
        """
        self.base = base
        self.fn = fn

    @property
    def kind(self) -> DatasetKind:
        """The kind of the underlying dataset."""
        return self.base.kind

    def partitions(self) -> Iterator[PartitionRecord]:
        """Iterate over the transformed partitions."""
        for record in self.base.partitions():
            yield PartitionRecord(
                record.key, self.fn(record.key, record.value)
            )

    def get_attribute(self, name: str) -> Any:
        """Get an attribute of the underlying dataset."""
        return self.base.get_attribute(name)

    def __repr__(self) -> str:
        return "TransformedDataset(base=%r)" % self.base

"""Decides which dataset attributes need to be computed.

An attribute is needed if and only if it is required for the kind of the
dataset, is not already present on the dataset, and is implemented by the
engine. Required but unimplemented attributes are silently ignored, which
keeps datasets created by newer versions (requiring more attributes)
processable.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from splitstats.base.config import BaseConfig
from splitstats.common.errors import PreconditionError
from splitstats.dataset import TransformedDataset

logger = logging.getLogger(__name__)

DDO_ATTRIBUTES = frozenset(
    ["keys", "splitSizeDistn", "totObjectSize", "nDiv", "totStorageSize"]
)
DDF_ATTRIBUTES = DDO_ATTRIBUTES | frozenset(
    ["nRow", "splitRowDistn", "summary"]
)
IMPLEMENTED_ATTRIBUTES = frozenset(
    [
        "keys",
        "splitSizeDistn",
        "totObjectSize",
        "nDiv",
        "nRow",
        "splitRowDistn",
        "summary",
    ]
)


class AttributeRegistry(BaseConfig):
    """Static tables of required and implemented attributes.

    The registry is passed explicitly to the planner, which allows to
    compute subsets of the attributes, e.g. only the row counts.
    """

    required: dict[str, frozenset[str]] = Field(
        default_factory=lambda: {"ddo": DDO_ATTRIBUTES, "ddf": DDF_ATTRIBUTES}
    )
    """The required attributes by dataset kind."""

    implemented: frozenset[str] = IMPLEMENTED_ATTRIBUTES
    """The attributes the engine is able to compute."""

    def required_for(self, kind: str) -> frozenset[str]:
        """Get the attributes required for a dataset kind.

        Args:
            kind (str): The dataset kind.

        Returns:
            frozenset[str]: The required attribute names, empty for unknown kinds.
        """
        return self.required.get(kind, frozenset())


class AttributeNeed(BaseModel):
    """Immutable mapping from attribute name to whether it must be computed."""

    model_config = ConfigDict(frozen=True)

    needs: dict[str, bool] = Field(default_factory=dict)

    def __getitem__(self, name: str) -> bool:
        return self.needs.get(name, False)

    def any(self) -> bool:
        """Whether any attribute needs to be computed."""
        return any(self.needs.values())

    @property
    def needed(self) -> frozenset[str]:
        """The names of all attributes that must be computed."""
        return frozenset(name for name, need in self.needs.items() if need)

    def as_mapping(self) -> Mapping[str, bool]:
        """Get a read-only view of the need mapping."""
        return MappingProxyType(self.needs)


def plan_needs(
    dataset: Any, registry: None | AttributeRegistry = None
) -> AttributeNeed:
    """Determine the attributes that must be computed for a dataset.

    Args:
        dataset (Any): The dataset descriptor. Must provide :code:`kind` and
            :code:`get_attribute`.
        registry (None | AttributeRegistry): The attribute tables. Defaults to
            the default registry.

    Returns:
        AttributeNeed: The attribute need of the dataset.

    Raises:
        PreconditionError: If the dataset is a deferred transformation view.
    """
    if isinstance(dataset, TransformedDataset):
        raise PreconditionError(
            "Cannot compute attributes of a transformed dataset, compute "
            "them on the base dataset instead."
        )

    registry = registry if registry is not None else AttributeRegistry()

    needs = {}
    for name in sorted(registry.required_for(dataset.kind)):
        if name not in registry.implemented:
            logger.debug("Skipping unimplemented attribute '%s'.", name)
            continue
        needs[name] = dataset.get_attribute(name) is None

    return AttributeNeed(needs=needs)

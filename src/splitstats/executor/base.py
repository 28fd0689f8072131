"""Provides the base classes of map/reduce executors.

An executor distributes the partitions of a dataset to a map function,
groups the resulting tagged contributions by tag and streams every group,
in batches, into a :class:`GlobalCombiner`. The finalized value of every tag
is returned to the caller.

Executors make no assumption about the order in which partitions are
processed, since the combiner is an associative and commutative fold.
Failures of the map function or of the workers propagate to the caller
unchanged, so a call either delivers the values of all partitions or fails
as a whole.
"""
from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Callable, Iterable, TypeVar

import nest_asyncio
from pydantic import BaseModel, ConfigDict, Field

from splitstats.aggregators import Contribution
from splitstats.base.config import BaseConfig, BaseConfigurable
from splitstats.combiner import GlobalCombiner
from splitstats.dataset import PartitionRecord
from splitstats.tags import AttributeTag


class MapReduceJob(BaseModel):
    """The functions making up a single attribute computation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    map_fn: Callable[[Any, Any], list[Contribution]]
    """Computes the tagged local contributions of a :code:`(key, value)` pair."""

    combiner: GlobalCombiner
    """Combines and finalizes the contributions of each tag."""

    setup: None | Callable[[], None] = None
    """Run once in every worker before any partition is mapped."""


class ExecutorConfig(BaseConfig):
    """Base configuration class for executors."""

    batch_size: int = Field(default=64, gt=0)
    """The number of contributions of a tag folded at once.

    Contributions are buffered per tag and reduced whenever a buffer is
    full, bounding the memory held by pending contributions.
    """


class StreamingReduce(object):
    """Buffers tagged contributions and folds them batch by batch."""

    def __init__(self, combiner: GlobalCombiner, batch_size: int) -> None:
        self._combiner = combiner
        self._batch_size = batch_size
        self._values: dict[AttributeTag, Any] = {}
        self._buffers: dict[AttributeTag, list[Any]] = defaultdict(list)

    def add(self, contributions: Iterable[Contribution]) -> None:
        """Add the contributions of a single partition.

        Args:
            contributions (Iterable[Contribution]): The tagged contributions.
        """
        for tag, contribution in contributions:
            buffer = self._buffers[tag]
            buffer.append(contribution)
            if len(buffer) >= self._batch_size:
                self.flush(tag)

    def flush(self, tag: AttributeTag) -> None:
        """Reduce the buffered contributions of a tag into its running value."""
        buffer = self._buffers.pop(tag, [])
        if len(buffer) == 0:
            return

        partial = self._combiner.reduce(tag, buffer)
        if tag in self._values:
            partial = self._combiner.merge(tag, self._values[tag], partial)
        self._values[tag] = partial

    def finalize(self) -> dict[AttributeTag, Any]:
        """Flush all buffers and finalize the value of every tag.

        Returns:
            dict[AttributeTag, Any]: The finalized values.
        """
        for tag in list(self._buffers.keys()):
            self.flush(tag)

        return {
            tag: self._combiner.finalize(tag, value)
            for tag, value in self._values.items()
        }


C = TypeVar("C", bound=ExecutorConfig)


class BaseExecutor(BaseConfigurable[C], ABC):
    """Base class for map/reduce executors."""

    @abstractmethod
    async def execute(
        self, partitions: Iterable[PartitionRecord], job: MapReduceJob
    ) -> dict[AttributeTag, Any]:
        """Run a map/reduce job over the given partitions.

        Args:
            partitions (Iterable[PartitionRecord]): The partitions to process.
            job (MapReduceJob): The job to run.

        Returns:
            dict[AttributeTag, Any]: The finalized value of every tag.
        """
        ...

    def run(
        self, partitions: Iterable[PartitionRecord], job: MapReduceJob
    ) -> dict[AttributeTag, Any]:
        """Run a map/reduce job synchronously.

        Can be called both from plain synchronous code and from within a
        running event loop, such as a jupyter notebook.

        Args:
            partitions (Iterable[PartitionRecord]): The partitions to process.
            job (MapReduceJob): The job to run.

        Returns:
            dict[AttributeTag, Any]: The finalized value of every tag.
        """
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is not None:
            # allow re-entering the already running loop
            nest_asyncio.apply(running)
            return running.run_until_complete(self.execute(partitions, job))

        # create a new event loop to execute the job in
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(self.execute(partitions, job))
        finally:
            loop.close()

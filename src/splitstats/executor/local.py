"""Sequential in-process executor."""
from __future__ import annotations

from typing import Any, Iterable

from splitstats.dataset import PartitionRecord
from splitstats.tags import AttributeTag

from .base import BaseExecutor, ExecutorConfig, MapReduceJob, StreamingReduce


class LocalExecutorConfig(ExecutorConfig):
    """Configuration for the :class:`LocalExecutor`."""


class LocalExecutor(BaseExecutor[LocalExecutorConfig]):
    """Processes all partitions one after another in the calling thread."""

    async def execute(
        self, partitions: Iterable[PartitionRecord], job: MapReduceJob
    ) -> dict[AttributeTag, Any]:
        if job.setup is not None:
            job.setup()

        state = StreamingReduce(job.combiner, self.config.batch_size)
        for key, value in partitions:
            state.add(job.map_fn(key, value))

        return state.finalize()

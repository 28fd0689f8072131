"""Concurrent executor backed by a thread or process pool.

Partitions are mapped concurrently on a :code:`concurrent.futures` pool and
their contributions are folded in the order in which the workers finish,
which differs from run to run.
"""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import (
    Executor,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
)
from typing import Any, Iterable, Literal

from pydantic import Field

from splitstats.dataset import PartitionRecord
from splitstats.tags import AttributeTag

from .base import BaseExecutor, ExecutorConfig, MapReduceJob, StreamingReduce

logger = logging.getLogger(__name__)


class PoolExecutorConfig(ExecutorConfig):
    """Configuration for the :class:`PoolExecutor`."""

    worker_type: Literal["thread", "process"] = "thread"
    """Whether partitions are mapped in worker threads or worker processes.

    Process workers require the map function, the transformation and the
    partitions to be picklable.
    """

    max_workers: None | int = Field(default=None, gt=0)
    """The maximum number of workers. Defaults to the pool default."""


class PoolExecutor(BaseExecutor[PoolExecutorConfig]):
    """Maps partitions concurrently on a pool of workers."""

    def _create_pool(self, job: MapReduceJob) -> Executor:
        pool_type = (
            ProcessPoolExecutor
            if self.config.worker_type == "process"
            else ThreadPoolExecutor
        )
        return pool_type(
            max_workers=self.config.max_workers, initializer=job.setup
        )

    async def execute(
        self, partitions: Iterable[PartitionRecord], job: MapReduceJob
    ) -> dict[AttributeTag, Any]:
        loop = asyncio.get_running_loop()
        state = StreamingReduce(job.combiner, self.config.batch_size)

        with self._create_pool(job) as pool:
            futures = [
                loop.run_in_executor(pool, job.map_fn, key, value)
                for key, value in partitions
            ]
            logger.debug(
                "Submitted %d partitions to %s workers.",
                len(futures),
                self.config.worker_type,
            )
            try:
                # fold contributions as soon as partitions are done
                for future in asyncio.as_completed(futures):
                    state.add(await future)
            except BaseException:
                for future in futures:
                    future.cancel()
                # collect the outcome of every remaining partition
                await asyncio.gather(*futures, return_exceptions=True)
                raise

        return state.finalize()

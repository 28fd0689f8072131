"""Map/reduce executors running the attribute computation."""
from .base import BaseExecutor, ExecutorConfig, MapReduceJob, StreamingReduce
from .local import LocalExecutor, LocalExecutorConfig
from .pool import PoolExecutor, PoolExecutorConfig

__all__ = [
    "BaseExecutor",
    "ExecutorConfig",
    "MapReduceJob",
    "StreamingReduce",
    "LocalExecutor",
    "LocalExecutorConfig",
    "PoolExecutor",
    "PoolExecutorConfig",
]

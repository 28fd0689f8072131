"""Computes the missing attributes of a divided dataset in a single pass.

Usage Example:

    .. code-block:: python

        from splitstats import DividedDataset, update_attributes

        ds = DividedDataset(
            {"a": {"x": [1, 2, 3]}, "b": {"x": [4, 5]}}, kind="ddf"
        )
        ds, computed = update_attributes(ds)
        ds.get_attribute("nRow")  # 5
        ds.get_attribute("summary")["x"].stats.variance  # 2.5

        # nothing is missing anymore
        ds, computed = update_attributes(ds)
        computed  # False
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, NamedTuple

from splitstats.accumulators import DEFAULT_CAP
from splitstats.aggregators import default_aggregators
from splitstats.assembler import assemble_attributes
from splitstats.builder import LocalContributionBuilder
from splitstats.combiner import GlobalCombiner
from splitstats.common.size import SizeEstimator, estimate_size
from splitstats.executor import (
    BaseExecutor,
    ExecutorConfig,
    LocalExecutor,
    LocalExecutorConfig,
    MapReduceJob,
    PoolExecutor,
    PoolExecutorConfig,
)
from splitstats.planner import AttributeRegistry, plan_needs
from splitstats.tags import AttributeTag

logger = logging.getLogger(__name__)


class UpdateResult(NamedTuple):
    """The outcome of :func:`update_attributes`."""

    dataset: Any
    """The dataset, with the missing attributes set."""

    computed: bool
    """Whether any attribute was computed."""


def _default_executor(
    control: None | ExecutorConfig | Mapping[str, Any],
) -> BaseExecutor:
    if isinstance(control, ExecutorConfig):
        control = control.model_dump()
    control = dict(control or {})
    # worker options select the pool executor
    if len(control.keys() - LocalExecutorConfig.model_fields.keys()) > 0:
        return PoolExecutor(PoolExecutorConfig(**control))
    return LocalExecutor(LocalExecutorConfig(**control))


def update_attributes(
    dataset: Any,
    executor: None | BaseExecutor = None,
    control: None | ExecutorConfig | Mapping[str, Any] = None,
    registry: None | AttributeRegistry = None,
    cap: int = DEFAULT_CAP,
    size_estimator: SizeEstimator = estimate_size,
) -> UpdateResult:
    """Compute all missing attributes of a dataset.

    Runs a single map/reduce pass over all partitions and writes the
    computed attributes to the dataset. If all (implemented) attributes are
    already present, the dataset is returned unchanged.

    Args:
        dataset (Any): The dataset descriptor, e.g. a :class:`DividedDataset`.
        executor (None | BaseExecutor): The executor running the job.
            Defaults to a :class:`LocalExecutor`.
        control (None | ExecutorConfig | Mapping[str, Any]): Configuration
            of the default executor, ignored if an executor is given. Worker
            options such as :code:`max_workers` select a
            :class:`PoolExecutor`, otherwise a :class:`LocalExecutor` is
            used.
        registry (None | AttributeRegistry): The required and implemented
            attribute tables.
        cap (int): The maximum number of distinct categories tracked per
            categorical column.
        size_estimator (SizeEstimator): Estimates partition sizes in bytes.

    Returns:
        UpdateResult: The dataset and whether any attribute was computed.

    Raises:
        PreconditionError: If the dataset is a deferred transformation view.
    """
    need = plan_needs(dataset, registry)

    if not need.any():
        logger.info("All (implemented) attributes have already been computed.")
        return UpdateResult(dataset, False)

    if executor is None:
        executor = _default_executor(control)

    transform = dataset.get_attribute("transFn")
    aggregators = default_aggregators(cap=cap)
    combiner = GlobalCombiner(aggregators)
    # declared features describe the stored data, not the transformed one.
    # Undeclared features are inferred per partition in the map stage.
    features = (
        getattr(dataset, "declared_features", None)
        if transform is None
        else None
    )
    builder = LocalContributionBuilder(
        need,
        aggregators=aggregators,
        transform=transform,
        features=features,
        size_estimator=size_estimator,
    )

    logger.info("Running map/reduce to get missing attributes...")
    logger.debug("Computing attributes %s.", sorted(need.needed))
    values = executor.run(
        dataset.partitions(), MapReduceJob(map_fn=builder, combiner=combiner)
    )

    # attributes of datasets without any partition
    for agg in builder.aggregators:
        tag = AttributeTag(name=agg.attribute)
        if not tag.is_summary and tag not in values:
            values[tag] = combiner.finalize(tag, combiner.initialize(tag))

    columns = None if features is None else list(features.keys())
    attrs = assemble_attributes(values, columns=columns, need=need)
    dataset = dataset.set_attributes(attrs.to_attributes())

    return UpdateResult(dataset, True)

"""Assembles finalized attribute values into a :class:`GlobalAttributes` record."""
from __future__ import annotations

import logging
import warnings
from typing import Any, Mapping, Sequence

from splitstats.common.errors import CardinalityOverflow, EmptyColumnWarning
from splitstats.common.features import ColumnFamily
from splitstats.common.hashing import fingerprint
from splitstats.planner import AttributeNeed
from splitstats.records import (
    CategoricalSummary,
    GlobalAttributes,
    SummaryEntry,
)
from splitstats.tags import AttributeTag

logger = logging.getLogger(__name__)

SHAPE_ATTRIBUTES = frozenset(
    [
        "nRow",
        "nDiv",
        "totObjectSize",
        "splitSizeDistn",
        "splitRowDistn",
        "keys",
    ]
)


def _check_entry(column: str, entry: SummaryEntry) -> None:
    # data anomalies are reported, never raised
    if isinstance(entry, CategoricalSummary):
        if not entry.complete:
            warnings.warn(
                "Column '%s' has more distinct categories than could be "
                "tracked, its frequency table is incomplete." % column,
                CardinalityOverflow,
                stacklevel=3,
            )
    elif entry.range == (None, None):
        warnings.warn(
            "Column '%s' has no non-missing values." % column,
            EmptyColumnWarning,
            stacklevel=3,
        )


def build_summary(
    values: Mapping[AttributeTag, SummaryEntry | int],
    columns: None | Sequence[str] = None,
) -> dict[str, SummaryEntry]:
    """Build the per-column summary mapping.

    Missing counts of partitions in which a column held no typed value are
    added to the summary the column got from the other partitions. Columns
    without a typed value in any partition are not summarized.

    Args:
        values (Mapping[AttributeTag, SummaryEntry | int]): The finalized
            summary entries keyed by their tags, and the missing counts of
            untyped columns.
        columns (None | Sequence[str]): The column order of the dataset.
            Summaries of columns not listed are dropped. If not given,
            columns are ordered by name.

    Returns:
        dict[str, SummaryEntry]: The summaries keyed by column name.
    """
    summary = {}
    missing: dict[str, int] = {}
    for tag, entry in values.items():
        if tag.family is ColumnFamily.NULL:
            missing[tag.column] = entry
            continue

        if tag.column in summary:
            # same column summarized under different families,
            # keep the first one
            logger.warning(
                "Column '%s' was summarized as '%s' and '%s'.",
                tag.column,
                summary[tag.column].type,
                entry.type,
            )
            continue
        summary[tag.column] = entry

    for column, na_count in missing.items():
        if column not in summary:
            logger.debug("Column '%s' has no typed value.", column)
            continue
        entry = summary[column]
        summary[column] = entry.model_copy(
            update={"na_count": entry.na_count + na_count}
        )

    if columns is not None:
        summary = {c: summary[c] for c in columns if c in summary}
    else:
        summary = dict(sorted(summary.items()))

    for column, entry in summary.items():
        _check_entry(column, entry)

    return summary


def assemble_attributes(
    values: Mapping[AttributeTag, Any],
    columns: None | Sequence[str] = None,
    need: None | AttributeNeed = None,
) -> GlobalAttributes:
    """Build the global attributes record from finalized values.

    Args:
        values (Mapping[AttributeTag, Any]): The finalized values of all tags.
        columns (None | Sequence[str]): The column order of the dataset,
            see :func:`build_summary`.
        need (None | AttributeNeed): The attributes that were computed. A
            needed summary is always set, even if no column could be
            summarized.

    Returns:
        GlobalAttributes: The global attributes record.
    """
    attrs: dict[str, Any] = {}
    summaries: dict[AttributeTag, SummaryEntry | int] = {}

    for tag, value in values.items():
        if tag.is_summary:
            summaries[tag] = value
        elif tag.name in SHAPE_ATTRIBUTES:
            attrs[tag.name] = value
        else:
            logger.debug("Ignoring unknown attribute '%s'.", tag)

    if len(summaries) > 0 or (need is not None and need["summary"]):
        attrs["summary"] = build_summary(summaries, columns)

    if attrs.get("keys") is not None:
        attrs["keyHashes"] = [fingerprint(k) for k in attrs["keys"]]

    return GlobalAttributes(**attrs)

"""Structured grouping keys of local contributions.

Every local contribution is emitted under an :class:`AttributeTag`. The
executor groups contributions by tag, so that each tag is combined
independently. Summary tags carry the column family and the column name,
which makes every column its own group.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from splitstats.common.features import ColumnFamily

SUMMARY = "summary"


class AttributeTag(BaseModel):
    """The key under which local contributions are grouped and combined."""

    model_config = ConfigDict(frozen=True)

    name: str
    """The name of the attribute the contribution belongs to."""

    family: None | ColumnFamily = None
    """The column family, only set for summary contributions."""

    column: None | str = None
    """The column name, only set for summary contributions."""

    @classmethod
    def summary(cls, family: ColumnFamily, column: str) -> AttributeTag:
        """Build the tag of a per-column summary.

        Args:
            family (ColumnFamily): The family of the column.
            column (str): The column name.

        Returns:
            AttributeTag: The summary tag.
        """
        return cls(name=SUMMARY, family=family, column=column)

    @property
    def is_summary(self) -> bool:
        """Whether the tag belongs to a per-column summary."""
        return self.name == SUMMARY

    def __str__(self) -> str:
        if self.is_summary:
            return "%s_%s_%s" % (self.name, self.family.value, self.column)
        return self.name

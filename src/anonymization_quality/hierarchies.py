"""
Resolution of the generalization hierarchies used by the quality models.

Every quasi-identifier gets a hierarchy whose top level is uniformly the suppressed
value: hierarchies that are missing are fabricated (value, then suppressed value)
and hierarchies whose rows do not all end with the suppressed value get one more
level holding it.
"""

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Sequence

from first import first  # type: ignore[import-untyped]

from anonymization_quality.config import QualityConfiguration
from anonymization_quality.context import ComputationContext
from anonymization_quality.dataset import DatasetView
from anonymization_quality.gtrees import make_flat_default_gtree


@dataclass(frozen=True)
class Hierarchy:
    """
    An immutable generalization hierarchy.

    Attributes
    ----------
    rows : tuple[tuple[str, ...], ...]
        One row per original value, labels from the value itself (level 0) to the
        most general label
    suppressed_value : str
        Label of the top level
    """

    rows: tuple[tuple[str, ...], ...]
    suppressed_value: str

    @classmethod
    def of(cls, rows: Sequence[Sequence[str]], suppressed_value: str) -> "Hierarchy":
        return cls(tuple(tuple(row) for row in rows), suppressed_value)

    @cached_property
    def leaf_to_row(self) -> dict[str, int]:
        leaf_to_row: dict[str, int] = {}
        for idx, row in enumerate(self.rows):
            # first row wins for duplicated values
            leaf_to_row.setdefault(row[0], idx)
        return leaf_to_row

    @cached_property
    def height(self) -> int:
        """Number of generalization steps of the longest row."""
        return max((len(row) - 1 for row in self.rows), default=0)

    @property
    def leaves(self) -> list[str]:
        return list(self.leaf_to_row)

    def level_of(self, original: str, generalized: str) -> tuple[int, int]:
        """
        Find the level a published value was generalized to.

        Parameters
        ----------
        original : str
            Value in the original dataset
        generalized : str
            Value published for it in the anonymized dataset

        Returns
        -------
        tuple[int, int]
            The level and the height of the row of the original value

        Raises
        ------
        ValueError
            If the published value is not a generalization of the original value
        """
        idx = self.leaf_to_row.get(original)
        if idx is None:
            if generalized == original:
                return 0, self.height
            if generalized == self.suppressed_value:
                return self.height, self.height
            raise ValueError(f"{original!r} is not a value of the hierarchy")
        row = self.rows[idx]
        height = len(row) - 1
        level = first(range(len(row)), key=lambda l: row[l] == generalized)
        if level is not None:
            return level, height
        if generalized == self.suppressed_value:
            return height, height
        raise ValueError(f"{generalized!r} is not a generalization of {original!r} in the hierarchy")


def resolve_hierarchy(
    logger: logging.Logger,
    view: DatasetView,
    column: int,
    config: QualityConfiguration,
) -> Hierarchy:
    """
    Return the hierarchy of a column, fabricating or repairing it if needed.

    Parameters
    ----------
    logger : logging.Logger
        Logger for recording fabrications and repairs
    view : DatasetView
        Dataset whose definition holds the hierarchy
    column : int
        Index of the column
    config : QualityConfiguration
        Provides the suppressed value

    Returns
    -------
    Hierarchy
        A hierarchy whose rows all end with the suppressed value

    Notes
    -----
    Never raises for malformed hierarchies; the definition is never modified.
    """
    attribute = view.attribute_name(column)
    suppressed_value = config.suppressed_value
    rows = [list(row) for row in view.definition.hierarchy(attribute) if row]
    if not rows:
        values = view.distinct_values(column)
        logger.debug("Creating trivial hierarchy for %s with %d values", attribute, len(values))
        rows = (
            make_flat_default_gtree(values, root_value=suppressed_value).to_hierarchy()
            if values
            else []
        )
    # every row must end with the suppressed value
    if rows and {row[-1] for row in rows} != {suppressed_value}:
        logger.debug("Adding level %r to the hierarchy of %s", suppressed_value, attribute)
        rows = [row + [suppressed_value] for row in rows]
    return Hierarchy.of(rows, suppressed_value)


def resolve_hierarchies(
    logger: logging.Logger,
    context: Optional[ComputationContext],
    view: DatasetView,
    indices: Sequence[int],
    config: QualityConfiguration,
) -> list[Hierarchy]:
    """
    Resolve the hierarchies of all given columns, see resolve_hierarchy.

    Raises
    ------
    ComputationInterruptedError
        If cancellation is requested
    """
    hierarchies = []
    for column in indices:
        hierarchies.append(resolve_hierarchy(logger, view, column, config))
        if context is not None:
            context.check_interrupt()
    return hierarchies

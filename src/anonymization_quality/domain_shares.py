"""
Domain shares: the fraction of an attribute's domain a generalized label denotes.

Two strategies exist. Raw shares enumerate the materialized hierarchy and count the
original values each label subsumes. Redaction shares are computed in closed form
from the domain properties of a redaction-based hierarchy builder. The strategy is
chosen per attribute.
"""

import logging
from typing import Optional, Sequence, Union

from anonymization_quality.config import QualityConfiguration
from anonymization_quality.dataset import DatasetView
from anonymization_quality.hierarchies import Hierarchy
from anonymization_quality.hierarchy_builders import (
    HierarchyBuilder,
    IntervalHierarchyBuilder,
    RedactionHierarchyBuilder,
)


class UnsupportedHierarchyError(ValueError):
    """Raised for hierarchies whose domain shares cannot be computed."""


class RawDomainShare:
    """
    Domain shares derived from a materialized hierarchy.

    The share of a label on level l is the number of distinct original values
    (level 0 labels) that have this label on level l, divided by the number of
    distinct original values.

    Parameters
    ----------
    hierarchy : Hierarchy
        Resolved hierarchy of the attribute
    suppressed_value : str
        Label of the top level, whose share is always 1
    """

    def __init__(self, hierarchy: Hierarchy, suppressed_value: str) -> None:
        leaves = hierarchy.leaves
        if not leaves:
            raise ValueError("cannot compute domain shares of an empty hierarchy")
        self.suppressed_value = suppressed_value
        self.domain_size = float(len(leaves))
        level_to_label_to_leaves: list[dict[str, set[str]]] = [
            {} for _ in range(hierarchy.height + 1)
        ]
        for row in hierarchy.rows:
            for level, label in enumerate(row):
                level_to_label_to_leaves[level].setdefault(label, set()).add(row[0])
        self._level_to_shares = [
            {label: len(subsumed) / self.domain_size for label, subsumed in label_to_leaves.items()}
            for label_to_leaves in level_to_label_to_leaves
        ]
        # for lookups without level, the most specific occurrence of a label counts
        self._shares: dict[str, float] = {}
        for shares in self._level_to_shares:
            for label, share in shares.items():
                self._shares.setdefault(label, share)

    @property
    def minimum_share(self) -> float:
        return 1.0 / self.domain_size

    def share_of(self, label: str, level: Optional[int] = None) -> float:
        """
        Share of the domain denoted by a label.

        Parameters
        ----------
        label : str
            Label on any level of the hierarchy
        level : int, optional
            Level of the label, if known, by default None

        Returns
        -------
        float
            A value in (0, 1]

        Raises
        ------
        KeyError
            If the label does not occur in the hierarchy
        """
        # an original value may equal the suppressed value; its level decides
        if level is not None and level < len(self._level_to_shares):
            share = self._level_to_shares[level].get(label)
            if share is not None:
                return share
        if label == self.suppressed_value:
            return 1.0
        return self._shares[label]


class RedactionDomainShare:
    """
    Domain shares of redaction-based hierarchies, in closed form.

    A label with r redacted characters stands for alphabet_size ** r values out of
    domain_size values.

    Parameters
    ----------
    builder : RedactionHierarchyBuilder
        Builder with available domain properties
    suppressed_value : str
        Label whose share is always 1
    """

    def __init__(self, builder: RedactionHierarchyBuilder, suppressed_value: str) -> None:
        if not builder.is_domain_properties_available():
            raise ValueError("domain properties of the redaction builder are not available")
        assert builder.alphabet_size is not None and builder.domain_size is not None
        self.suppressed_value = suppressed_value
        self.redaction_character = builder.redaction_character
        self.alphabet_size = float(builder.alphabet_size)
        self.domain_size = float(builder.domain_size)

    @property
    def minimum_share(self) -> float:
        return min(1.0, 1.0 / self.domain_size)

    def share_of(self, label: str, level: Optional[int] = None) -> float:
        if label == self.suppressed_value:
            return 1.0
        redacted = label.count(self.redaction_character)
        return min(1.0, pow(self.alphabet_size, redacted) / self.domain_size)


DomainShare = Union[RawDomainShare, RedactionDomainShare]


def get_domain_share(
    hierarchy: Hierarchy,
    builder: Optional[HierarchyBuilder],
    config: QualityConfiguration,
) -> DomainShare:
    """
    Build the domain shares of one attribute.

    Parameters
    ----------
    hierarchy : Hierarchy
        Resolved hierarchy of the attribute
    builder : HierarchyBuilder, optional
        Builder of the hierarchy, if known
    config : QualityConfiguration
        Provides the suppressed value

    Returns
    -------
    DomainShare
        Redaction shares if builder is a redaction builder with available domain
        properties, raw shares otherwise

    Raises
    ------
    UnsupportedHierarchyError
        For interval-based hierarchies
    """
    if isinstance(builder, RedactionHierarchyBuilder) and builder.is_domain_properties_available():
        return RedactionDomainShare(builder, config.suppressed_value)
    if isinstance(builder, IntervalHierarchyBuilder):
        # TODO(Later) derive shares of intervals from the bounds of the domain
        raise UnsupportedHierarchyError("domain shares of interval-based hierarchies are not supported")
    return RawDomainShare(hierarchy, config.suppressed_value)


def get_domain_shares(
    logger: logging.Logger,
    view: DatasetView,
    indices: Sequence[int],
    hierarchies: Sequence[Hierarchy],
    config: QualityConfiguration,
) -> list[Optional[DomainShare]]:
    """
    Build the domain shares of all given columns.

    Parameters
    ----------
    logger : logging.Logger
        Logger for recording attributes without shares
    view : DatasetView
        Dataset whose definition holds the hierarchy builders
    indices : Sequence[int]
        Column indices of the quasi-identifiers
    hierarchies : Sequence[Hierarchy]
        Resolved hierarchies, aligned with indices
    config : QualityConfiguration
        Provides the suppressed value

    Returns
    -------
    list[Optional[DomainShare]]
        Shares aligned with indices; None for attributes whose shares could not be built
    """
    shares: list[Optional[DomainShare]] = []
    for column, hierarchy in zip(indices, hierarchies):
        attribute = view.attribute_name(column)
        try:
            builder = view.definition.hierarchy_builder(attribute)
            shares.append(get_domain_share(hierarchy, builder, config))
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("No domain shares for %s: %s", attribute, exc)
            shares.append(None)
    return shares

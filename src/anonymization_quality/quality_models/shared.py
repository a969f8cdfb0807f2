"""
Input contract and helpers shared by all quality models.

Every quality model is a function taking a QualityModelInput and returning either a
ColumnOrientedMeasure or a QualityMeasure. Models must not modify their input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generator, Optional, Union

from anonymization_quality.config import QualityConfiguration
from anonymization_quality.context import ComputationContext
from anonymization_quality.dataset import DatasetView
from anonymization_quality.domain_shares import DomainShare, RawDomainShare
from anonymization_quality.groupify import EquivalenceClasses, Tuple, iter_rows
from anonymization_quality.hierarchies import Hierarchy
from anonymization_quality.measures import ColumnOrientedMeasure, QualityMeasure

Orientation = Enum("Orientation", ["COLUMN", "ROW"])

Measure = Union[ColumnOrientedMeasure, QualityMeasure]


@dataclass(frozen=True)
class QualityModelInput:
    """
    Artifacts shared by all quality models of one computation.

    Attributes
    ----------
    context : ComputationContext, optional
        Polled for cancellation
    input_view : DatasetView
        The original dataset
    output_view : DatasetView
        The anonymized dataset; row i holds the anonymized version of row i of input_view
    grouped_input : EquivalenceClasses
        Equivalence classes of input_view
    grouped_output : EquivalenceClasses
        Equivalence classes of output_view
    hierarchies : tuple[Hierarchy, ...]
        Resolved hierarchies, aligned with indices
    shares : tuple[Optional[DomainShare], ...]
        Domain shares, aligned with indices; None where unavailable
    indices : tuple[int, ...]
        Column indices of the quasi-identifiers, ascending
    attributes : tuple[str, ...]
        Attribute names, aligned with indices
    config : QualityConfiguration
        Configuration of the models
    """

    context: Optional[ComputationContext]
    input_view: DatasetView
    output_view: DatasetView
    grouped_input: EquivalenceClasses
    grouped_output: EquivalenceClasses
    hierarchies: tuple[Hierarchy, ...]
    shares: tuple[Optional[DomainShare], ...]
    indices: tuple[int, ...]
    attributes: tuple[str, ...]
    config: QualityConfiguration

    @property
    def num_rows(self) -> int:
        return self.input_view.num_rows()

    @property
    def positions_with_shares(self) -> list[int]:
        """Positions (into indices) of the attributes that have domain shares."""
        return [pos for pos, share in enumerate(self.shares) if share is not None]


@dataclass(frozen=True)
class QualityModel:
    """
    A named quality model.

    Attributes
    ----------
    name : str
        Name of the model, used as key of its result
    orientation : Orientation
        COLUMN models return a ColumnOrientedMeasure, ROW models a QualityMeasure
    evaluate : Callable[[QualityModelInput], Measure]
        Computes the measure
    reference : str
        Publication the model is taken from
    """

    name: str
    orientation: Orientation
    evaluate: Callable[[QualityModelInput], Measure]
    reference: str = ""

    def unavailable(self, attributes: tuple[str, ...]) -> Measure:
        """Empty result of this model, for when it could not be computed."""
        if self.orientation == Orientation.COLUMN:
            return ColumnOrientedMeasure.unavailable(attributes)
        return QualityMeasure.unavailable()


def iter_row_pairs(
    model_input: QualityModelInput,
) -> Generator[tuple[Tuple, Tuple, bool], None, None]:
    """
    Iterate over original and anonymized quasi-identifier tuples, row by row.

    Yields
    ------
    tuple[Tuple, Tuple, bool]
        Original tuple, anonymized tuple and whether the anonymized row is an outlier

    Raises
    ------
    ComputationInterruptedError
        If cancellation is requested
    """
    if model_input.num_rows == 0:
        raise ValueError("quality models are undefined for datasets without rows")
    for (_, original, _), (_, anonymized, outlier) in zip(
        iter_rows(model_input.context, model_input.input_view, model_input.indices),
        iter_rows(None, model_input.output_view, model_input.indices),
    ):
        yield original, anonymized, outlier


def published_value(model_input: QualityModelInput, anonymized: str, outlier: bool) -> str:
    """The label published for a cell; suppressed rows publish the suppressed value."""
    return model_input.config.suppressed_value if outlier else anonymized


def get_share(share: DomainShare, hierarchy: Hierarchy, original: str, published: str) -> float:
    """
    Share of the domain denoted by a published label.

    Raw shares are looked up on the level the original value was generalized to.
    """
    level = hierarchy.level_of(original, published)[0] if isinstance(share, RawDomainShare) else None
    return share.share_of(published, level)

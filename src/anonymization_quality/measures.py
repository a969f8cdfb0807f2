"""
Results of the quality models.

A QualityMeasure is a value together with the bounds the model can produce.
Row-oriented models produce a single QualityMeasure, column-oriented models one per
attribute plus their arithmetic mean. A measure that could not be computed is
unavailable; its numbers are NOT_DEFINED_NA and it is never clamped to a bound.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Sequence

import numpy as np

from anonymization_quality.constants import EPSILON, NOT_DEFINED_NA


@dataclass(frozen=True)
class QualityMeasure:
    """
    A value in [minimum, maximum].

    Attributes
    ----------
    minimum : float
        Best value the model can produce
    value : float
        The measured value
    maximum : float
        Worst value the model can produce

    Raises
    ------
    ValueError
        If an available measure violates its bounds by more than EPSILON
    """

    minimum: float = NOT_DEFINED_NA
    value: float = NOT_DEFINED_NA
    maximum: float = NOT_DEFINED_NA

    def __post_init__(self) -> None:
        if not self.available:
            return
        if self.minimum > self.maximum + EPSILON:
            raise ValueError(f"minimum {self.minimum} > maximum {self.maximum}")
        if not self.minimum - EPSILON <= self.value <= self.maximum + EPSILON:
            raise ValueError(f"{self.value} not in [{self.minimum}, {self.maximum}]")
        # float noise only
        object.__setattr__(self, "value", min(max(self.value, self.minimum), self.maximum))

    @classmethod
    def unavailable(cls) -> "QualityMeasure":
        return cls()

    @classmethod
    def neutral(cls) -> "QualityMeasure":
        """Measure of a dataset compared with itself."""
        return cls(0.0, 0.0, 1.0)

    @property
    def available(self) -> bool:
        return not any(math.isnan(x) for x in (self.minimum, self.value, self.maximum))

    @property
    def normalized(self) -> float:
        """
        The value mapped to [0, 1], where 0 is the minimum.

        Returns
        -------
        float
            (value - minimum) / (maximum - minimum), 0.0 if both bounds are equal,
            NOT_DEFINED_NA if unavailable
        """
        if not self.available:
            return NOT_DEFINED_NA
        if self.maximum - self.minimum <= EPSILON:
            return 0.0
        return (self.value - self.minimum) / (self.maximum - self.minimum)


@dataclass(frozen=True)
class ColumnOrientedMeasure:
    """
    One QualityMeasure per attribute, plus their arithmetic mean.

    Attributes
    ----------
    measures : Mapping[str, QualityMeasure]
        Measure per attribute, in attribute order; entries may be unavailable
    aggregate : QualityMeasure
        Arithmetic mean of the minimums, values and maximums of the available
        entries; unavailable if no entry is
    """

    measures: Mapping[str, QualityMeasure] = field(default_factory=dict)
    aggregate: QualityMeasure = field(default_factory=QualityMeasure.unavailable)

    @classmethod
    def of(
        cls,
        attributes: Sequence[str],
        minimum: Sequence[float],
        values: Sequence[float],
        maximum: Sequence[float],
    ) -> "ColumnOrientedMeasure":
        """
        Build a measure from aligned per-attribute arrays.

        Parameters
        ----------
        attributes : Sequence[str]
            Attribute names
        minimum, values, maximum : Sequence[float]
            Bounds and values aligned with attributes; NaN marks an unavailable entry

        Returns
        -------
        ColumnOrientedMeasure
        """
        measures = {
            attribute: QualityMeasure(lo, value, hi)
            for attribute, lo, value, hi in zip(attributes, minimum, values, maximum)
        }
        available = [measure for measure in measures.values() if measure.available]
        if not available:
            return cls(measures, QualityMeasure.unavailable())
        aggregate = QualityMeasure(
            float(np.mean([measure.minimum for measure in available])),
            float(np.mean([measure.value for measure in available])),
            float(np.mean([measure.maximum for measure in available])),
        )
        return cls(measures, aggregate)

    @classmethod
    def unavailable(cls, attributes: Sequence[str]) -> "ColumnOrientedMeasure":
        return cls({attribute: QualityMeasure.unavailable() for attribute in attributes})

    @classmethod
    def neutral(cls, attributes: Sequence[str]) -> "ColumnOrientedMeasure":
        """Measure of a dataset compared with itself."""
        n = len(attributes)
        return cls.of(attributes, [0.0] * n, [0.0] * n, [1.0] * n)

    @property
    def available(self) -> bool:
        return self.aggregate.available

    @property
    def arithmetic_mean(self) -> float:
        return self.aggregate.value

    def get(self, attribute: str) -> Optional[QualityMeasure]:
        return self.measures.get(attribute)

    def __getitem__(self, attribute: str) -> QualityMeasure:
        return self.measures[attribute]

    def __iter__(self) -> Iterator[str]:
        return iter(self.measures)

    def __len__(self) -> int:
        return len(self.measures)

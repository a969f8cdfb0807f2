"""
Builders that materialize generalization hierarchies and describe how they did it.

A data definition may carry a builder next to a hierarchy. The builder is metadata
the quality models can exploit: redaction-based hierarchies have a closed form for
the share of the domain each label covers, which avoids enumerating the hierarchy.
"""

import math
from enum import Enum
from typing import Iterable, Optional

from anonymization_quality.constants import SUPPRESSED_VALUE

Alignment = Enum("Alignment", ["LEFT", "RIGHT"])


class HierarchyBuilder:
    """Base class of all hierarchy builders."""

    def build(self, values: Iterable[str]) -> list[list[str]]:
        raise NotImplementedError


class RedactionHierarchyBuilder(HierarchyBuilder):
    """
    Builds hierarchies by redacting characters one at a time.

    Values are padded to the length of the longest value and characters are
    replaced by the redaction character from right to left (for left aligned values),
    so that level i of a value has i redacted characters.

    Parameters
    ----------
    redaction_character : str, optional
        Character replacing redacted characters, by default "*"
    padding_character : str, optional
        Character used to pad values to the same length, by default " "
    alignment : Alignment, optional
        LEFT pads on the right and redacts from the right; RIGHT mirrors this,
        by default Alignment.LEFT
    alphabet_size : int, optional
        Number of distinct characters values are made of
    max_value_length : int, optional
        Length of the longest value
    domain_size : float, optional
        Number of values the attribute may take; defaults to
        alphabet_size ** max_value_length when both are known

    Notes
    -----
    Domain properties can be given explicitly or derived from data with prepare().
    """

    def __init__(
        self,
        redaction_character: str = "*",
        padding_character: str = " ",
        alignment: Alignment = Alignment.LEFT,
        alphabet_size: Optional[int] = None,
        max_value_length: Optional[int] = None,
        domain_size: Optional[float] = None,
    ) -> None:
        if len(redaction_character) != 1 or len(padding_character) != 1:
            raise ValueError("redaction and padding characters must be single characters")
        self.redaction_character = redaction_character
        self.padding_character = padding_character
        self.alignment = alignment
        self.alphabet_size = alphabet_size
        self.max_value_length = max_value_length
        self.domain_size = domain_size
        if self.domain_size is None and alphabet_size is not None and max_value_length is not None:
            self.domain_size = math.pow(alphabet_size, max_value_length)

    def prepare(self, values: Iterable[str]) -> "RedactionHierarchyBuilder":
        """
        Derive the domain properties from the values of an attribute.

        Parameters
        ----------
        values : Iterable[str]
            Values of the attribute

        Returns
        -------
        RedactionHierarchyBuilder
            self, for chaining
        """
        values = list(values)
        characters = set()
        for value in values:
            characters.update(value)
        self.alphabet_size = len(characters)
        self.max_value_length = max((len(value) for value in values), default=0)
        self.domain_size = math.pow(self.alphabet_size, self.max_value_length)
        return self

    def is_domain_properties_available(self) -> bool:
        return (
            self.alphabet_size is not None
            and self.alphabet_size > 0
            and self.max_value_length is not None
            and self.max_value_length > 0
            and self.domain_size is not None
            and self.domain_size > 0
        )

    def build(self, values: Iterable[str]) -> list[list[str]]:
        """
        Materialize the hierarchy for the given values.

        Parameters
        ----------
        values : Iterable[str]
            Distinct values of the attribute

        Returns
        -------
        list[list[str]]
            One row per value: the value itself followed by max_value_length levels
            of increasingly redacted, padded versions of it
        """
        values = list(dict.fromkeys(values))
        if self.max_value_length is None:
            self.prepare(values)
        assert self.max_value_length is not None
        length = max([self.max_value_length] + [len(value) for value in values])
        hierarchy = []
        for value in values:
            if self.alignment == Alignment.LEFT:
                padded = value.ljust(length, self.padding_character)
            else:
                padded = value.rjust(length, self.padding_character)
            row = [value]
            for redacted in range(1, length + 1):
                if self.alignment == Alignment.LEFT:
                    row.append(padded[: length - redacted] + self.redaction_character * redacted)
                else:
                    row.append(self.redaction_character * redacted + padded[redacted:])
            hierarchy.append(row)
        return hierarchy


class IntervalHierarchyBuilder(HierarchyBuilder):
    """
    Builds hierarchies for numerical values by grouping them into intervals.

    Level 1 holds intervals of the given width starting at lower_bound; every
    further level groups fanout adjacent intervals. The top level is the
    suppressed value.

    Parameters
    ----------
    lower_bound : float
        Start of the first interval
    interval_width : float
        Width of the intervals on level 1
    fanout : int, optional
        Number of intervals merged per level, by default 2
    levels : int, optional
        Number of interval levels, by default 3
    suppressed_value : str, optional
        Label of the top level, by default SUPPRESSED_VALUE

    Notes
    -----
    The raw domain share computation cannot handle interval hierarchies, which
    subsume values that are not enumerated in the hierarchy.
    """

    def __init__(
        self,
        lower_bound: float,
        interval_width: float,
        fanout: int = 2,
        levels: int = 3,
        suppressed_value: str = SUPPRESSED_VALUE,
    ) -> None:
        if interval_width <= 0 or fanout < 1 or levels < 1:
            raise ValueError("interval_width must be positive, fanout and levels at-least 1")
        self.lower_bound = lower_bound
        self.interval_width = interval_width
        self.fanout = fanout
        self.levels = levels
        self.suppressed_value = suppressed_value

    def _interval(self, value: float, level: int) -> str:
        width = self.interval_width * math.pow(self.fanout, level - 1)
        start = self.lower_bound + math.floor((value - self.lower_bound) / width) * width
        return f"[{start:g}, {start + width:g}["

    def build(self, values: Iterable[str]) -> list[list[str]]:
        hierarchy = []
        for value in dict.fromkeys(values):
            number = float(value)
            row = [value] + [self._interval(number, level) for level in range(1, self.levels + 1)]
            row.append(self.suppressed_value)
            hierarchy.append(row)
        return hierarchy


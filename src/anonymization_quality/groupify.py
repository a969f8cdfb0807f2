"""
Grouping of rows into equivalence classes.

Rows with the same quasi-identifier values form an equivalence class. Grouping is
done once for the original and once for the anonymized dataset and shared by all
quality models.
"""

from collections.abc import Mapping
from typing import Generator, Iterator, Optional, Sequence

from anonymization_quality.context import ComputationContext
from anonymization_quality.dataset import DatasetView

Tuple = tuple[str, ...]


class EquivalenceClasses(Mapping):
    """
    Frequencies of quasi-identifier tuples.

    Maps each tuple to the number of rows having it. Rows flagged as outliers
    (suppressed) are counted as well and additionally tracked per tuple.

    Parameters
    ----------
    capacity : int, optional
        Expected number of classes; informational, dicts grow as needed, by default 10
    """

    def __init__(self, capacity: int = 10) -> None:
        self.capacity = capacity
        self._counts: dict[Tuple, int] = {}
        self._outliers: dict[Tuple, int] = {}
        self.num_rows = 0
        self.num_outliers = 0

    def add(self, key: Tuple, outlier: bool = False) -> None:
        self._counts[key] = self._counts.get(key, 0) + 1
        self.num_rows += 1
        if outlier:
            self._outliers[key] = self._outliers.get(key, 0) + 1
            self.num_outliers += 1

    def __getitem__(self, key: Tuple) -> int:
        return self._counts[key]

    def __iter__(self) -> Iterator[Tuple]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def outliers(self, key: Tuple) -> int:
        """Number of outlier rows with the given tuple."""
        return self._outliers.get(key, 0)

    def non_outlier_counts(self) -> list[int]:
        """Sizes of the classes formed by rows that are not outliers."""
        return [
            count - self._outliers.get(key, 0)
            for key, count in self._counts.items()
            if count > self._outliers.get(key, 0)
        ]


def iter_rows(
    context: Optional[ComputationContext],
    view: DatasetView,
    indices: Sequence[int],
) -> Generator[tuple[int, Tuple, bool], None, None]:
    """
    Iterate over the quasi-identifier tuples of a dataset.

    Parameters
    ----------
    context : ComputationContext, optional
        Polled for cancellation once per row
    view : DatasetView
        The dataset
    indices : Sequence[int]
        Column indices, tuples follow their order

    Yields
    ------
    tuple[int, Tuple, bool]
        Row number, tuple of values and whether the row is an outlier

    Raises
    ------
    ComputationInterruptedError
        If cancellation is requested
    """
    for row in range(view.num_rows()):
        if context is not None:
            context.check_interrupt()
        yield row, tuple(view.value(row, column) for column in indices), view.is_outlier(row)


def groupify(
    context: Optional[ComputationContext],
    view: DatasetView,
    indices: Sequence[int],
) -> EquivalenceClasses:
    """
    Partition the rows of a dataset into equivalence classes.

    Parameters
    ----------
    context : ComputationContext, optional
        Polled for cancellation once per row
    view : DatasetView
        The dataset
    indices : Sequence[int]
        Column indices of the quasi-identifiers

    Returns
    -------
    EquivalenceClasses
        Frequencies summing up to view.num_rows()
    """
    equivalence_classes = EquivalenceClasses(capacity=max(10, view.num_rows() // 10))
    for _, key, outlier in iter_rows(context, view, indices):
        equivalence_classes.add(key, outlier)
    return equivalence_classes

"""
Read-only access to the datasets whose quality is measured.

The quality engine only talks to datasets through the DatasetView protocol. This
module also provides DataFrameView, which exposes a pandas DataFrame and a
DataDefinition (quasi-identifiers, hierarchies and hierarchy builders) through
that protocol.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence, Union

import numpy as np
import pandas as pd

from anonymization_quality.constants import NULL_VALUE
from anonymization_quality.gtrees import GTree
from anonymization_quality.hierarchy_builders import HierarchyBuilder


class DataDefinition:
    """
    Describes the role of the attributes of a dataset.

    Parameters
    ----------
    quasi_identifiers : Sequence[str]
        Names of the quasi-identifying attributes
    hierarchies : Mapping[str, Union[Sequence[Sequence[str]], GTree]], optional
        Generalization hierarchy per attribute, either as a table (one row per
        value, labels from specific to general) or as a generalization tree
    hierarchy_builders : Mapping[str, HierarchyBuilder], optional
        Builder that produced the hierarchy of an attribute, if known
    """

    def __init__(
        self,
        quasi_identifiers: Sequence[str],
        hierarchies: Optional[Mapping[str, Union[Sequence[Sequence[str]], GTree]]] = None,
        hierarchy_builders: Optional[Mapping[str, HierarchyBuilder]] = None,
    ) -> None:
        self._quasi_identifiers = list(dict.fromkeys(quasi_identifiers))
        self._hierarchies = dict(hierarchies or {})
        self._hierarchy_builders = dict(hierarchy_builders or {})

    def quasi_identifying_attributes(self) -> set[str]:
        return set(self._quasi_identifiers)

    def hierarchy(self, attribute: str) -> list[list[str]]:
        """
        Return a copy of the hierarchy defined for an attribute.

        Parameters
        ----------
        attribute : str
            Attribute name

        Returns
        -------
        list[list[str]]
            The hierarchy table, empty if none is defined. Changing the result
            never changes the definition.
        """
        hierarchy = self._hierarchies.get(attribute)
        if hierarchy is None:
            return []
        if isinstance(hierarchy, GTree):
            return hierarchy.to_hierarchy()
        return [list(row) for row in hierarchy]

    def hierarchy_builder(self, attribute: str) -> Optional[HierarchyBuilder]:
        return self._hierarchy_builders.get(attribute)


class DatasetView(Protocol):
    """
    Read-only accessor for a table.

    Cells are strings; columns are addressed by index, attributes by name.
    """

    @property
    def definition(self) -> DataDefinition: ...

    def num_rows(self) -> int: ...

    def num_columns(self) -> int: ...

    def attribute_name(self, column: int) -> str: ...

    def column_index_of(self, attribute: str) -> int: ...

    def data_type(self, attribute: str) -> Any: ...

    def value(self, row: int, column: int) -> str: ...

    def is_outlier(self, row: int) -> bool: ...

    def distinct_values(self, column: int) -> list[str]: ...


class DataFrameView:
    """
    DatasetView backed by a pandas DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        The data; cells are rendered as strings, missing cells as NULL_VALUE
    definition : DataDefinition
        Quasi-identifiers and hierarchies of the data
    suppressed : Sequence[bool], optional
        Marks rows that have been suppressed (outliers), by default no row

    Notes
    -----
    The cells are converted once, at construction; the view does not follow later
    changes of df.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        definition: DataDefinition,
        suppressed: Optional[Sequence[bool]] = None,
    ) -> None:
        if suppressed is not None and len(suppressed) != len(df):
            raise ValueError(
                f"suppressed has {len(suppressed)} entries but df has {len(df)} rows"
            )
        self._definition = definition
        self._columns = [str(col) for col in df.columns]
        self._dtypes = {str(col): dtype for col, dtype in df.dtypes.items()}
        self._cells = [
            df[col].astype(object).where(df[col].notna(), NULL_VALUE).astype(str).tolist()
            for col in df.columns
        ]
        self._suppressed = (
            np.asarray(suppressed, dtype=bool) if suppressed is not None else np.zeros(len(df), dtype=bool)
        )
        self._num_rows = len(df)

    @property
    def definition(self) -> DataDefinition:
        return self._definition

    def num_rows(self) -> int:
        return self._num_rows

    def num_columns(self) -> int:
        return len(self._columns)

    def attribute_name(self, column: int) -> str:
        return self._columns[column]

    def column_index_of(self, attribute: str) -> int:
        """
        Return the index of the column holding an attribute.

        Raises
        ------
        ValueError
            If the attribute is not a column of the view
        """
        try:
            return self._columns.index(attribute)
        except ValueError:
            raise ValueError(f"{attribute} is not a column of the dataset") from None

    def data_type(self, attribute: str) -> np.dtype:
        return self._dtypes[attribute]

    def value(self, row: int, column: int) -> str:
        return self._cells[column][row]

    def is_outlier(self, row: int) -> bool:
        return bool(self._suppressed[row])

    def distinct_values(self, column: int) -> list[str]:
        """Distinct values of a column, in order of first appearance."""
        return list(dict.fromkeys(self._cells[column]))

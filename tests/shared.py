"""Minimal shared utilities for quality testing."""

import logging
from typing import Optional

import numpy as np
import pandas as pd

from anonymization_quality.config import QualityConfiguration
from anonymization_quality.constants import EPSILON
from anonymization_quality.context import ComputationContext
from anonymization_quality.dataset import DataDefinition, DataFrameView
from anonymization_quality.measures import QualityMeasure
from anonymization_quality.quality_models import QualityModelInput
from anonymization_quality.statistics_quality import prepare_model_input

_LOGGER = logging.getLogger(__name__)

# Hierarchy of the "age" attribute of the small dataset below
AGE_HIERARCHY = [
    ["20", "young", "*"],
    ["30", "young", "*"],
    ["40", "old", "*"],
]


def make_views(
    original: dict,
    anonymized: dict,
    quasi_identifiers: list[str],
    hierarchies: Optional[dict] = None,
    hierarchy_builders: Optional[dict] = None,
    suppressed: Optional[list[bool]] = None,
) -> tuple[DataFrameView, DataFrameView]:
    """Create row-aligned views of an original and an anonymized dataset.

    Parameters
    ----------
    original : dict
        Columns of the original dataset
    anonymized : dict
        Columns of the anonymized dataset
    quasi_identifiers : list[str]
        Quasi-identifying columns
    hierarchies : Optional[dict]
        Hierarchy per attribute
    hierarchy_builders : Optional[dict]
        Hierarchy builder per attribute
    suppressed : Optional[list[bool]]
        Outlier flags of the anonymized rows

    Returns
    -------
    tuple[DataFrameView, DataFrameView]
        The input and the output view, sharing one data definition
    """
    definition = DataDefinition(quasi_identifiers, hierarchies, hierarchy_builders)
    input_view = DataFrameView(pd.DataFrame(original), definition)
    output_view = DataFrameView(pd.DataFrame(anonymized), definition, suppressed)
    return input_view, output_view


def make_small_views(suppressed: Optional[list[bool]] = None) -> tuple[DataFrameView, DataFrameView]:
    """Four rows; age is generalized with AGE_HIERARCHY, zip (no hierarchy) is suppressed."""
    return make_views(
        {"age": ["20", "20", "30", "40"], "zip": ["11", "12", "11", "12"], "id": ["a", "b", "c", "d"]},
        {"age": ["young", "young", "young", "old"], "zip": ["*", "*", "*", "*"], "id": ["a", "b", "c", "d"]},
        ["zip", "age"],
        hierarchies={"age": AGE_HIERARCHY},
        suppressed=suppressed,
    )


def make_model_input(
    input_view: DataFrameView,
    output_view: DataFrameView,
    context: Optional[ComputationContext] = None,
    config: Optional[QualityConfiguration] = None,
) -> QualityModelInput:
    """Prepare the shared input of the quality models."""
    return prepare_model_input(
        _LOGGER, context, input_view, output_view, config or QualityConfiguration()
    )


def assert_measure_allclose(
    actual: QualityMeasure,
    minimum: float,
    value: float,
    maximum: float,
    atol: float = EPSILON,
) -> None:
    """Assert a measure has the expected bounds and value.

    Raises
    ------
    AssertionError
        If a number differs by more than atol
    """
    np.testing.assert_allclose(
        [actual.minimum, actual.value, actual.maximum],
        [minimum, value, maximum],
        atol=atol,
        err_msg=f"{actual} != ({minimum}, {value}, {maximum})",
    )

"""
Anonymization Quality - Utility of anonymized tabular data.

This package compares an anonymized dataset with its original and reports how much
information the anonymization removed, using column-oriented (loss, non-uniform
entropy, precision) and row-oriented (AECS, ambiguity, discernibility,
KL-divergence, SSE) quality models.
"""

from anonymization_quality._version import __version__
from anonymization_quality.config import QualityConfiguration
from anonymization_quality.context import ComputationContext, ComputationInterruptedError
from anonymization_quality.dataset import DataDefinition, DataFrameView, DatasetView
from anonymization_quality.domain_shares import UnsupportedHierarchyError
from anonymization_quality.gtrees import GTree, make_flat_default_gtree
from anonymization_quality.hierarchy_builders import (
    Alignment,
    IntervalHierarchyBuilder,
    RedactionHierarchyBuilder,
)
from anonymization_quality.measures import ColumnOrientedMeasure, QualityMeasure
from anonymization_quality.statistics_quality import (
    ModelOutcome,
    ModelStatus,
    QualityResult,
    compute_quality,
    get_indices_of_quasi_identifiers,
)
from anonymization_quality.utils import QualityCallbacks

__all__ = [
    "__version__",
    "compute_quality",
    "get_indices_of_quasi_identifiers",
    "QualityResult",
    "ModelOutcome",
    "ModelStatus",
    "QualityMeasure",
    "ColumnOrientedMeasure",
    "QualityConfiguration",
    "ComputationContext",
    "ComputationInterruptedError",
    "UnsupportedHierarchyError",
    "DataDefinition",
    "DataFrameView",
    "DatasetView",
    "GTree",
    "make_flat_default_gtree",
    "Alignment",
    "RedactionHierarchyBuilder",
    "IntervalHierarchyBuilder",
    "QualityCallbacks",
]

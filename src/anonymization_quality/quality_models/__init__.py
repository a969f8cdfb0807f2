"""
Quality models for comparing an original dataset with its anonymized version.

Modules:
- shared: Input contract of the models and shared helpers
- column_oriented: Loss, non-uniform entropy and precision, one value per quasi-identifier
- row_oriented: AECS, ambiguity, discernibility, KL-divergence and SSE, one value per dataset

QUALITY_MODELS lists all models in the order they are evaluated by compute_quality.
"""

from .column_oriented import (
    evaluate_loss,
    evaluate_non_uniform_entropy,
    evaluate_precision,
)
from .row_oriented import (
    evaluate_aecs,
    evaluate_ambiguity,
    evaluate_discernibility,
    evaluate_kl_divergence,
    evaluate_sse,
)
from .shared import Measure, Orientation, QualityModel, QualityModelInput

QUALITY_MODELS: list[QualityModel] = [
    QualityModel("granularity", Orientation.COLUMN, evaluate_loss, "Iyengar 2002"),
    QualityModel(
        "non_uniform_entropy",
        Orientation.COLUMN,
        evaluate_non_uniform_entropy,
        "de Waal & Willenborg 1999",
    ),
    QualityModel("generalization_intensity", Orientation.COLUMN, evaluate_precision, "Sweeney 2002"),
    QualityModel("average_class_size", Orientation.ROW, evaluate_aecs, "LeFevre et al. 2006"),
    QualityModel("ambiguity", Orientation.ROW, evaluate_ambiguity, "Goldberger & Tassa 2010"),
    QualityModel("discernibility", Orientation.ROW, evaluate_discernibility, "Bayardo & Agrawal 2005"),
    QualityModel(
        "kullback_leibler_divergence",
        Orientation.ROW,
        evaluate_kl_divergence,
        "Machanavajjhala et al. 2007",
    ),
    QualityModel("sum_of_squared_errors", Orientation.ROW, evaluate_sse, "Soria-Comas et al. 2015"),
]

__all__ = [
    "QUALITY_MODELS",
    "Measure",
    "Orientation",
    "QualityModel",
    "QualityModelInput",
    "evaluate_loss",
    "evaluate_non_uniform_entropy",
    "evaluate_precision",
    "evaluate_aecs",
    "evaluate_ambiguity",
    "evaluate_discernibility",
    "evaluate_kl_divergence",
    "evaluate_sse",
]

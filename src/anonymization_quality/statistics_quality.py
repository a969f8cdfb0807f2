"""
Quality of an anonymized dataset compared with its original.

compute_quality is the entry point of the package. It extracts the
quasi-identifiers, measures the completeness of the anonymized data, builds the
artifacts shared by the quality models (equivalence classes, hierarchies, domain
shares) once and evaluates all models of QUALITY_MODELS in order. A model that fails
only makes its own measure unavailable.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from anonymization_quality.config import QualityConfiguration
from anonymization_quality.constants import (
    ANY_VALUE,
    NULL_VALUE,
    PROGRESS_DONE,
    PROGRESS_GROUPED,
    PROGRESS_PREPARED,
)
from anonymization_quality.context import ComputationContext, ComputationInterruptedError
from anonymization_quality.dataset import DatasetView
from anonymization_quality.domain_shares import get_domain_shares
from anonymization_quality.groupify import groupify
from anonymization_quality.hierarchies import resolve_hierarchies
from anonymization_quality.measures import ColumnOrientedMeasure, QualityMeasure
from anonymization_quality.quality_models import (
    QUALITY_MODELS,
    Measure,
    Orientation,
    QualityModel,
    QualityModelInput,
)
from anonymization_quality.utils import QualityCallbacks

ModelStatus = Enum("ModelStatus", ["OK", "FAILED", "CANCELLED"])


@dataclass(frozen=True)
class ModelOutcome:
    """
    Result of evaluating one quality model.

    Attributes
    ----------
    status : ModelStatus
        OK if the model was computed, FAILED if it raised, CANCELLED if it was
        interrupted or skipped after a cancellation
    measure : Measure
        The measure; unavailable unless status is OK
    reason : str
        Why the model is not OK
    """

    status: ModelStatus
    measure: Measure
    reason: str = ""


@dataclass(frozen=True)
class QualityResult:
    """
    Quality of an anonymized dataset according to all quality models.

    Attributes
    ----------
    attributes : tuple[str, ...]
        Quasi-identifiers considered, in column order
    data_types : Mapping[str, Any]
        Data type per attribute
    missing_values : ColumnOrientedMeasure
        Completeness per attribute: 1 minus the fraction of suppressed, wildcard
        or null cells
    outcomes : Mapping[str, ModelOutcome]
        Outcome per quality model name, in evaluation order
    cancelled : bool
        Whether the computation was cancelled before all measures were computed
    """

    attributes: tuple[str, ...]
    data_types: Mapping[str, Any]
    missing_values: ColumnOrientedMeasure
    outcomes: Mapping[str, ModelOutcome] = field(default_factory=dict)
    cancelled: bool = False

    def data_type(self, attribute: str) -> Any:
        return self.data_types[attribute]

    def measure(self, name: str) -> Measure:
        return self.outcomes[name].measure

    @property
    def granularity(self) -> ColumnOrientedMeasure:
        """Loss model, see evaluate_loss."""
        return self.measure("granularity")  # type: ignore[return-value]

    @property
    def non_uniform_entropy(self) -> ColumnOrientedMeasure:
        return self.measure("non_uniform_entropy")  # type: ignore[return-value]

    @property
    def generalization_intensity(self) -> ColumnOrientedMeasure:
        """Precision model, see evaluate_precision."""
        return self.measure("generalization_intensity")  # type: ignore[return-value]

    @property
    def average_class_size(self) -> QualityMeasure:
        return self.measure("average_class_size")  # type: ignore[return-value]

    @property
    def ambiguity(self) -> QualityMeasure:
        return self.measure("ambiguity")  # type: ignore[return-value]

    @property
    def discernibility(self) -> QualityMeasure:
        return self.measure("discernibility")  # type: ignore[return-value]

    @property
    def kullback_leibler_divergence(self) -> QualityMeasure:
        return self.measure("kullback_leibler_divergence")  # type: ignore[return-value]

    @property
    def sum_of_squared_errors(self) -> QualityMeasure:
        return self.measure("sum_of_squared_errors")  # type: ignore[return-value]

    def to_dq_metrics(self) -> dict[str, float]:
        """
        Flatten the result into data quality metrics.

        Returns
        -------
        Dict[str, float]
            Normalized values keyed by "<model>" for row-oriented models and by
            "<model>__<attribute>" and "<model>__mean" for column-oriented models
            and for missing_values (which holds completeness, not normalized).
            Unavailable entries are NaN.
        """
        dq_metrics: dict[str, float] = {}
        for attribute, measure in self.missing_values.measures.items():
            dq_metrics[f"missing_values__{attribute}"] = measure.value
        dq_metrics["missing_values__mean"] = self.missing_values.aggregate.value
        for name, outcome in self.outcomes.items():
            measure = outcome.measure
            if isinstance(measure, ColumnOrientedMeasure):
                for attribute in self.attributes:
                    dq_metrics[f"{name}__{attribute}"] = measure[attribute].normalized
                dq_metrics[f"{name}__mean"] = measure.aggregate.normalized
            else:
                dq_metrics[name] = measure.normalized
        return dq_metrics


def get_indices_of_quasi_identifiers(view: DatasetView) -> list[int]:
    """
    Column indices of the quasi-identifiers of a dataset, ascending.

    Raises
    ------
    ValueError
        If a quasi-identifier is not a column of the dataset
    """
    return sorted(
        view.column_index_of(attribute)
        for attribute in view.definition.quasi_identifying_attributes()
    )


def validate_views(input_view: DatasetView, output_view: DatasetView, indices: Sequence[int]) -> None:
    """
    Check that output_view can be the anonymized version of input_view.

    Raises
    ------
    ValueError
        If the number of rows differs or the quasi-identifier columns do not match
    """
    if input_view.num_rows() != output_view.num_rows():
        raise ValueError(
            f"input has {input_view.num_rows()} rows but output has {output_view.num_rows()} rows"
        )
    for column in indices:
        if column >= output_view.num_columns():
            raise ValueError(f"output has no column {column}")
        if input_view.attribute_name(column) != output_view.attribute_name(column):
            raise ValueError(
                f"column {column} is {input_view.attribute_name(column)} in input "
                f"but {output_view.attribute_name(column)} in output"
            )


def get_missing_values(
    context: Optional[ComputationContext],
    output_view: DatasetView,
    indices: Sequence[int],
) -> ColumnOrientedMeasure:
    """
    Measure the completeness of the quasi-identifiers of a dataset.

    Parameters
    ----------
    context : ComputationContext, optional
        Polled for cancellation once per cell
    output_view : DatasetView
        The anonymized dataset
    indices : Sequence[int]
        Column indices of the quasi-identifiers

    Returns
    -------
    ColumnOrientedMeasure
        Per attribute 1 - k / n with bounds [0, 1], where k counts the rows that are
        outliers or hold ANY_VALUE or NULL_VALUE; unavailable without rows
    """
    attributes = [output_view.attribute_name(column) for column in indices]
    num_rows = output_view.num_rows()
    if num_rows == 0:
        return ColumnOrientedMeasure.unavailable(attributes)
    values = []
    for column in indices:
        missing = 0
        for row in range(num_rows):
            if output_view.is_outlier(row) or output_view.value(row, column) in (ANY_VALUE, NULL_VALUE):
                missing += 1
            if context is not None:
                context.check_interrupt()
        values.append(1.0 - missing / num_rows)
    n = len(indices)
    return ColumnOrientedMeasure.of(attributes, [0.0] * n, values, [1.0] * n)


def evaluate_model(
    logger: logging.Logger,
    model: QualityModel,
    model_input: QualityModelInput,
    callbacks: Optional[QualityCallbacks] = None,
) -> ModelOutcome:
    """
    Evaluate one quality model, turning any error into an unavailable measure.

    Returns
    -------
    ModelOutcome
        CANCELLED if the model raised ComputationInterruptedError, FAILED if it
        raised anything else, OK otherwise
    """
    if callbacks is not None:
        callbacks.model_bm(model.name)
    try:
        outcome = ModelOutcome(ModelStatus.OK, model.evaluate(model_input))
    except ComputationInterruptedError:
        logger.info("Computation of %s was interrupted", model.name)
        outcome = ModelOutcome(
            ModelStatus.CANCELLED, model.unavailable(model_input.attributes), "interrupted"
        )
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Failed to compute %s", model.name, exc_info=True)
        outcome = ModelOutcome(
            ModelStatus.FAILED,
            model.unavailable(model_input.attributes),
            f"{type(exc).__name__}: {exc}",
        )
    if callbacks is not None:
        callbacks.model_am(model.name)
    return outcome


def prepare_model_input(
    logger: logging.Logger,
    context: Optional[ComputationContext],
    input_view: DatasetView,
    output_view: DatasetView,
    config: QualityConfiguration,
) -> QualityModelInput:
    """
    Build the artifacts shared by all quality models.

    Groups both datasets into equivalence classes, resolves the hierarchies of the
    quasi-identifiers and builds their domain shares.

    Raises
    ------
    ComputationInterruptedError
        If cancellation is requested
    """
    indices = get_indices_of_quasi_identifiers(input_view)
    grouped_input = groupify(context, input_view, indices)
    grouped_output = groupify(context, output_view, indices)
    hierarchies = resolve_hierarchies(logger, context, input_view, indices, config)
    shares = get_domain_shares(logger, input_view, indices, hierarchies, config)
    return QualityModelInput(
        context=context,
        input_view=input_view,
        output_view=output_view,
        grouped_input=grouped_input,
        grouped_output=grouped_output,
        hierarchies=tuple(hierarchies),
        shares=tuple(shares),
        indices=tuple(indices),
        attributes=tuple(input_view.attribute_name(column) for column in indices),
        config=config,
    )


def _cancelled_outcomes(
    models: Sequence[QualityModel], attributes: tuple[str, ...]
) -> dict[str, ModelOutcome]:
    return {
        model.name: ModelOutcome(ModelStatus.CANCELLED, model.unavailable(attributes), "cancelled")
        for model in models
    }


def compute_quality(
    logger: logging.Logger,
    input_view: DatasetView,
    output_view: DatasetView,
    config: Optional[QualityConfiguration] = None,
    context: Optional[ComputationContext] = None,
    callbacks: Optional[QualityCallbacks] = None,
    anonymization_config: Optional[Mapping[str, Any]] = None,
) -> QualityResult:
    """
    Compare an anonymized dataset with its original using all quality models.

    Parameters
    ----------
    logger : logging.Logger
        Logger for recording the computation
    input_view : DatasetView
        The original dataset, whose definition names the quasi-identifiers and
        holds their hierarchies
    output_view : DatasetView
        The anonymized dataset, row-aligned with input_view. Passing input_view
        itself measures the original dataset against itself.
    config : QualityConfiguration, optional
        Configuration of the models; derived from anonymization_config if None
    context : ComputationContext, optional
        Cancellation flag and progress counter owned by the caller
    callbacks : QualityCallbacks, optional
        Optional callback object for tracking the duration of the models
    anonymization_config : Mapping[str, Any], optional
        Configuration of the anonymization that produced output_view

    Returns
    -------
    QualityResult
        Always complete: models that failed or were cancelled have unavailable
        measures and are marked in QualityResult.outcomes

    Raises
    ------
    ValueError
        If the views do not match (number of rows, quasi-identifier columns)

    Notes
    -----
    Progress is reported at 10 (after the completeness measure), 20 (after
    grouping and hierarchies) and in equal steps after each model, up to 100.
    A cancellation skips the remaining work and leaves progress below 100.
    """
    if config is None:
        config = QualityConfiguration.from_anonymization_config(anonymization_config)
    if context is None:
        context = ComputationContext()
    if callbacks is not None:
        callbacks.compute_quality_bm()

    indices = get_indices_of_quasi_identifiers(input_view)
    validate_views(input_view, output_view, indices)
    attributes = tuple(output_view.attribute_name(column) for column in indices)
    data_types = {attribute: output_view.data_type(attribute) for attribute in attributes}
    logger.debug("Computing quality for quasi-identifiers %s", attributes)

    try:
        missing_values = get_missing_values(context, output_view, indices)
    except ComputationInterruptedError:
        logger.info("Quality computation cancelled while measuring missing values")
        return QualityResult(
            attributes,
            data_types,
            ColumnOrientedMeasure.unavailable(attributes),
            _cancelled_outcomes(QUALITY_MODELS, attributes),
            cancelled=True,
        )
    context.report(PROGRESS_PREPARED)

    # Special case: the original dataset is compared with itself
    if output_view is input_view:
        outcomes: dict[str, ModelOutcome] = {
            model.name: ModelOutcome(
                ModelStatus.OK,
                ColumnOrientedMeasure.neutral(attributes)
                if model.orientation == Orientation.COLUMN
                else QualityMeasure.neutral(),
            )
            for model in QUALITY_MODELS
        }
        context.report(PROGRESS_DONE)
        if callbacks is not None:
            callbacks.compute_quality_am()
        return QualityResult(attributes, data_types, missing_values, outcomes)

    try:
        model_input = prepare_model_input(logger, context, input_view, output_view, config)
    except ComputationInterruptedError:
        logger.info("Quality computation cancelled while preparing the quality models")
        return QualityResult(
            attributes,
            data_types,
            missing_values,
            _cancelled_outcomes(QUALITY_MODELS, attributes),
            cancelled=True,
        )
    context.report(PROGRESS_GROUPED)

    outcomes = {}
    for i, model in enumerate(QUALITY_MODELS):
        if context.is_cancelled():
            outcomes.update(_cancelled_outcomes(QUALITY_MODELS[i:], attributes))
            break
        outcome = evaluate_model(logger, model, model_input, callbacks)
        outcomes[model.name] = outcome
        if outcome.status == ModelStatus.CANCELLED:
            outcomes.update(_cancelled_outcomes(QUALITY_MODELS[i + 1 :], attributes))
            break
        context.report(
            PROGRESS_GROUPED + (i + 1) * (PROGRESS_DONE - PROGRESS_GROUPED) // len(QUALITY_MODELS)
        )
    cancelled = any(outcome.status == ModelStatus.CANCELLED for outcome in outcomes.values())
    if cancelled:
        logger.info("Quality computation cancelled")
    if callbacks is not None:
        callbacks.compute_quality_am()
    return QualityResult(attributes, data_types, missing_values, outcomes, cancelled=cancelled)

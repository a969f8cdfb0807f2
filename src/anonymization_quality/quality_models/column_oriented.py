"""
Column-oriented quality models.

Each model measures the information lost per quasi-identifier. All values are in
[0, 1], where 0 means no loss (the anonymized value is the original value) and 1
means the value was suppressed.

Functions:
- evaluate_loss: Loss / granularity [Iyengar2002]_
- evaluate_non_uniform_entropy: Non-uniform entropy [deWaal1999]_
- evaluate_precision: Precision / generalization intensity [Sweeney2002]_

References
----------
.. [Iyengar2002] Iyengar, V.: Transforming data to satisfy privacy constraints.
       Proc Int Conf Knowl Disc Data Mining, p. 279-288 (2002)
.. [deWaal1999] De Waal, A. & Willenborg, L.: Information loss through global recoding
       and local suppression. Netherlands Off Stat, vol. 14, pp. 17-20, 1999.
.. [Sweeney2002] Sweeney, L.: Achieving k-anonymity privacy protection using generalization
       and suppression. J Uncertain Fuzz Knowl Sys 10 (5) (2002) 571-588.
"""

from collections import Counter

import numpy as np

from anonymization_quality.constants import NOT_DEFINED_NA
from anonymization_quality.measures import ColumnOrientedMeasure
from anonymization_quality.utils import sum_of_information

from .shared import QualityModelInput, get_share, iter_row_pairs, published_value


def evaluate_loss(model_input: QualityModelInput) -> ColumnOrientedMeasure:
    """
    Compute the loss metric for each quasi-identifier.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    ColumnOrientedMeasure
        Mean loss per attribute, bounds [0, 1]. Attributes without domain shares
        are unavailable.

    Notes
    -----
    The loss of a cell is :math:`(M_p - 1) / (M - 1)`, where :math:`M_p` is the
    number of original values subsumed by the published label and :math:`M` is the
    size of the domain. With the domain share s of the label, :math:`M_p = s \\cdot M`.
    Attributes with a single value have no loss.
    """
    positions = model_input.positions_with_shares
    totals = np.zeros(len(model_input.indices))
    for original, anonymized, outlier in iter_row_pairs(model_input):
        for pos in positions:
            share = model_input.shares[pos]
            assert share is not None
            if share.domain_size <= 1:
                continue
            published = published_value(model_input, anonymized[pos], outlier)
            subsumed = get_share(share, model_input.hierarchies[pos], original[pos], published) * share.domain_size
            totals[pos] += (subsumed - 1) / (share.domain_size - 1)
    n = len(model_input.indices)
    values = [
        totals[pos] / model_input.num_rows if pos in positions else NOT_DEFINED_NA
        for pos in range(n)
    ]
    minimum = [0.0 if pos in positions else NOT_DEFINED_NA for pos in range(n)]
    maximum = [1.0 if pos in positions else NOT_DEFINED_NA for pos in range(n)]
    return ColumnOrientedMeasure.of(model_input.attributes, minimum, values, maximum)


def evaluate_non_uniform_entropy(model_input: QualityModelInput) -> ColumnOrientedMeasure:
    """
    Compute the non-uniform entropy for each quasi-identifier.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    ColumnOrientedMeasure
        Normalized entropy per attribute, bounds [0, 1]

    Notes
    -----
    A record with original value x published as y loses
    :math:`-\\log_2 Pr(x | y)` bits, where :math:`Pr(x | y)` is estimated as the
    fraction of records published as y whose original value is x. For global
    recoding this equals :math:`Pr(x) / Pr(y)` as in [deWaal1999]_.

    The sum over all records is the conditional entropy of the original given the
    anonymized column, which never exceeds the entropy of the original column,
    i.e. the loss of suppressing all values. The latter is used as normalizer; if
    it is 0 (a single value), the attribute has no loss.
    """
    n = len(model_input.indices)
    originals: list[list[str]] = [[] for _ in range(n)]
    publisheds: list[list[str]] = [[] for _ in range(n)]
    for original, anonymized, outlier in iter_row_pairs(model_input):
        for pos in range(n):
            originals[pos].append(original[pos])
            publisheds[pos].append(published_value(model_input, anonymized[pos], outlier))

    num_rows = float(model_input.num_rows)
    values = []
    for pos in range(n):
        joint_counts = Counter(zip(originals[pos], publisheds[pos]))
        published_counts = Counter(publisheds[pos])
        original_counts = Counter(originals[pos])
        conditional = sum_of_information(
            np.array([joint_counts[pair] for pair in zip(originals[pos], publisheds[pos])], dtype=np.float64),
            np.array([published_counts[value] for value in publisheds[pos]], dtype=np.float64),
        )
        suppressed = sum_of_information(
            np.array([original_counts[value] for value in originals[pos]], dtype=np.float64),
            np.full(len(originals[pos]), num_rows, dtype=np.float64),
        )
        values.append(conditional / suppressed if suppressed > 0 else 0.0)
        if model_input.context is not None:
            model_input.context.check_interrupt()
    return ColumnOrientedMeasure.of(model_input.attributes, [0.0] * n, values, [1.0] * n)


def evaluate_precision(model_input: QualityModelInput) -> ColumnOrientedMeasure:
    """
    Compute the precision (generalization intensity) of each quasi-identifier.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    ColumnOrientedMeasure
        Mean of level / height per attribute, bounds [0, 1]

    Raises
    ------
    ValueError
        If a published value is not a generalization of its original value
    """
    n = len(model_input.indices)
    totals = np.zeros(n)
    for original, anonymized, outlier in iter_row_pairs(model_input):
        for pos in range(n):
            published = published_value(model_input, anonymized[pos], outlier)
            level, height = model_input.hierarchies[pos].level_of(original[pos], published)
            if height > 0:
                totals[pos] += level / height
    values = list(totals / model_input.num_rows)
    return ColumnOrientedMeasure.of(model_input.attributes, [0.0] * n, values, [1.0] * n)

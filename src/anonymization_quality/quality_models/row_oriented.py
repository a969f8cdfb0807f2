"""
Row-oriented quality models.

Each model reduces the whole anonymized dataset to a single QualityMeasure. Lower
values are better for all of them; the bounds of each measure are the values of an
unmodified and of a worst-case anonymized dataset.

Functions:
- evaluate_aecs: Average equivalence class size [LeFevre2006]_
- evaluate_ambiguity: Ambiguity [Goldberger2010]_
- evaluate_discernibility: Discernibility [Bayardo2005]_
- evaluate_kl_divergence: Kullback-Leibler divergence [Machanavajjhala2007]_
- evaluate_sse: Sum of squared errors [SoriaComas2015]_

References
----------
.. [LeFevre2006] LeFevre, K., Dewitt, D. J. & Ramakrishnan, R.
       Mondrian Multidimensional K-Anonymity. 22nd Int Conf Data Eng Icde'06 1-11 (2006)
.. [Goldberger2010] Goldberger, J. & Tassa, T. Efficient Anonymizations with Enhanced Utility.
       Trans Data Priv 3 (2010) 149-175.
.. [Bayardo2005] Bayardo, R. J. & Agrawal, R. Data Privacy through Optimal k-Anonymization.
       21st Int Conf Data Eng Icde'05 217-228 (2005)
.. [Machanavajjhala2007] Machanavajjhala, A., Kifer, D., Gehrke, J. & Venkitasubramaniam, M.
       L-diversity: Privacy beyond k-anonymity. ACM TKDD 1 (1) (2007)
.. [SoriaComas2015] Soria-Comas, J., Domingo-Ferrer, J., Sanchez, D. & Martinez, S.
       t-closeness through microaggregation: Strict privacy with enhanced utility
       preservation. IEEE TKDE 27 (11) (2015) 3098-3110.
"""

import math
from collections import Counter

import numpy as np
from scipy.special import rel_entr

from anonymization_quality.measures import QualityMeasure
from anonymization_quality.utils import sum_of_squares

from .shared import QualityModelInput, get_share, iter_row_pairs, published_value


def _require_shares(model_input: QualityModelInput) -> list[int]:
    positions = model_input.positions_with_shares
    if not positions:
        raise ValueError("no quasi-identifier has domain shares")
    return positions


def evaluate_aecs(model_input: QualityModelInput) -> QualityMeasure:
    """
    Compute the average equivalence class size of the anonymized dataset.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    QualityMeasure
        :math:`|D| / |E|` with bounds [1, |D|]

    Notes
    -----
    Suppressed records are counted as one equivalence class of their own. Unlike
    [LeFevre2006]_ the value is not divided by k.
    """
    num_rows = model_input.num_rows
    if num_rows == 0:
        raise ValueError("average equivalence class size is undefined without rows")
    grouped = model_input.grouped_output
    num_classes = len(grouped.non_outlier_counts()) + (1 if grouped.num_outliers > 0 else 0)
    return QualityMeasure(1.0, num_rows / num_classes, float(num_rows))


def evaluate_ambiguity(model_input: QualityModelInput) -> QualityMeasure:
    """
    Compute the ambiguity of the anonymized dataset.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    QualityMeasure
        Mean over records of the product of the domain shares of their published
        values, bounds [product of the minimal shares, 1]

    Notes
    -----
    [Goldberger2010]_ count the combinations of original values a published record
    is consistent with; using shares instead of counts normalizes this by the size of
    the product domain. Attributes without domain shares are left out.
    """
    positions = _require_shares(model_input)
    total = 0.0
    for original, anonymized, outlier in iter_row_pairs(model_input):
        if outlier:
            total += 1.0
            continue
        product = 1.0
        for pos in positions:
            share = model_input.shares[pos]
            assert share is not None
            product *= get_share(share, model_input.hierarchies[pos], original[pos], anonymized[pos])
        total += product
    minimum = 1.0
    for pos in positions:
        share = model_input.shares[pos]
        assert share is not None
        minimum *= share.minimum_share
    return QualityMeasure(minimum, total / model_input.num_rows, 1.0)


def evaluate_discernibility(model_input: QualityModelInput) -> QualityMeasure:
    """
    Compute the discernibility metric of the anonymized dataset.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    QualityMeasure
        Sum of penalties with bounds [|D|, |D|^2]

    Notes
    -----
    Each record in an equivalence class E gets a penalty of :math:`|E|`, each
    suppressed record a penalty of :math:`|D|` [Bayardo2005]_.
    """
    num_rows = float(model_input.num_rows)
    if num_rows == 0:
        raise ValueError("discernibility is undefined without rows")
    grouped = model_input.grouped_output
    value = sum_of_squares(np.array(grouped.non_outlier_counts(), dtype=np.float64))
    value += grouped.num_outliers * num_rows
    return QualityMeasure(num_rows, value, num_rows * num_rows)


def evaluate_kl_divergence(model_input: QualityModelInput) -> QualityMeasure:
    """
    Compute the Kullback-Leibler divergence between original and anonymized data.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    QualityMeasure
        :math:`\\sum_x P(x) \\log_2 (P(x) / Q(x))` in bits, with bounds
        [0, :math:`\\sum_x P(x) \\log_2 (P(x) |D| \\prod_j M_j)`]

    Notes
    -----
    P is the distribution of original tuples. Q is the distribution the anonymized
    dataset induces [Machanavajjhala2007]_: each published tuple y with frequency
    :math:`f(y)` spreads its mass uniformly over the :math:`A(y)` original tuples
    it covers, where :math:`A(y)` is the product over attributes of share times
    domain size :math:`M_j`. Q(x) sums this mass over all published tuples x was
    anonymized to. Since :math:`f(y) \\geq 1` and :math:`A(y) \\leq \\prod_j M_j`,
    Q is bounded from below, which gives the upper bound.

    Only attributes with domain shares are taken into account; tuples are projected
    onto them.
    """
    positions = _require_shares(model_input)
    shares = [model_input.shares[pos] for pos in positions]
    domain_sizes = [share.domain_size for share in shares if share is not None]
    domain_area = math.prod(domain_sizes)
    suppressed = tuple(model_input.config.suppressed_value for _ in positions)

    original_counts: Counter = Counter()
    published_counts: Counter = Counter()
    original_to_published_areas: dict[tuple, dict[tuple, float]] = {}
    for original, anonymized, outlier in iter_row_pairs(model_input):
        x = tuple(original[pos] for pos in positions)
        if outlier:
            y, area = suppressed, domain_area
        else:
            y = tuple(anonymized[pos] for pos in positions)
            area = 1.0
            for pos, share in zip(positions, shares):
                assert share is not None
                area *= (
                    get_share(share, model_input.hierarchies[pos], original[pos], anonymized[pos])
                    * share.domain_size
                )
        original_counts[x] += 1
        published_counts[y] += 1
        original_to_published_areas.setdefault(x, {})[y] = area

    num_rows = float(model_input.num_rows)
    originals = list(original_counts)
    p = np.array([original_counts[x] / num_rows for x in originals], dtype=np.float64)
    q = np.array(
        [
            sum(
                published_counts[y] / (num_rows * area)
                for y, area in original_to_published_areas[x].items()
            )
            for x in originals
        ],
        dtype=np.float64,
    )
    value = float(np.sum(rel_entr(p, q)) / math.log(2))
    maximum = float(np.sum(p * np.log2(p * num_rows * domain_area)))
    return QualityMeasure(0.0, value, maximum)


def evaluate_sse(model_input: QualityModelInput) -> QualityMeasure:
    """
    Compute the sum of squared errors between original and anonymized data.

    Parameters
    ----------
    model_input : QualityModelInput
        Shared input of the quality models

    Returns
    -------
    QualityMeasure
        Mean squared error per record, bounds [0, 1]

    Notes
    -----
    For categorical data [SoriaComas2015]_ measure distances through the
    generalization hierarchy. Here the distance between an original value x and its
    published label y is :math:`(s(y) - s(x)) / (1 - s(x))`, with s the domain share:
    0 if the value is published as is and 1 if it is suppressed. The squared
    distances are averaged over the attributes with domain shares and then over the
    records.
    """
    positions = _require_shares(model_input)
    total = 0.0
    for original, anonymized, outlier in iter_row_pairs(model_input):
        error = 0.0
        for pos in positions:
            share = model_input.shares[pos]
            assert share is not None
            published = published_value(model_input, anonymized[pos], outlier)
            share_original = share.share_of(original[pos], 0)
            if share_original >= 1.0:
                continue
            share_published = get_share(share, model_input.hierarchies[pos], original[pos], published)
            distance = (share_published - share_original) / (1.0 - share_original)
            error += distance * distance
        total += error / len(positions)
    return QualityMeasure(0.0, total / model_input.num_rows, 1.0)

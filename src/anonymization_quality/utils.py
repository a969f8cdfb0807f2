"""
Shared utility functions for quality measurement.

This module provides:

- Callbacks for timing the quality computation and each quality model
- Numba kernels for the sums the quality models reduce their counts to
"""

import time

import numba
import numpy as np


class QualityCallbacks:
    """
    Callback mechanism for tracking and instrumentation of quality computations.

    Records timestamps before and after the whole computation and before and after
    each quality model. Users can extend this class to add custom tracking by
    overriding the callback methods.

    Attributes
    ----------
    timestamps : dict
        Timestamps of the computation, keys 'compute_quality_bm' and
        'compute_quality_am', where 'bm' stands for "before method" and 'am' for
        "after method".
    model_timestamps : dict
        Maps model names to their own dict with keys 'bm' and 'am'

    Examples
    --------
    >>> class PrintingCallbacks(QualityCallbacks):
    ...     def model_am(self, name):
    ...         super().model_am(name)
    ...         print(f"{name} took {self.model_duration(name):.2f} seconds")
    """

    def __init__(self) -> None:
        self.timestamps: dict[str, float] = {}
        self.model_timestamps: dict[str, dict[str, float]] = {}

    def compute_quality_bm(self) -> None:
        self.timestamps["compute_quality_bm"] = time.time()

    def compute_quality_am(self) -> None:
        self.timestamps["compute_quality_am"] = time.time()

    def model_bm(self, name: str) -> None:
        self.model_timestamps.setdefault(name, {})["bm"] = time.time()

    def model_am(self, name: str) -> None:
        self.model_timestamps.setdefault(name, {})["am"] = time.time()

    def model_duration(self, name: str) -> float:
        """
        Seconds spent in a quality model.

        Raises
        ------
        KeyError
            If the model did not run
        """
        timestamps = self.model_timestamps[name]
        return timestamps["am"] - timestamps["bm"]


@numba.jit(nopython=True)
def sum_of_squares(x: np.ndarray) -> float:
    """
    Calculate the sum of the squares of an array.

    Parameters
    ----------
    x : np.ndarray
        Input array of numerical values.

    Returns
    -------
    float
        Sum of x[i] * x[i]; 0.0 for an empty array.

    Examples
    --------
    >>> sum_of_squares(np.array([1.0, 2.0, 3.0]))
    14.0
    """
    total = 0.0
    for i in x:
        total += i * i
    return total


@numba.jit(nopython=True)
def sum_of_information(numerators: np.ndarray, denominators: np.ndarray) -> float:
    """
    Calculate the information content, in bits, of a sequence of ratios.

    Parameters
    ----------
    numerators : np.ndarray
        Positive numerators
    denominators : np.ndarray
        Positive denominators, same length as numerators

    Returns
    -------
    float
        The sum of -log2(numerators[i] / denominators[i]).

    Examples
    --------
    >>> sum_of_information(np.array([1.0, 2.0]), np.array([2.0, 2.0]))
    1.0
    """
    total = 0.0
    for i in range(len(numerators)):
        total -= np.log2(numerators[i] / denominators[i])
    return total

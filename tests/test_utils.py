"""
Tests for utils
"""

import numpy as np

from anonymization_quality.constants import EPSILON
from anonymization_quality.utils import QualityCallbacks, sum_of_information, sum_of_squares


# Tests for sum_of_squares function
def test_sum_of_squares_0():
    actual = sum_of_squares(np.array([], dtype=np.float64))
    expected = 0.0
    assert actual == expected, f"{actual} != {expected}"


def test_sum_of_squares_1():
    actual = sum_of_squares(np.array([1.0, 2.0, 3.0]))
    expected = 14.0
    np.testing.assert_allclose(actual, expected, atol=EPSILON)


# Tests for sum_of_information function
def test_sum_of_information_0():
    actual = sum_of_information(np.array([1.0, 2.0]), np.array([2.0, 2.0]))
    expected = 1.0
    np.testing.assert_allclose(actual, expected, atol=EPSILON)


def test_sum_of_information_1():
    actual = sum_of_information(np.array([1.0, 3.0]), np.array([4.0, 3.0]))
    expected = 2.0
    np.testing.assert_allclose(actual, expected, atol=EPSILON)


# Tests for QualityCallbacks
def test_quality_callbacks():
    callbacks = QualityCallbacks()
    callbacks.compute_quality_bm()
    callbacks.model_bm("discernibility")
    callbacks.model_am("discernibility")
    callbacks.compute_quality_am()

    assert set(callbacks.timestamps) == {"compute_quality_bm", "compute_quality_am"}
    assert callbacks.model_duration("discernibility") >= 0.0
    assert callbacks.timestamps["compute_quality_am"] >= callbacks.timestamps["compute_quality_bm"]

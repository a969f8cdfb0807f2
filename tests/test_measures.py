"""
Tests for quality measures
"""

import numpy as np
import pytest

from anonymization_quality.constants import EPSILON
from anonymization_quality.measures import ColumnOrientedMeasure, QualityMeasure


class TestQualityMeasure:
    """
    Tests for single measures.
    """

    def test_normalized(self):
        """Tests normalization to [0, 1]."""
        np.testing.assert_allclose(QualityMeasure(1.0, 3.0, 5.0).normalized, 0.5, atol=EPSILON)
        np.testing.assert_allclose(QualityMeasure(2.0, 2.0, 2.0).normalized, 0.0, atol=EPSILON)
        assert np.isnan(QualityMeasure.unavailable().normalized)

    def test_bounds(self):
        """Tests that values outside of the bounds are rejected, float noise is clamped."""
        with pytest.raises(ValueError):
            QualityMeasure(0.0, 1.5, 1.0)
        with pytest.raises(ValueError):
            QualityMeasure(2.0, 2.0, 1.0)

        measure = QualityMeasure(0.0, 1.0 + EPSILON / 10, 1.0)
        assert measure.value == 1.0

    def test_available(self):
        """Tests availability."""
        assert QualityMeasure.neutral().available
        assert not QualityMeasure.unavailable().available
        assert not QualityMeasure(0.0, np.nan, 1.0).available


class TestColumnOrientedMeasure:
    """
    Tests for measures with one entry per attribute.
    """

    def test_aggregate(self):
        """Tests that the aggregate is the mean of the available entries."""
        measure = ColumnOrientedMeasure.of(
            ["age", "zip", "sex"],
            [0.0, 0.0, np.nan],
            [0.25, 0.75, np.nan],
            [1.0, 1.0, np.nan],
        )
        assert measure.available
        assert list(measure) == ["age", "zip", "sex"]
        assert len(measure) == 3
        assert not measure["sex"].available
        np.testing.assert_allclose(measure.arithmetic_mean, 0.5, atol=EPSILON)
        np.testing.assert_allclose(measure.aggregate.maximum, 1.0, atol=EPSILON)
        assert measure.get("id") is None

    def test_unavailable(self):
        """Tests measures without any available entry."""
        measure = ColumnOrientedMeasure.unavailable(["age", "zip"])
        assert not measure.available
        assert not measure["age"].available
        assert np.isnan(measure.arithmetic_mean)

    def test_neutral(self):
        """Tests the measure of a dataset compared with itself."""
        measure = ColumnOrientedMeasure.neutral(["age", "zip"])
        for attribute in measure:
            assert measure[attribute] == QualityMeasure(0.0, 0.0, 1.0)
        assert measure.aggregate == QualityMeasure(0.0, 0.0, 1.0)

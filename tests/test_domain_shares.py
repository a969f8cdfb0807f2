"""
Tests for domain shares
"""

import logging

import numpy as np
import pandas as pd
import pytest

from anonymization_quality.config import QualityConfiguration
from anonymization_quality.constants import EPSILON
from anonymization_quality.dataset import DataDefinition, DataFrameView
from anonymization_quality.domain_shares import (
    RawDomainShare,
    RedactionDomainShare,
    UnsupportedHierarchyError,
    get_domain_share,
    get_domain_shares,
)
from anonymization_quality.hierarchies import Hierarchy
from anonymization_quality.hierarchy_builders import (
    IntervalHierarchyBuilder,
    RedactionHierarchyBuilder,
)

_LOGGER = logging.getLogger(__name__)

_HIERARCHY = Hierarchy.of(
    [
        ["20", "young", "*"],
        ["30", "young", "*"],
        ["40", "old", "*"],
        ["50", "old", "*"],
    ],
    "*",
)


class TestRawDomainShare:
    """
    Tests for shares of materialized hierarchies.
    """

    def test_share_of(self):
        """Tests shares per level."""
        share = RawDomainShare(_HIERARCHY, "*")
        assert share.domain_size == 4
        np.testing.assert_allclose(share.minimum_share, 0.25, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("20", 0), 0.25, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("young", 1), 0.5, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("*", 2), 1.0, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("old"), 0.5, atol=EPSILON)

    def test_share_of_label_on_several_levels(self):
        """Tests that the level decides for labels occurring on several levels."""
        hierarchy = Hierarchy.of([["a", "x", "*"], ["b", "x", "*"], ["x", "y", "*"]], "*")
        share = RawDomainShare(hierarchy, "*")
        np.testing.assert_allclose(share.share_of("x", 0), 1 / 3, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("x", 1), 2 / 3, atol=EPSILON)
        # most specific occurrence without level
        np.testing.assert_allclose(share.share_of("x"), 1 / 3, atol=EPSILON)

    def test_unknown_label(self):
        """Tests that unknown labels are rejected."""
        share = RawDomainShare(_HIERARCHY, "*")
        with pytest.raises(KeyError):
            share.share_of("60")

    def test_share_of_value_equal_to_suppressed_value(self):
        """Tests that an original value equal to the suppressed value denotes a single value on level 0."""
        hierarchy = Hierarchy.of([["*", "*"], ["a", "*"], ["b", "*"]], "*")
        share = RawDomainShare(hierarchy, "*")
        np.testing.assert_allclose(share.share_of("*", 0), 1 / 3, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("*", 1), 1.0, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("*"), 1.0, atol=EPSILON)

    def test_empty_hierarchy(self):
        """Tests that empty hierarchies have no shares."""
        with pytest.raises(ValueError):
            RawDomainShare(Hierarchy.of([], "*"), "*")


class TestRedactionDomainShare:
    """
    Tests for closed-form shares of redaction hierarchies.
    """

    def test_share_of(self):
        """Tests alphabet_size ** redacted / domain_size."""
        builder = RedactionHierarchyBuilder(alphabet_size=10, max_value_length=3)
        share = RedactionDomainShare(builder, "*")
        assert share.domain_size == 1000
        np.testing.assert_allclose(share.minimum_share, 0.001, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("123"), 0.001, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("12*"), 0.01, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("1**"), 0.1, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("***"), 1.0, atol=EPSILON)
        np.testing.assert_allclose(share.share_of("*"), 1.0, atol=EPSILON)

    def test_share_is_capped(self):
        """Tests that shares never exceed 1."""
        builder = RedactionHierarchyBuilder(alphabet_size=10, max_value_length=3, domain_size=50)
        share = RedactionDomainShare(builder, "*")
        np.testing.assert_allclose(share.share_of("1**"), 1.0, atol=EPSILON)

    def test_domain_properties_required(self):
        """Tests that domain properties must be available."""
        with pytest.raises(ValueError):
            RedactionDomainShare(RedactionHierarchyBuilder(), "*")


class TestGetDomainShares:
    """
    Tests for the selection of the domain share strategy.
    """

    def test_strategy(self):
        """Tests the strategy chosen per builder."""
        config = QualityConfiguration()
        builder = RedactionHierarchyBuilder(alphabet_size=10, max_value_length=2)
        assert isinstance(get_domain_share(_HIERARCHY, builder, config), RedactionDomainShare)
        assert isinstance(get_domain_share(_HIERARCHY, None, config), RawDomainShare)
        # without domain properties redaction hierarchies are enumerated
        assert isinstance(
            get_domain_share(_HIERARCHY, RedactionHierarchyBuilder(), config), RawDomainShare
        )
        with pytest.raises(UnsupportedHierarchyError):
            get_domain_share(_HIERARCHY, IntervalHierarchyBuilder(0, 10), config)

    def test_failures_are_isolated(self, caplog):
        """Tests that an attribute without shares does not affect the others."""
        df = pd.DataFrame({"age": ["20", "30"], "zip": ["11", "12"]})
        definition = DataDefinition(
            ["age", "zip"], hierarchy_builders={"age": IntervalHierarchyBuilder(0, 10)}
        )
        view = DataFrameView(df, definition)
        hierarchies = [_HIERARCHY, Hierarchy.of([["11", "*"], ["12", "*"]], "*")]

        with caplog.at_level(logging.WARNING):
            shares = get_domain_shares(_LOGGER, view, [0, 1], hierarchies, QualityConfiguration())

        assert shares[0] is None
        assert isinstance(shares[1], RawDomainShare)
        assert "age" in caplog.text

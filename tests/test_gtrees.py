"""
Tests for gtrees
"""

import pickle

from anonymization_quality.gtrees import GTree, make_flat_default_gtree


class TestGTree:
    """
    Tests for generalization trees.
    """

    def test_gtree_pickle(self):
        """Tests that GTree is pickleable."""
        gtree = GTree()
        gtree.create_node("*")

        gtree = pickle.loads(pickle.dumps(gtree))

        actual = gtree.get_value(gtree.get_node(gtree.root))
        expected = "*"
        assert actual == expected, f"{actual} != {expected}"

    def test_gtree_get_value(self):
        """Tests get_value."""
        gtree = GTree()
        node = gtree.create_node("*")

        actual = gtree.get_value(node)
        expected = "*"
        assert actual == expected, f"{actual} != {expected}"

    def test_gtree_depth_2(self):
        """Tests depth of tree with 2 levels."""
        gtree = GTree()
        root = gtree.create_node("*")
        gtree.create_node("90210", parent=root)

        actual = gtree.depth()
        expected = 2 - 1  # 0-indexed
        assert actual == expected, f"{actual} != {expected}"

    def test_make_flat_default_gtree(self):
        """Tests make_flat_default_gtree"""
        gtree = make_flat_default_gtree(["foo", "bar"], root_value="ANY")
        actual = gtree.get_value(gtree.get_node(gtree.root))
        expected = "ANY"
        assert actual == expected, f"{actual} != {expected}"

        actual = sorted(gtree.get_value(leaf) for leaf in gtree.leaves())
        expected = ["bar", "foo"]
        assert actual == expected, f"{actual} != {expected}"


class TestGTreeHierarchies:
    """
    Tests for converting generalization trees to hierarchy tables.
    """

    def test_to_hierarchy(self):
        """Tests to_hierarchy lists labels from leaf to root."""
        gtree = GTree()
        root = gtree.create_node("*")
        young = gtree.create_node("young", parent=root)
        old = gtree.create_node("old", parent=root)
        gtree.create_node("20", parent=young)
        gtree.create_node("30", parent=young)
        gtree.create_node("40", parent=old)

        actual = sorted(gtree.to_hierarchy())
        expected = [["20", "young", "*"], ["30", "young", "*"], ["40", "old", "*"]]
        assert actual == expected, f"{actual} != {expected}"

    def test_to_hierarchy_unbalanced(self):
        """Tests to_hierarchy on a tree whose leaves are on different depths."""
        gtree = GTree()
        root = gtree.create_node("*")
        x = gtree.create_node("x", parent=root)
        gtree.create_node("a", parent=x)
        gtree.create_node("b", parent=root)

        actual = sorted(gtree.to_hierarchy())
        expected = [["a", "x", "*"], ["b", "*"]]
        assert actual == expected, f"{actual} != {expected}"

    def test_to_hierarchy_empty(self):
        """Tests to_hierarchy on a tree without nodes."""
        actual = GTree().to_hierarchy()
        expected = []
        assert actual == expected, f"{actual} != {expected}"

    def test_make_flat_default_gtree_to_hierarchy(self):
        """Tests the trivial hierarchy: each value below the root."""
        actual = sorted(make_flat_default_gtree(["11", "12"]).to_hierarchy())
        expected = [["11", "*"], ["12", "*"]]
        assert actual == expected, f"{actual} != {expected}"

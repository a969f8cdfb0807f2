"""
Classes and functions to represent generalization trees.

A generalization tree is the tree form of a generalization hierarchy: leaves hold
the original values and every ancestor holds a coarser label, up to the root which
holds the suppressed value. The quality models work on hierarchy tables (one row per
leaf, labels ordered from most specific to most general); data definitions may carry
trees, which are converted with GTree.to_hierarchy.
"""

from typing import Any, Iterable, Optional

from treelib import (
    Node,  # type: ignore[reportPrivateImportUsage]  # Node is publicly exported from treelib
    Tree,  # type: ignore[reportPrivateImportUsage]  # Tree is publicly exported from treelib
)

from anonymization_quality.constants import SUPPRESSED_VALUE


class GTree(Tree):
    """
    Generalization tree for hierarchical data representation.

    More specific values are positioned as leaf nodes and increasingly generalized
    values are positioned higher in the tree. This class extends treelib.Tree with
    the conversion to the tabular hierarchy format.
    """

    def to_hierarchy(self) -> list[list[str]]:
        """
        Convert the tree into a hierarchy table.

        Returns
        -------
        list[list[str]]
            One row per leaf, labels from the leaf up to the root. Rows are as long
            as the path of their leaf, so unbalanced trees give rows of different length.
        """
        hierarchy = []
        for leaf in self.leaves():
            hierarchy.append([self.get_value(self.get_node(nid)) for nid in self.rsearch(leaf.identifier)])
        return hierarchy

    def create_node(  # type: ignore[override]
        self,
        value: Any,
        parent: Optional[Node] = None,
        identifier: Optional[str] = None,
    ) -> Node:  # pylint: disable=arguments-differ,arguments-renamed
        """
        Create a new node in the generalization tree.

        Parameters
        ----------
        value : Any
            Value of the node, typically a string
        parent : Node, optional
            Parent node to which this node will be attached, by default None
        identifier : str, optional
            Unique identifier for the node, by default None

        Returns
        -------
        Node
            The newly created Node object
        """
        return super().create_node(tag=value, identifier=identifier, parent=parent)

    def get_value(self, node: Node) -> Any:
        return node.tag


def make_flat_default_gtree(uniq_values: Iterable[Any], root_value: str = SUPPRESSED_VALUE) -> GTree:
    """
    Create a simple two-level generalization tree.

    Parameters
    ----------
    uniq_values : Iterable[Any]
        Unique values to include as leaves, in order
    root_value : str, optional
        Label of the root, by default SUPPRESSED_VALUE

    Returns
    -------
    GTree
        A new generalization tree with a flat structure
    """
    gtree = GTree()
    root = gtree.create_node(root_value)
    for value in uniq_values:
        gtree.create_node(value, parent=root)
    return gtree

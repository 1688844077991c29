"""
tree/
-----
Binary-search-tree data layer.  Public API:

    from tree import TreeNode, clone_tree, layout_tree
    from tree import build_bst, random_tree, tree_values
"""

from tree.node   import TreeNode, clone_tree, tree_values, tree_to_dict, tree_from_dict
from tree.layout import layout_tree, LAYOUT_WIDTH, LEVEL_HEIGHT, TOP_MARGIN
from tree.build  import build_bst, random_tree, random_values, bst_add

__all__ = [
    "TreeNode",
    "clone_tree",
    "tree_values",
    "tree_to_dict",
    "tree_from_dict",
    "layout_tree",
    "LAYOUT_WIDTH",
    "LEVEL_HEIGHT",
    "TOP_MARGIN",
    "build_bst",
    "random_tree",
    "random_values",
    "bst_add",
]

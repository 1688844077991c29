"""
layout.py — Tree Layout
========================
Coordinates are a pure function of tree shape: each node sits at the
horizontal midpoint of the band it inherited from its parent, one level
(LEVEL_HEIGHT) below it.  The left child takes the left half of the band,
the right child the right half.

`layout_tree` never touches its argument — it lays out a fresh clone, so
it is safe to call on the live working tree every time a step is built.
"""

from typing import Optional

from tree.node import TreeNode


LAYOUT_WIDTH = 800.0
LEVEL_HEIGHT = 100.0
TOP_MARGIN   = 80.0


def layout_tree(
    root: Optional[TreeNode],
    width: float = LAYOUT_WIDTH,
) -> Optional[TreeNode]:
    """Return a laid-out deep copy of `root` (None for an empty tree)."""

    def place(node: Optional[TreeNode], depth: int, lo: float, hi: float) -> Optional[TreeNode]:
        if node is None:
            return None
        mid = (lo + hi) / 2
        return TreeNode(
            value=node.value,
            left=place(node.left, depth + 1, lo, mid),
            right=place(node.right, depth + 1, mid, hi),
            x=mid,
            y=TOP_MARGIN + depth * LEVEL_HEIGHT,
        )

    return place(root, 0, 0.0, width)

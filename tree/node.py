from dataclasses import dataclass
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# TreeNode
# ---------------------------------------------------------------------------
@dataclass
class TreeNode:
    """
    Mutable BST node.  Algorithms only ever mutate their own private
    clone; steps hold further clones with layout coordinates filled in.

    Attributes:
        value : Integer key.
        left  : Left child (smaller keys) or None.
        right : Right child (larger keys) or None.
        x, y  : Layout coordinates.  Derived by `layout_tree`, never part of
                the node's identity — None on a tree that was not laid out.
    """

    value: int
    left:  Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None
    x:     Optional[float]      = None
    y:     Optional[float]      = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"TreeNode(value={self.value}, left={self.left!r}, right={self.right!r})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def clone_tree(node: Optional[TreeNode]) -> Optional[TreeNode]:
    """Structural deep copy (coordinates are dropped)."""
    if node is None:
        return None
    return TreeNode(value=node.value, left=clone_tree(node.left), right=clone_tree(node.right))


def tree_values(node: Optional[TreeNode]) -> List[int]:
    """In-order list of values."""
    out: List[int] = []

    def walk(n: Optional[TreeNode]) -> None:
        if n is None:
            return
        walk(n.left)
        out.append(n.value)
        walk(n.right)

    walk(node)
    return out


def tree_to_dict(node: Optional[TreeNode]) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    return {
        "value": node.value,
        "x":     node.x,
        "y":     node.y,
        "left":  tree_to_dict(node.left),
        "right": tree_to_dict(node.right),
    }


def tree_from_dict(data: Optional[Dict[str, Any]]) -> Optional[TreeNode]:
    if not data:
        return None
    return TreeNode(
        value=data["value"],
        left=tree_from_dict(data.get("left")),
        right=tree_from_dict(data.get("right")),
    )

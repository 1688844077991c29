import random
from typing import Iterable, List, Optional

from tree.node import TreeNode


def bst_add(root: Optional[TreeNode], value: int) -> TreeNode:
    """Insert without recording steps.  Mutates `root`; duplicates are ignored."""
    node = TreeNode(value)
    if root is None:
        return node
    cur = root
    while True:
        if value < cur.value:
            if cur.left is None:
                cur.left = node
                return root
            cur = cur.left
        elif value > cur.value:
            if cur.right is None:
                cur.right = node
                return root
            cur = cur.right
        else:
            return root


def build_bst(values: Iterable[int]) -> Optional[TreeNode]:
    """Build a BST by inserting `values` in order."""
    root: Optional[TreeNode] = None
    for v in values:
        root = bst_add(root, v)
    return root


def random_values(count: int = 7, seed: Optional[int] = None) -> List[int]:
    """`count` random draws from 0–99 (duplicates possible)."""
    rng = random.Random(seed)
    return [rng.randrange(100) for _ in range(count)]


def random_tree(count: int = 7, seed: Optional[int] = None) -> Optional[TreeNode]:
    """
    `count` random inserts of values in 0–99.  Duplicate draws are dropped,
    so the tree may hold fewer than `count` nodes.
    """
    return build_bst(random_values(count, seed))

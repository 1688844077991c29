"""
traversals.py — Binary tree traversals
=======================================
In-order, pre-order and post-order are the standard recursive orders,
written as one recursive generator parameterised by *where* the visit
happens relative to the two subtree descents.  Level order uses an
explicit FIFO queue and emits one "processing level" step per level.

Every visit announces a VISIT op; the final step's `visited_nodes` holds
every node of the tree.  The generators return the visit order.
"""

from collections import deque
from typing import Generator, List, Optional

from tree import TreeNode, clone_tree, layout_tree
from algorithms.step import TreeOperation, TreeStep, visit


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
INORDER_PSEUDOCODE: List[str] = [
    "inorder(node):",                                # 0
    "    if node is null: return",                   # 1
    "    inorder(node.left)",                        # 2
    "    visit(node)",                               # 3
    "    inorder(node.right)",                       # 4
]

PREORDER_PSEUDOCODE: List[str] = [
    "preorder(node):",                               # 0
    "    if node is null: return",                   # 1
    "    visit(node)",                               # 2
    "    preorder(node.left)",                       # 3
    "    preorder(node.right)",                      # 4
]

POSTORDER_PSEUDOCODE: List[str] = [
    "postorder(node):",                              # 0
    "    if node is null: return",                   # 1
    "    postorder(node.left)",                      # 2
    "    postorder(node.right)",                     # 3
    "    visit(node)",                               # 4
]

LEVELORDER_PSEUDOCODE: List[str] = [
    "levelorder(root):",                             # 0
    "    if root is null: return",                   # 1
    "    queue ← [root]",                            # 2
    "    while queue is not empty:",                 # 3
    "        for each node in the current level:",   # 4
    "            node ← queue.dequeue()",            # 5
    "            visit(node)",                       # 6
    "            if node.left: queue.enqueue(node.left)",    # 7
    "            if node.right: queue.enqueue(node.right)",  # 8
]

# visit position and pseudocode line numbers per depth-first order
_ORDERS = {
    TreeOperation.INORDER:   ("In-order",   ("left", "visit", "right"), {"left": 2, "visit": 3, "right": 4}),
    TreeOperation.PREORDER:  ("Pre-order",  ("visit", "left", "right"), {"visit": 2, "left": 3, "right": 4}),
    TreeOperation.POSTORDER: ("Post-order", ("left", "right", "visit"), {"left": 2, "right": 3, "visit": 4}),
}


# ---------------------------------------------------------------------------
# Depth-first orders
# ---------------------------------------------------------------------------
def _depth_first(
    tree: Optional[TreeNode],
    operation: TreeOperation,
) -> Generator[TreeStep, None, List[int]]:
    label, sequence, lines = _ORDERS[operation]
    root = clone_tree(tree)
    order: List[int] = []

    def frame(description, code_line, path=(), current=None, highlighted=(), ops=()) -> TreeStep:
        return TreeStep(
            tree=layout_tree(root),
            operation=operation,
            current_node=current,
            visited_nodes=tuple(order),
            path=tuple(path),
            highlighted_nodes=tuple(highlighted),
            description=description,
            code_line=code_line,
            ops=ops,
        )

    def walk(node: Optional[TreeNode], path: List[int]):
        if node is None:
            return
        path = path + [node.value]
        for action in sequence:
            if action == "visit":
                order.append(node.value)
                yield frame(
                    f"Visiting node {node.value}", lines["visit"], path,
                    current=node.value, highlighted=(node.value,), ops=(visit(node.value),),
                )
            elif action == "left":
                yield frame(f"Going to left subtree of {node.value}", lines["left"], path, current=node.value)
                yield from walk(node.left, path)
            else:
                yield frame(f"Going to right subtree of {node.value}", lines["right"], path, current=node.value)
                yield from walk(node.right, path)

    if root is None:
        yield frame("Tree is empty, nothing to traverse", 1)
        return order

    yield from walk(root, [])
    yield frame(f"{label} traversal completed: [{', '.join(str(v) for v in order)}]", 0)
    return order


def inorder(tree: Optional[TreeNode]) -> Generator[TreeStep, None, List[int]]:
    return (yield from _depth_first(tree, TreeOperation.INORDER))


def preorder(tree: Optional[TreeNode]) -> Generator[TreeStep, None, List[int]]:
    return (yield from _depth_first(tree, TreeOperation.PREORDER))


def postorder(tree: Optional[TreeNode]) -> Generator[TreeStep, None, List[int]]:
    return (yield from _depth_first(tree, TreeOperation.POSTORDER))


# ---------------------------------------------------------------------------
# Level order
# ---------------------------------------------------------------------------
def levelorder(tree: Optional[TreeNode]) -> Generator[TreeStep, None, List[int]]:
    root = clone_tree(tree)
    order: List[int] = []

    def frame(description, code_line, path=(), current=None, highlighted=(), ops=()) -> TreeStep:
        return TreeStep(
            tree=layout_tree(root),
            operation=TreeOperation.LEVELORDER,
            current_node=current,
            visited_nodes=tuple(order),
            path=tuple(path),
            highlighted_nodes=tuple(highlighted),
            description=description,
            code_line=code_line,
            ops=ops,
        )

    if root is None:
        yield frame("Tree is empty, nothing to traverse", 1)
        return order

    # queue entries carry the root-to-node path
    queue = deque([(root, [root.value])])
    yield frame(
        f"Starting level-order traversal, adding root node {root.value} to queue", 2,
        path=[root.value], current=root.value,
    )

    level = 1
    while queue:
        waiting = [n.value for n, _ in queue]
        yield frame(
            f"Processing level {level}, queue: [{', '.join(str(v) for v in waiting)}]", 4,
            highlighted=waiting,
        )

        this_level: List[int] = []
        for _ in range(len(queue)):
            node, path = queue.popleft()
            order.append(node.value)
            this_level.append(node.value)
            yield frame(
                f"Visiting node {node.value} at level {level}", 6, path,
                current=node.value, highlighted=(node.value,), ops=(visit(node.value),),
            )
            if node.left is not None:
                queue.append((node.left, path + [node.left.value]))
                yield frame(
                    f"Adding left child {node.left.value} of node {node.value} to queue", 7, path,
                    current=node.value,
                )
            if node.right is not None:
                queue.append((node.right, path + [node.right.value]))
                yield frame(
                    f"Adding right child {node.right.value} of node {node.value} to queue", 8, path,
                    current=node.value,
                )

        yield frame(f"Completed level {level}, visited: [{', '.join(str(v) for v in this_level)}]", 3)
        level += 1

    yield frame(f"Level-order traversal completed: [{', '.join(str(v) for v in order)}]", 0)
    return order

"""
bst.py — Binary Search Tree operations
=======================================
Insert, delete and search as step generators.

Every generator works on a private clone of the caller's tree, so the
input is never mutated.  Each step carries a freshly laid-out copy of the
*whole* working tree (see tree.layout), and `path` lists the values from
the root down to the node being looked at.

Comparison policy (shared by all three):
    value <  node.value  →  go left
    value >  node.value  →  go right
    value == node.value  →  stop (found / already exists / delete here)

Delete handles the three textbook cases.  A node with two children takes
its in-order successor's value (leftmost node of the right subtree) and
the successor is then deleted recursively from the right subtree.

Interactive hooks: each comparison announces INSPECT(node, value) plus
VISIT(node); a hit announces FOUND(value).
"""

from typing import Generator, List, Optional

from tree import TreeNode, clone_tree, layout_tree
from algorithms.step import TreeOperation, TreeStep, found, inspect, visit


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
INSERT_PSEUDOCODE: List[str] = [
    "insert(node, value):",                          # 0
    "    if node is null: return new Node(value)",   # 1
    "    compare value with node.value",             # 2
    "    if value < node.value:",                    # 3
    "        node.left ← insert(node.left, value)",  # 4
    "    else if value > node.value:",               # 5
    "        node.right ← insert(node.right, value)",# 6
    "    else: value already exists",                # 7
    "    return node",                               # 8
]

DELETE_PSEUDOCODE: List[str] = [
    "delete(node, value):",                          # 0
    "    if node is null: return null",              # 1
    "    if value < node.value:",                    # 2
    "        node.left ← delete(node.left, value)",  # 3
    "    else if value > node.value:",               # 4
    "        node.right ← delete(node.right, value)",# 5
    "    else:",                                     # 6
    "        if node is a leaf: return null",        # 7
    "        if node.left is null: return node.right",  # 8
    "        if node.right is null: return node.left",  # 9
    "        succ ← leftmost(node.right)",           # 10
    "        node.value ← succ.value",               # 11
    "        node.right ← delete(node.right, succ.value)",  # 12
    "    return node",                               # 13
]

SEARCH_PSEUDOCODE: List[str] = [
    "search(node, value):",                          # 0
    "    if node is null: return false",             # 1
    "    if value == node.value: return true",       # 2
    "    if value < node.value:",                    # 3
    "        return search(node.left, value)",       # 4
    "    return search(node.right, value)",          # 5
]


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------
def bst_insert(
    tree: Optional[TreeNode],
    value: int,
) -> Generator[TreeStep, None, Optional[TreeNode]]:
    """Returns (via StopIteration.value) the root of the resulting tree."""
    root = clone_tree(tree)
    path: List[int] = []
    seen: List[int] = []

    def frame(description, code_line, current=None, comparison=None, highlighted=(), ops=()) -> TreeStep:
        return TreeStep(
            tree=layout_tree(root),
            operation=TreeOperation.INSERT,
            current_node=current,
            visited_nodes=tuple(seen),
            path=tuple(path),
            comparison=comparison,
            highlighted_nodes=tuple(highlighted),
            description=description,
            code_line=code_line,
            ops=ops,
        )

    inserted = True
    if root is None:
        root = TreeNode(value)
        path.append(value)
        seen.append(value)
        yield frame(f"Created new node with value {value}", 1, current=value, ops=(visit(value),))
    else:
        cur = root
        while True:
            path.append(cur.value)
            seen.append(cur.value)
            yield frame(
                f"Comparing {value} with {cur.value}", 2,
                current=cur.value, comparison=(value, cur.value),
                ops=(inspect(cur.value, value), visit(cur.value)),
            )

            if value < cur.value:
                yield frame(f"{value} < {cur.value}, going to left subtree", 4, current=cur.value)
                if cur.left is None:
                    cur.left = TreeNode(value)
                    path.append(value)
                    seen.append(value)
                    yield frame(
                        f"Created new node with value {value} as left child of {cur.value}", 1,
                        current=value, ops=(visit(value),),
                    )
                    break
                cur = cur.left
            elif value > cur.value:
                yield frame(f"{value} > {cur.value}, going to right subtree", 6, current=cur.value)
                if cur.right is None:
                    cur.right = TreeNode(value)
                    path.append(value)
                    seen.append(value)
                    yield frame(
                        f"Created new node with value {value} as right child of {cur.value}", 1,
                        current=value, ops=(visit(value),),
                    )
                    break
                cur = cur.right
            else:
                inserted = False
                yield frame(
                    f"Node with value {value} already exists", 7,
                    current=cur.value, ops=(found(value),),
                )
                break

    path.clear()
    if inserted:
        yield frame(f"Node with value {value} inserted successfully", 8, highlighted=(value,))
    else:
        yield frame(f"Value {value} is already in the tree, nothing inserted", 8, highlighted=(value,))
    return root


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------
def bst_delete(
    tree: Optional[TreeNode],
    value: int,
) -> Generator[TreeStep, None, Optional[TreeNode]]:
    """Returns (via StopIteration.value) the root of the resulting tree."""
    root = clone_tree(tree)
    seen: List[int] = []
    removed = False

    def frame(description, code_line, path, current=None, comparison=None, highlighted=(), ops=()) -> TreeStep:
        return TreeStep(
            tree=layout_tree(root),
            operation=TreeOperation.DELETE,
            current_node=current,
            visited_nodes=tuple(seen),
            path=tuple(path),
            comparison=comparison,
            highlighted_nodes=tuple(highlighted),
            description=description,
            code_line=code_line,
            ops=ops,
        )

    def remove(node: Optional[TreeNode], target: int, path: List[int]):
        nonlocal removed
        if node is None:
            yield frame(f"Node with value {target} not found for deletion", 1, path)
            return None

        path = path + [node.value]
        if node.value not in seen:
            seen.append(node.value)
        yield frame(
            f"Comparing {target} with {node.value}", 2, path,
            current=node.value, comparison=(target, node.value),
            ops=(inspect(node.value, target), visit(node.value)),
        )

        if target < node.value:
            yield frame(f"{target} < {node.value}, going to left subtree", 3, path, current=node.value)
            node.left = yield from remove(node.left, target, path)
            return node
        if target > node.value:
            yield frame(f"{target} > {node.value}, going to right subtree", 5, path, current=node.value)
            node.right = yield from remove(node.right, target, path)
            return node

        yield frame(
            f"Found node with value {target} to delete", 6, path,
            current=node.value, highlighted=(node.value,), ops=(found(target),),
        )

        if node.left is None and node.right is None:
            removed = True
            yield frame(f"Node with value {target} is a leaf node - deleting it", 7, path, current=node.value)
            return None
        if node.left is None:
            removed = True
            yield frame(
                f"Node with value {target} has only a right child - replacing with right child "
                f"{node.right.value}", 8, path, current=node.value,
            )
            return node.right
        if node.right is None:
            removed = True
            yield frame(
                f"Node with value {target} has only a left child - replacing with left child "
                f"{node.left.value}", 9, path, current=node.value,
            )
            return node.left

        yield frame(
            f"Node with value {target} has two children - finding inorder successor", 10, path,
            current=node.value,
        )
        succ = node.right
        while succ.left is not None:
            succ = succ.left
        yield frame(
            f"Found inorder successor with value {succ.value}", 10, path,
            current=succ.value, highlighted=(node.value, succ.value),
        )

        old = node.value
        node.value = succ.value
        path = path[:-1] + [node.value]
        yield frame(
            f"Replacing value {old} with successor value {succ.value}", 11, path,
            current=node.value, highlighted=(node.value,),
        )
        yield frame(
            f"Deleting the successor node with value {succ.value} from right subtree", 12, path,
            current=node.value,
        )
        node.right = yield from remove(node.right, succ.value, path)
        return node

    root = yield from remove(root, value, [])

    if removed:
        yield frame(f"Delete operation completed for value {value}", 13, [])
    else:
        yield frame(f"Value {value} is not in the tree, nothing deleted", 13, [])
    return root


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def bst_search(
    tree: Optional[TreeNode],
    value: int,
) -> Generator[TreeStep, None, bool]:
    """Returns (via StopIteration.value) whether `value` is in the tree."""
    root = clone_tree(tree)
    path: List[int] = []
    seen: List[int] = []

    def frame(description, code_line, current=None, comparison=None, highlighted=(), ops=()) -> TreeStep:
        return TreeStep(
            tree=layout_tree(root),
            operation=TreeOperation.SEARCH,
            current_node=current,
            visited_nodes=tuple(seen),
            path=tuple(path),
            comparison=comparison,
            highlighted_nodes=tuple(highlighted),
            description=description,
            code_line=code_line,
            ops=ops,
        )

    hit = False
    cur = root
    while True:
        if cur is None:
            yield frame(f"Node with value {value} not found", 1)
            break

        path.append(cur.value)
        seen.append(cur.value)
        yield frame(
            f"Comparing {value} with {cur.value}", 2,
            current=cur.value, comparison=(value, cur.value),
            ops=(inspect(cur.value, value), visit(cur.value)),
        )

        if value == cur.value:
            hit = True
            yield frame(
                f"Found node with value {value}", 2,
                current=cur.value, highlighted=(value,), ops=(found(value),),
            )
            break
        if value < cur.value:
            yield frame(f"{value} < {cur.value}, searching left subtree", 4, current=cur.value)
            cur = cur.left
        else:
            yield frame(f"{value} > {cur.value}, searching right subtree", 5, current=cur.value)
            cur = cur.right

    if hit:
        yield frame(f"Search completed: {value} found in the tree", 2, highlighted=(value,))
    else:
        yield frame(f"Search completed: {value} is not in the tree", 1)
    return hit

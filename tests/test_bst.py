import pytest

from algorithms import generate_steps, run_algorithm
from algorithms.step import OpKind, TreeOperation
from tree import LAYOUT_WIDTH, LEVEL_HEIGHT, TOP_MARGIN, build_bst, tree_values


@pytest.fixture
def tree():
    #        5
    #      /   \
    #     3     8
    #    / \     \
    #   1   4     9
    return build_bst([5, 3, 8, 1, 4, 9])


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------
def test_insert_sequence_builds_the_tree():
    root = None
    for value in (5, 3, 8):
        root, _ = run_algorithm("bst_insert", tree=root, value=value)

    assert root.value == 5
    assert root.left.value == 3
    assert root.right.value == 8


def test_insert_walks_down_by_comparison(tree):
    result, steps = run_algorithm("bst_insert", tree=tree, value=7)

    assert tree_values(result) == [1, 3, 4, 5, 7, 8, 9]
    assert result.right.left.value == 7
    comparisons = [s.comparison for s in steps if s.comparison]
    assert comparisons == [(7, 5), (7, 8)]
    assert steps[-1].description == "Node with value 7 inserted successfully"
    assert all(s.operation is TreeOperation.INSERT for s in steps)


def test_insert_into_empty_tree():
    result, steps = run_algorithm("bst_insert", tree=None, value=42)

    assert result.value == 42
    assert steps[0].description == "Created new node with value 42"


def test_insert_duplicate_changes_nothing(tree):
    result, steps = run_algorithm("bst_insert", tree=tree, value=4)

    assert tree_values(result) == tree_values(tree)
    assert any(s.description == "Node with value 4 already exists" for s in steps)
    assert any(op.kind is OpKind.FOUND for s in steps for op in s.ops)


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------
def test_delete_root_with_two_children_scenario():
    original = build_bst([5, 3, 8])
    result, steps = run_algorithm("bst_delete", tree=original, value=5)

    assert result.value == 8
    assert tree_values(result) == [3, 8]
    assert steps[-1].tree.value == 8
    assert any("has two children" in s.description for s in steps)
    assert any(s.description == "Found inorder successor with value 8" for s in steps)
    # input untouched
    assert original.value == 5
    assert tree_values(original) == [3, 5, 8]


def test_delete_leaf(tree):
    result, steps = run_algorithm("bst_delete", tree=tree, value=4)

    assert tree_values(result) == [1, 3, 5, 8, 9]
    assert any("is a leaf node" in s.description for s in steps)


def test_delete_node_with_only_a_right_child(tree):
    result, steps = run_algorithm("bst_delete", tree=tree, value=8)

    assert result.right.value == 9
    assert tree_values(result) == [1, 3, 4, 5, 9]
    assert any("has only a right child" in s.description for s in steps)


def test_delete_node_with_only_a_left_child():
    result, steps = run_algorithm("bst_delete", tree=build_bst([5, 3, 1]), value=3)

    assert result.left.value == 1
    assert any("has only a left child" in s.description for s in steps)


def test_delete_missing_value(tree):
    result, steps = run_algorithm("bst_delete", tree=tree, value=6)

    assert tree_values(result) == tree_values(tree)
    assert steps[-1].description == "Value 6 is not in the tree, nothing deleted"


def test_delete_from_empty_tree():
    result, steps = run_algorithm("bst_delete", tree=None, value=1)
    assert result is None
    assert steps[-1].tree is None


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def test_search_found(tree):
    result, steps = run_algorithm("bst_search", tree=tree, value=4)

    assert result is True
    assert steps[-1].description == "Search completed: 4 found in the tree"
    visited = [op.indices[0] for s in steps for op in s.ops if op.kind is OpKind.VISIT]
    assert visited == [5, 3, 4]


def test_search_not_found(tree):
    result, steps = run_algorithm("bst_search", tree=tree, value=7)

    assert result is False
    assert steps[-1].description == "Search completed: 7 is not in the tree"


# ---------------------------------------------------------------------------
# Traversals
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key, expected", [
    ("inorder",    [1, 3, 4, 5, 8, 9]),
    ("preorder",   [5, 3, 1, 4, 8, 9]),
    ("postorder",  [1, 4, 3, 9, 8, 5]),
    ("levelorder", [5, 3, 8, 1, 4, 9]),
])
def test_traversal_orders(tree, key, expected):
    result, steps = run_algorithm(key, tree=tree)

    assert result == expected
    assert list(steps[-1].visited_nodes) == expected
    visits = [op.indices[0] for s in steps for op in s.ops if op.kind is OpKind.VISIT]
    assert visits == expected


def test_levelorder_emits_one_step_per_level(tree):
    steps = generate_steps("levelorder", tree=tree)
    levels = [s.description for s in steps if s.description.startswith("Processing level")]

    assert levels == [
        "Processing level 1, queue: [5]",
        "Processing level 2, queue: [3, 8]",
        "Processing level 3, queue: [1, 4, 9]",
    ]


@pytest.mark.parametrize("key", ["inorder", "preorder", "postorder", "levelorder"])
def test_traversal_of_empty_tree(key):
    result, steps = run_algorithm(key, tree=None)
    assert result == []
    assert len(steps) == 1
    assert steps[0].description == "Tree is empty, nothing to traverse"


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------
def test_snapshot_trees_are_laid_out(tree):
    step = generate_steps("inorder", tree=tree)[0]
    root = step.tree

    assert (root.x, root.y) == (LAYOUT_WIDTH / 2, TOP_MARGIN)
    assert (root.left.x, root.left.y) == (LAYOUT_WIDTH / 4, TOP_MARGIN + LEVEL_HEIGHT)
    assert root.right.x == LAYOUT_WIDTH * 3 / 4


def test_snapshots_do_not_share_trees(tree):
    steps = generate_steps("bst_insert", tree=tree, value=2)
    assert steps[0].tree is not steps[1].tree
    # the first snapshot predates the insert
    assert 2 not in tree_values(steps[0].tree)
    assert 2 in tree_values(steps[-1].tree)


def test_tree_step_serialises_nested_nodes(tree):
    data = generate_steps("bst_search", tree=tree, value=9)[0].to_dict()

    assert data["kind"] == "tree"
    assert data["operation"] == "search"
    assert data["tree"]["value"] == 5
    assert data["tree"]["right"]["right"]["value"] == 9

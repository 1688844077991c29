"""
parsing.py — Input Layer
=========================
Turns the raw strings a user types (array, target, adjacency list, tree
values) into validated algorithm inputs.  Every failure raises InputError
with a message fit to show inline next to the field; the algorithms
themselves never see unvalidated input.

Empty fields are not errors: they fall back to generated defaults
(random array, a member of the array as target, the default graph, a
random tree).
"""

import math
import random
from typing import List, Optional, Sequence, Union

from graph import Graph, GraphFormatError
from tree import TreeNode, build_bst, random_tree


Number = Union[int, float]

# ---------------------------------------------------------------------------
# Limits & defaults
# ---------------------------------------------------------------------------
MIN_ARRAY_SIZE     = 2
MAX_ARRAY_SIZE     = 16
DEFAULT_ARRAY_SIZE = 10
VALUE_MIN          = 1
VALUE_MAX          = 100

DEFAULT_GRAPH_NODES       = 8
DEFAULT_GRAPH_PROBABILITY = 0.3
DEFAULT_GRAPH_SEED        = 42

DEFAULT_TREE_SIZE = 7
MAX_TREE_SIZE     = 31


class InputError(ValueError):
    """User input that cannot be turned into an algorithm input."""


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------
def parse_number(text: str) -> Number:
    """'5' → 5, '2.5' → 2.5.  Anything else raises InputError."""
    token = text.strip()
    try:
        return int(token)
    except ValueError:
        pass
    try:
        value = float(token)
    except ValueError:
        raise InputError(f'"{token}" is not a valid number') from None
    if math.isnan(value) or math.isinf(value):
        raise InputError(f'"{token}" is not a valid number')
    return int(value) if value.is_integer() else value


def parse_int(text: str, name: str = "value") -> int:
    token = (text or "").strip()
    if not token:
        raise InputError(f"Please enter a {name}")
    try:
        return int(token)
    except ValueError:
        raise InputError(f'"{token}" is not a valid {name}') from None


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------
def random_array(size: int = DEFAULT_ARRAY_SIZE, seed: Optional[int] = None) -> List[int]:
    rng = random.Random(seed)
    return [rng.randint(VALUE_MIN, VALUE_MAX) for _ in range(size)]


def parse_array(text: Optional[str], seed: Optional[int] = None) -> List[Number]:
    """
    Comma-separated numbers, MIN_ARRAY_SIZE..MAX_ARRAY_SIZE of them.
    Empty text → random_array(DEFAULT_ARRAY_SIZE, seed).
    """
    if text is None or not text.strip():
        return random_array(DEFAULT_ARRAY_SIZE, seed)

    values = [parse_number(item) for item in text.split(",") if item.strip()]
    if len(values) < MIN_ARRAY_SIZE:
        raise InputError(f"Please enter at least {MIN_ARRAY_SIZE} numbers")
    if len(values) > MAX_ARRAY_SIZE:
        raise InputError(f"Maximum {MAX_ARRAY_SIZE} numbers allowed")
    return values


def parse_target(text: Optional[str], array: Sequence[Number], seed: Optional[int] = None) -> Number:
    """Numeric target; empty text → a random member of `array`."""
    if text is None or not str(text).strip():
        if not array:
            raise InputError("Please enter a target")
        return random.Random(seed).choice(list(array))
    try:
        return parse_number(str(text))
    except InputError:
        raise InputError("Target is not a valid number") from None


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------
def default_graph() -> Graph:
    return Graph.generate_random(
        node_count=DEFAULT_GRAPH_NODES,
        edge_probability=DEFAULT_GRAPH_PROBABILITY,
        seed=DEFAULT_GRAPH_SEED,
    )


def parse_graph(text: Optional[str]) -> Graph:
    """Adjacency-list text (`0:1,2;1:0,3`) → Graph; empty → default_graph()."""
    if text is None or not text.strip():
        return default_graph()
    try:
        graph = Graph.from_adjacency_list(text)
    except GraphFormatError as exc:
        raise InputError(str(exc)) from exc
    if graph.node_count() == 0:
        return default_graph()
    return graph


def parse_node(text: Optional[str], graph: Graph, name: str = "start node", default: Optional[int] = None) -> int:
    """Node id that must exist in `graph`; empty → `default` (or the first node)."""
    if text is None or not str(text).strip():
        if default is not None:
            return default
        ids = graph.node_ids()
        if not ids:
            raise InputError(f"Please enter a {name}")
        return ids[0]
    node = parse_int(str(text), name)
    if not graph.has_node(node):
        raise InputError(f"Node {node} is not in the graph")
    return node


# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------
def parse_tree_values(text: Optional[str]) -> List[int]:
    """Comma / whitespace separated integers, inserted in order."""
    if text is None or not text.strip():
        return []
    values = [parse_int(tok, "tree value") for tok in text.replace(",", " ").split()]
    if len(values) > MAX_TREE_SIZE:
        raise InputError(f"Maximum {MAX_TREE_SIZE} tree values allowed")
    return values


def parse_tree(text: Optional[str], seed: Optional[int] = None) -> Optional[TreeNode]:
    """Build a BST from text; empty → random tree of DEFAULT_TREE_SIZE nodes."""
    values = parse_tree_values(text)
    if not values:
        return random_tree(DEFAULT_TREE_SIZE, seed)
    return build_bst(values)


def parse_tree_size(text: Optional[str]) -> int:
    if text is None or not str(text).strip():
        return DEFAULT_TREE_SIZE
    size = parse_int(str(text), "node count")
    if size < 1:
        raise InputError("Node count must be at least 1")
    if size > MAX_TREE_SIZE:
        raise InputError(f"Maximum {MAX_TREE_SIZE} nodes allowed")
    return size

"""
step.py — Algorithm Step Snapshots
===================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • A private copy of the working structure (array / adjacency / tree)
    • The highlight sets for this instant (comparing, visited, path, …)
    • Which line of pseudocode is executing right now
    • A plain-English description of what just happened
    • The operations the step performs (compare / swap / visit …) —
      the interactive executor turns these into awaited hook calls

There is one Step class per algorithm family.  Each carries a `kind`
discriminant so consumers can dispatch with `match step.kind:` instead
of probing for attributes.

Design decisions:
  - Steps are frozen dataclasses.  Arrays are stored as tuples and every
    dict / tree is copied when the step is built, so mutating the live
    working data afterwards can never reach back into an emitted step.
  - `ops` is a tuple because a single step may perform several hook-worthy
    actions (e.g. a BST search probe both compares and visits a node).
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple

from tree import TreeNode


# ---------------------------------------------------------------------------
# Discriminants
# ---------------------------------------------------------------------------
class StepKind(Enum):
    SORT   = "sort"
    SEARCH = "search"
    GRAPH  = "graph"
    TREE   = "tree"


class OpKind(Enum):
    COMPARE     = "compare"       # compare_elements(i, j)
    SWAP        = "swap"          # swap_elements(i, j)
    WRITE       = "write"         # write_element(i, value)
    MARK_SORTED = "mark_sorted"   # mark_sorted(indices)
    INSPECT     = "inspect"       # compare_element(index, target)
    VISIT       = "visit"         # mark_visited(index)
    FOUND       = "found"         # mark_found(index)


class TreeOperation(Enum):
    INSERT     = "insert"
    DELETE     = "delete"
    SEARCH     = "search"
    INORDER    = "inorder"
    PREORDER   = "preorder"
    POSTORDER  = "postorder"
    LEVELORDER = "levelorder"


@dataclass(frozen=True)
class Operation:
    """
    A pending unit of work announced by a step.

    Attributes:
        kind    : What the hook should do.
        indices : Array indices (sort / search) or node ids / values (graph / tree).
        value   : Extra operand — the written value for WRITE, the target for INSPECT.
    """

    kind:    OpKind
    indices: Tuple[int, ...] = ()
    value:   Optional[float] = None


def compare(i: int, j: int) -> Operation:
    return Operation(OpKind.COMPARE, (i, j))


def swap(i: int, j: int) -> Operation:
    return Operation(OpKind.SWAP, (i, j))


def write(index: int, value: float) -> Operation:
    return Operation(OpKind.WRITE, (index,), value)


def mark_sorted(*indices: int) -> Operation:
    return Operation(OpKind.MARK_SORTED, tuple(indices))


def inspect(index: int, target: float) -> Operation:
    return Operation(OpKind.INSPECT, (index,), target)


def visit(index: int) -> Operation:
    return Operation(OpKind.VISIT, (index,))


def found(index: int) -> Operation:
    return Operation(OpKind.FOUND, (index,))


# ---------------------------------------------------------------------------
# Step variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Fields shared by every family.

    Attributes:
        description : Human-readable explanation of this step.
        code_line   : 0-based index into the algorithm's PSEUDOCODE (or None).
        ops         : Operations performed at this step, in order.
    """

    kind: ClassVar[StepKind]

    description: str                     = ""
    code_line:   Optional[int]           = None
    ops:         Tuple[Operation, ...]   = ()

    def to_dict(self) -> Dict[str, Any]:
        data = {"kind": self.kind.value}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data


@dataclass(frozen=True)
class SortStep(Step):
    kind: ClassVar[StepKind] = StepKind.SORT

    array:          Tuple[float, ...]            = ()
    comparing:      Optional[Tuple[int, int]]    = None
    swapping:       Optional[Tuple[int, int]]    = None
    sorted_indices: Tuple[int, ...]              = ()


@dataclass(frozen=True)
class SearchStep(Step):
    kind: ClassVar[StepKind] = StepKind.SEARCH

    array:         Tuple[float, ...]  = ()
    target:        Optional[float]    = None
    current_index: int                = -1
    found_index:   Optional[int]      = None
    visited:       Tuple[int, ...]    = ()
    left:          Optional[int]      = None
    right:         Optional[int]      = None
    mid:           Optional[int]      = None


@dataclass(frozen=True)
class GraphStep(Step):
    """
    BFS fills `queue`, DFS fills `stack`.  Dijkstra fills `priority_queue`
    ((node, distance) pairs), `distances`, `previous` and `path`.
    """

    kind: ClassVar[StepKind] = StepKind.GRAPH

    graph:          Dict[int, Tuple[int, ...]]         = field(default_factory=dict)
    visited:        Tuple[int, ...]                    = ()
    queue:          Tuple[int, ...]                    = ()
    stack:          Tuple[int, ...]                    = ()
    current:        Optional[int]                      = None
    priority_queue: Tuple[Tuple[int, float], ...]      = ()
    distances:      Dict[int, float]                   = field(default_factory=dict)
    previous:       Dict[int, Optional[int]]           = field(default_factory=dict)
    path:           Tuple[int, ...]                    = ()


@dataclass(frozen=True)
class TreeStep(Step):
    kind: ClassVar[StepKind] = StepKind.TREE

    tree:              Optional[TreeNode]          = None
    operation:         TreeOperation               = TreeOperation.SEARCH
    current_node:      Optional[int]               = None
    visited_nodes:     Tuple[int, ...]             = ()
    path:              Tuple[int, ...]             = ()
    comparison:        Optional[Tuple[int, int]]   = None
    highlighted_nodes: Tuple[int, ...]             = ()


# ---------------------------------------------------------------------------
# Serialisation helper
# ---------------------------------------------------------------------------
def _plain(value: Any) -> Any:
    """Convert a step field to JSON-friendly primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and value == float("inf"):
        return None
    if isinstance(value, (tuple, list)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    return value

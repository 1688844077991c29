"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, generate_steps

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, family, fn, pseudocode, inputs, …),
        …
    }

Each `fn` is the ONE canonical generator for its algorithm.  The same
generator feeds both paths:

    generate_steps(key, **inputs)   → list(gen)            (replay trace)
    engine.executor.execute(...)    → iterate gen, await hooks per op

so the trace and the interactive run can never disagree.  Adding an
algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple

from algorithms.step import Step, StepKind

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort    import bubble_sort,    PSEUDOCODE as _bubble_pc
from algorithms.insertion_sort import insertion_sort, PSEUDOCODE as _insertion_pc
from algorithms.selection_sort import selection_sort, PSEUDOCODE as _selection_pc
from algorithms.quick_sort     import quick_sort,     PSEUDOCODE as _quick_pc
from algorithms.merge_sort     import merge_sort,     PSEUDOCODE as _merge_pc
from algorithms.linear_search  import linear_search,  PSEUDOCODE as _linear_pc
from algorithms.binary_search  import binary_search,  PSEUDOCODE as _binary_pc
from algorithms.bfs            import bfs,            PSEUDOCODE as _bfs_pc
from algorithms.dfs            import dfs,            PSEUDOCODE as _dfs_pc
from algorithms.dijkstra       import dijkstra,       PSEUDOCODE as _dij_pc
from algorithms.bst            import (
    bst_insert, bst_delete, bst_search,
    INSERT_PSEUDOCODE, DELETE_PSEUDOCODE, SEARCH_PSEUDOCODE,
)
from algorithms.traversals     import (
    inorder, preorder, postorder, levelorder,
    INORDER_PSEUDOCODE, PREORDER_PSEUDOCODE, POSTORDER_PSEUDOCODE, LEVELORDER_PSEUDOCODE,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bubble"
    label:            str                    # human label, e.g. "Bubble Sort"
    family:           StepKind               # which Step variant the generator yields
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    inputs:           Tuple[str, ...]        # keyword inputs the generator takes
    requires_sorted:  bool     = False       # precondition: array must be sorted
    stable:           Optional[bool] = None  # sorting only
    complexity_time:  str      = ""          # e.g. "O(n²)"
    complexity_space: str      = ""          # e.g. "O(1)"
    description:      str      = ""          # one-liner for the UI card
    tags:             List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family.value,
            "pseudocode":       list(self.pseudocode),
            "inputs":           list(self.inputs),
            "requires_sorted":  self.requires_sorted,
            "stable":           self.stable,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "tags":             list(self.tags),
        }


_ARRAY        = ("array",)
_ARRAY_TARGET = ("array", "target")
_GRAPH        = ("graph", "start")
_GRAPH_PATH   = ("graph", "start", "end")
_TREE         = ("tree",)
_TREE_VALUE   = ("tree", "value")


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- sorting ----------------------------------------------------------
    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", family=StepKind.SORT, fn=bubble_sort,
        pseudocode=_bubble_pc, inputs=_ARRAY, stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs; the largest element bubbles to the end each pass.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", family=StepKind.SORT, fn=insertion_sort,
        pseudocode=_insertion_pc, inputs=_ARRAY, stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix, shifting larger elements right to open a slot for each new key.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", family=StepKind.SORT, fn=selection_sort,
        pseudocode=_selection_pc, inputs=_ARRAY, stable=False,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted part and swaps it to the front.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", family=StepKind.SORT, fn=quick_sort,
        pseudocode=_quick_pc, inputs=_ARRAY, stable=False,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Partitions around the last element (Lomuto), then sorts left and right partitions.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", family=StepKind.SORT, fn=merge_sort,
        pseudocode=_merge_pc, inputs=_ARRAY, stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Sorts both halves recursively and merges them, taking the left element on ties.",
    ),

    # -- searching --------------------------------------------------------
    "linear": AlgoInfo(
        key="linear", label="Linear Search", family=StepKind.SEARCH, fn=linear_search,
        pseudocode=_linear_pc, inputs=_ARRAY_TARGET,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks every element left to right until the target turns up.",
    ),

    "binary": AlgoInfo(
        key="binary", label="Binary Search", family=StepKind.SEARCH, fn=binary_search,
        pseudocode=_binary_pc, inputs=_ARRAY_TARGET, requires_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves the search interval around the middle element. Needs sorted input.",
    ),

    # -- graph ------------------------------------------------------------
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", family=StepKind.GRAPH, fn=bfs,
        pseudocode=_bfs_pc, inputs=_GRAPH,
        complexity_time="O(V + E)", complexity_space="O(V)",
        tags=["unweighted", "traversal"],
        description="Explores layer-by-layer from the start node using a FIFO queue.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", family=StepKind.GRAPH, fn=dfs,
        pseudocode=_dfs_pc, inputs=_GRAPH,
        complexity_time="O(V + E)", complexity_space="O(V)",
        tags=["unweighted", "traversal"],
        description="Dives deep before backtracking, using an explicit stack.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", family=StepKind.GRAPH, fn=dijkstra,
        pseudocode=_dij_pc, inputs=_GRAPH_PATH,
        complexity_time="O(V² log V)", complexity_space="O(V)",
        tags=["weighted", "shortest-path"],
        description="Greedily expands the closest node. Optimal for non-negative weights.",
    ),

    # -- tree -------------------------------------------------------------
    "bst_insert": AlgoInfo(
        key="bst_insert", label="BST Insert", family=StepKind.TREE, fn=bst_insert,
        pseudocode=INSERT_PSEUDOCODE, inputs=_TREE_VALUE,
        complexity_time="O(h)", complexity_space="O(1)",
        description="Walks down by comparison and attaches the value as a new leaf.",
    ),

    "bst_delete": AlgoInfo(
        key="bst_delete", label="BST Delete", family=StepKind.TREE, fn=bst_delete,
        pseudocode=DELETE_PSEUDOCODE, inputs=_TREE_VALUE,
        complexity_time="O(h)", complexity_space="O(h)",
        description="Removes a leaf, splices a one-child node, or copies in the in-order successor.",
    ),

    "bst_search": AlgoInfo(
        key="bst_search", label="BST Search", family=StepKind.TREE, fn=bst_search,
        pseudocode=SEARCH_PSEUDOCODE, inputs=_TREE_VALUE,
        complexity_time="O(h)", complexity_space="O(1)",
        description="Follows left/right by comparison until the value or a null link.",
    ),

    "inorder": AlgoInfo(
        key="inorder", label="In-order Traversal", family=StepKind.TREE, fn=inorder,
        pseudocode=INORDER_PSEUDOCODE, inputs=_TREE,
        complexity_time="O(n)", complexity_space="O(h)",
        description="Left subtree, node, right subtree. Yields BST values in sorted order.",
    ),

    "preorder": AlgoInfo(
        key="preorder", label="Pre-order Traversal", family=StepKind.TREE, fn=preorder,
        pseudocode=PREORDER_PSEUDOCODE, inputs=_TREE,
        complexity_time="O(n)", complexity_space="O(h)",
        description="Node, left subtree, right subtree.",
    ),

    "postorder": AlgoInfo(
        key="postorder", label="Post-order Traversal", family=StepKind.TREE, fn=postorder,
        pseudocode=POSTORDER_PSEUDOCODE, inputs=_TREE,
        complexity_time="O(n)", complexity_space="O(h)",
        description="Left subtree, right subtree, node.",
    ),

    "levelorder": AlgoInfo(
        key="levelorder", label="Level-order Traversal", family=StepKind.TREE, fn=levelorder,
        pseudocode=LEVELORDER_PSEUDOCODE, inputs=_TREE,
        complexity_time="O(n)", complexity_space="O(w)",
        description="Visits the tree level by level with a FIFO queue.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str) -> AlgoInfo:
    """Return AlgoInfo by key; unknown keys raise ValueError."""
    info = REGISTRY.get(key)
    if info is None:
        raise ValueError(f"Unknown algorithm '{key}'. Choose one of: {', '.join(REGISTRY)}")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: StepKind) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family is family]


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------
def make_generator(key: str, **inputs) -> Generator[Step, None, Any]:
    """
    Instantiate the canonical generator for `key`.  Only the inputs the
    algorithm declares are passed through; extras are ignored so one input
    bundle can be reused across algorithms.
    """
    info = require_algorithm(key)
    missing = [name for name in info.inputs if name not in inputs]
    if missing:
        raise ValueError(f"{info.label} needs input(s): {', '.join(missing)}")
    return info.fn(**{name: inputs[name] for name in info.inputs})


def run_algorithm(key: str, **inputs) -> Tuple[Any, List[Step]]:
    """Run to completion; return (result, steps)."""
    gen = make_generator(key, **inputs)
    steps: List[Step] = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return stop.value, steps


def generate_steps(key: str, **inputs) -> List[Step]:
    """The full, ordered step trace for one run."""
    return run_algorithm(key, **inputs)[1]


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------
def fix_precondition(key: str, inputs: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[str]]:
    """
    Check the algorithm's input requirement.  Returns (inputs, None) when it
    holds, otherwise (corrected copy of inputs, message describing the fix).
    Only `requires_sorted` exists today: the array is sorted ascending.
    """
    info = require_algorithm(key)
    array = inputs.get("array")
    if info.requires_sorted and array is not None:
        values = list(array)
        if any(values[k] > values[k + 1] for k in range(len(values) - 1)):
            fixed = dict(inputs)
            fixed["array"] = sorted(values)
            return fixed, f"Array sorted for {info.label.lower()}"
    return inputs, None


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "make_generator",
    "run_algorithm",
    "generate_steps",
    "fix_precondition",
]

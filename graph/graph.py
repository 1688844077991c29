"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for the graph.  Graph algorithms read adjacency
lists from this object; the UI reads node positions from it.

Responsibilities:
  1. Node / edge registration                 (add_node / add_edge)
  2. Adjacency queries                        (neighbours, weight)
  3. Graph-generation factory methods         (random, grid)
  4. Import from adjacency-list text / dict   (text → graph)
  5. Serialisation round-trip                 (to_dict / from_dict)
  6. Immutable snapshots for algorithm steps  (adjacency_snapshot)

Design decisions:
  - Node ids are ints, matching the adjacency-list format
    `0:1,2;1:0,3;…` the visualizer accepts.
  - `_adj[node] → [neighbour, …]` keeps the order entries were given in.
    Traversal order is defined by that order, so imports store it verbatim
    and never add reverse entries.  `directed` only decides whether edge
    weights are looked up one way or both ways.
  - Unknown nodes have no neighbours; queries never raise for them.
"""

import math
import random
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from graph.node import Node
from graph.edge import Edge


class GraphFormatError(ValueError):
    """Raised when adjacency-list text cannot be parsed."""


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}
        edges    : {edge_key: Edge}  (see Edge.key)
        directed : bool – graph-level directedness
        _adj     : {node_id: [neighbour_id, …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[int, Node]        = {}
        self.edges:    Dict[object, Edge]     = {}
        self.directed: bool                   = directed
        self._adj:     Dict[int, List[int]]   = {}

    # ==================================================================
    # NODES & EDGES
    # ==================================================================
    def add_node(self, node_id: int, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> Node:
        """Register a node (no-op returning the existing one if present)."""
        if node_id in self.nodes:
            return self.nodes[node_id]
        node = Node(node_id, x=x, y=y, label=label)
        self.nodes[node_id] = node
        self._adj.setdefault(node_id, [])
        return node

    def add_edge(self, source: int, target: int, weight: float = 1.0) -> Edge:
        """Add an edge (both directions for undirected graphs)."""
        self._link(source, target, weight)
        if not self.directed:
            self._append(target, source)
        return self.edges[self._key(source, target)]

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> List[int]:
        """Neighbours in stored order; [] for unknown nodes."""
        return list(self._adj.get(node_id, []))

    def weight(self, source: int, target: int) -> float:
        edge = self.edges.get(self._key(source, target))
        return edge.weight if edge else 1.0

    def degree(self, node_id: int) -> int:
        return len(self._adj.get(node_id, []))

    def adjacency(self) -> Dict[int, List[int]]:
        """Mutable copy of the adjacency lists."""
        return {n: list(nbrs) for n, nbrs in self._adj.items()}

    def adjacency_snapshot(self) -> Dict[int, Tuple[int, ...]]:
        """Read-only style copy used inside steps."""
        return {n: tuple(nbrs) for n, nbrs in self._adj.items()}

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed":  self.directed,
            "nodes":     [n.to_dict() for n in self.nodes.values()],
            "edges":     [e.to_dict() for e in self.edges.values()],
            "adjacency": {str(n): list(nbrs) for n, nbrs in self._adj.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=data.get("directed", False))
        for nd in data.get("nodes", []):
            node = Node.from_dict(nd)
            g.add_node(node.id, node.x, node.y, node.label)
        for ed in data.get("edges", []):
            edge = Edge.from_dict(ed)
            g.edges[edge.key()] = edge
        for n, nbrs in data.get("adjacency", {}).items():
            g._adj[int(n)] = [int(v) for v in nbrs]
        return g

    # ==================================================================
    # IMPORT
    # ==================================================================
    @classmethod
    def coerce(cls, graph) -> "Graph":
        """Accept a Graph or a plain {node: [neighbours]} mapping."""
        if isinstance(graph, Graph):
            return graph
        if isinstance(graph, Mapping):
            return cls.from_adjacency(graph)
        raise TypeError(f"Expected Graph or adjacency mapping, got {type(graph).__name__}")

    @classmethod
    def from_adjacency(
        cls,
        adjacency: Mapping[int, Iterable[int]],
        weights: Optional[Mapping[Tuple[int, int], float]] = None,
        directed: bool = False,
    ) -> "Graph":
        """
        Build from {node: [neighbours]}.  Entries are stored exactly as
        given: a node listed only as a neighbour has no neighbours of its
        own, and no reverse entries are added.  For undirected graphs the
        weight of a→b also answers b→a.
        """
        g = cls(directed=directed)
        weights = weights or {}

        for node in adjacency:
            g.add_node(int(node))
        for nbrs in adjacency.values():
            for nbr in nbrs or ():
                g.add_node(int(nbr))

        for node, nbrs in adjacency.items():
            for nbr in nbrs or ():
                a, b = int(node), int(nbr)
                w = weights.get((a, b), weights.get((b, a), 1.0))
                g._adj[a].append(b)
                g._register(a, b, w)

        g._layout_circle()
        return g

    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse adjacency-list text.

        Supported formats (entries separated by ';' or newlines):
            0:1,2;1:0,3;2:0,4       → node 0 connects to 1 and 2, …
            0: 1 2                  → whitespace also separates neighbours
            0:1(4),2(7)             → neighbour(weight)
            0 -> 1, 2               → alternate arrow syntax
            # comment lines are skipped

        Raises:
            GraphFormatError on entries without a separator or with
            non-integer node ids / non-numeric weights.
        """
        adjacency: Dict[int, List[int]] = {}
        weights: Dict[Tuple[int, int], float] = {}

        for entry in text.replace("\n", ";").split(";"):
            entry = entry.strip()
            if not entry or entry.startswith("#"):
                continue

            if ":" in entry:
                head, tail = entry.split(":", 1)
            elif "->" in entry:
                head, tail = entry.split("->", 1)
            elif "→" in entry:
                head, tail = entry.split("→", 1)
            else:
                raise GraphFormatError(f"Malformed graph entry '{entry}' (expected 'node:neighbour,…')")

            src = _parse_node_id(head)
            adjacency.setdefault(src, [])

            for token in tail.replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt_raw, w_raw = token[:-1].split("(", 1)
                    try:
                        w = float(w_raw)
                    except ValueError:
                        raise GraphFormatError(f'"{w_raw}" is not a valid edge weight') from None
                    tgt = _parse_node_id(tgt_raw)
                    weights[(src, tgt)] = w
                else:
                    tgt = _parse_node_id(token)
                adjacency[src].append(tgt)

        return cls.from_adjacency(adjacency, weights, directed=directed)

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        node_count: int = 8,
        edge_probability: float = 0.4,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Erdős–Rényi style random undirected graph laid out on a circle.
        Each pair (i, j), i < j, is joined with probability
        `edge_probability` and a random integer weight.
        """
        rng = random.Random(seed)
        g = cls()
        for i in range(node_count):
            g.add_node(i)
        for i in range(node_count):
            for j in range(i + 1, node_count):
                if rng.random() < edge_probability:
                    g.add_edge(i, j, weight=rng.randint(*weight_range))
        g._layout_circle()
        return g

    @classmethod
    def generate_grid(cls, rows: int = 4, cols: int = 4, canvas_w: float = 500, canvas_h: float = 500) -> "Graph":
        """4-connected grid; node id = row * cols + col, every weight 1."""
        g = cls()
        cell_w, cell_h = canvas_w / max(cols, 1), canvas_h / max(rows, 1)
        for r in range(rows):
            for c in range(cols):
                g.add_node(r * cols + c, x=c * cell_w + cell_w / 2, y=r * cell_h + cell_h / 2)
        for r in range(rows):
            for c in range(cols):
                nid = r * cols + c
                if c < cols - 1:
                    g.add_edge(nid, nid + 1)
                if r < rows - 1:
                    g.add_edge(nid, nid + cols)
        return g

    # ==================================================================
    # Internal
    # ==================================================================
    def _key(self, a: int, b: int):
        return (a, b) if self.directed else frozenset((a, b))

    def _append(self, a: int, b: int) -> None:
        nbrs = self._adj.setdefault(a, [])
        if b not in nbrs:
            nbrs.append(b)

    def _link(self, a: int, b: int, weight: float = 1.0) -> None:
        self.add_node(a)
        self.add_node(b)
        self._append(a, b)
        self._register(a, b, weight)

    def _register(self, a: int, b: int, weight: float) -> None:
        key = self._key(a, b)
        if key not in self.edges:
            self.edges[key] = Edge(a, b, weight=weight, directed=self.directed)
        elif weight != 1.0:
            self.edges[key].weight = weight

    def _layout_circle(self, canvas_w: float = 800, canvas_h: float = 500) -> None:
        n = len(self.nodes)
        if n == 0:
            return
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        for i, node in enumerate(self.nodes.values()):
            angle = 2 * math.pi * i / n
            node.x = cx + radius * math.cos(angle)
            node.y = cy + radius * math.sin(angle)

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count()}, edges={self.edge_count()})"


def _parse_node_id(raw: str) -> int:
    token = raw.strip()
    try:
        return int(token)
    except ValueError:
        raise GraphFormatError(f'"{token}" is not a valid node id') from None

"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over a plain list used as the priority queue:
the list is re-sorted by distance on every iteration and the front entry
popped (O(n log n) per pop is fine at visualizer sizes).

Yields a Step at:
  1. Initialise distances / enqueue start
  2. Pop minimum-distance node  →  CURRENT, VISIT op
  3. Stale entry for an already-finalised node  →  skip
  4. Successful relaxation  →  update distance & predecessor
  5. Target popped  →  path found, reconstruct (FOUND op)
  6. Queue empty  →  no path

Relaxation only updates on a *strictly* shorter distance.

Correctness note: Dijkstra requires non-negative weights.
"""

from typing import Dict, Generator, List, Mapping, Optional, Tuple, Union

from graph import Graph
from algorithms.step import GraphStep, found, visit


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start, end):",            # 0
    "    dist ← {v: ∞ for v in V}; dist[start] ← 0", # 1
    "    prev ← {v: None for v in V}",             # 2
    "    pq ← [(start, 0)]",                       # 3
    "    while pq is not empty:",                   # 4
    "        sort pq by distance",                 # 5
    "        (node, d) ← pq.pop_front()",          # 6
    "        if node in visited: continue",        # 7
    "        visited.add(node)",                   # 8
    "        if node == end: return path",         # 9
    "        for (neighbour, w) in adj(node):",    # 10
    "            alt ← dist[node] + w",            # 11
    "            if alt < dist[neighbour]:",       # 12
    "                dist[neighbour] ← alt",       # 13
    "                prev[neighbour] ← node",      # 14
    "                pq.push((neighbour, alt))",   # 15
    "    return NO PATH",                          # 16
]

INF = float("inf")


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    graph: Union[Graph, Mapping],
    start: int,
    end: int,
) -> Generator[GraphStep, None, List[int]]:
    """
    Returns (via StopIteration.value) the shortest path start → end as a
    list of node ids, or [] when `end` is unreachable.
    """
    g        = Graph.coerce(graph)
    snapshot = g.adjacency_snapshot()

    dist:    Dict[int, float]         = {n: INF for n in g.node_ids()}
    prev:    Dict[int, Optional[int]] = {n: None for n in g.node_ids()}
    dist[start] = 0.0
    prev.setdefault(start, None)
    pq:      List[Tuple[int, float]]  = [(start, 0.0)]
    visited: List[int]                = []

    def frame(description, code_line, current=None, path=(), ops=()) -> GraphStep:
        return GraphStep(
            graph=snapshot,
            visited=tuple(visited),
            current=current,
            priority_queue=tuple(pq),
            distances=dict(dist),
            previous=dict(prev),
            path=tuple(path),
            description=description,
            code_line=code_line,
            ops=ops,
        )

    yield frame(f"Start Dijkstra's algorithm from node {start}.", 1, current=start)

    while pq:
        pq.sort(key=lambda entry: entry[1])
        node, d = pq.pop(0)

        if node in visited:
            yield frame(f"Node {node} (distance {_fmt(d)}) is already finalised, skipping stale entry.", 7, current=node)
            continue

        visited.append(node)
        yield frame(
            f"Visiting node {node} with current distance {_fmt(d)}.",
            8, current=node, path=_path(prev, start, node), ops=(visit(node),),
        )

        if node == end:
            route = _path(prev, start, end)
            yield frame(
                f"Found shortest path to node {end} with distance {_fmt(dist[end])}: "
                f"{' → '.join(str(n) for n in route)}.",
                9, path=route, ops=(found(end),),
            )
            return route

        for nbr in g.neighbours(node):
            if nbr in visited:
                continue
            w   = g.weight(node, nbr)
            alt = dist[node] + w
            if alt < dist.get(nbr, INF):
                dist[nbr] = alt
                prev[nbr] = node
                pq.append((nbr, alt))
                yield frame(
                    f"Updated distance to node {nbr} via {node}: {_fmt(alt)}.",
                    13, current=nbr, path=_path(prev, start, nbr),
                )

    yield frame(f"No path found from node {start} to node {end}.", 16)
    return []


# ---------------------------------------------------------------------------
def _path(prev: Dict[int, Optional[int]], start: int, end: int) -> List[int]:
    """Walk predecessors back from `end`; [] if the chain never reaches `start`."""
    path: List[int] = []
    cur: Optional[int] = end
    while cur is not None:
        path.append(cur)
        if cur == start:
            path.reverse()
            return path
        cur = prev.get(cur)
    return []


def _fmt(value: float) -> str:
    if value == INF:
        return "∞"
    return str(int(value)) if float(value).is_integer() else str(value)

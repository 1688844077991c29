"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS traversal.  Yields a GraphStep at every meaningful event:
  1. Start: source enqueued and marked visited
  2. Dequeue a node  →  it becomes CURRENT
  3. Discover an unseen neighbour  →  mark visited, enqueue (VISIT op)
  4. Final step  →  every node reachable from the source is visited

Nodes are marked visited when they are *enqueued*, so no node is ever
queued twice.  Neighbours are examined in stored adjacency order.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from collections import deque
from typing import Generator, List, Union, Mapping

from graph import Graph
from algorithms.step import GraphStep, visit


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = code_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "queue ← [start]; visited ← {start}",        # 0
    "while queue is not empty:",                 # 1
    "    node ← queue.dequeue()",                # 2
    "    for neighbour in adj(node):",           # 3
    "        if neighbour not in visited:",      # 4
    "            visited.add(neighbour)",        # 5
    "            queue.enqueue(neighbour)",      # 6
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(
    graph: Union[Graph, Mapping],
    start: int,
) -> Generator[GraphStep, None, List[int]]:
    """
    Args:
        graph : Graph, or a plain {node: [neighbours]} mapping.
        start : Source node id.

    Returns (via StopIteration.value):
        Node ids in the order they were visited.
    """
    g        = Graph.coerce(graph)
    snapshot = g.adjacency_snapshot()
    queue    = deque([start])
    visited: List[int] = [start]

    yield GraphStep(
        graph=snapshot, visited=tuple(visited), queue=tuple(queue),
        description=f"Start BFS from node {start}.",
        code_line=0, ops=(visit(start),),
    )

    while queue:
        node = queue.popleft()
        yield GraphStep(
            graph=snapshot, visited=tuple(visited), queue=tuple(queue), current=node,
            description=f"Visiting node {node}.",
            code_line=2,
        )

        for nbr in g.neighbours(node):
            if nbr in visited:
                continue
            visited.append(nbr)
            queue.append(nbr)
            yield GraphStep(
                graph=snapshot, visited=tuple(visited), queue=tuple(queue), current=nbr,
                description=f"Discovered node {nbr} from node {node}, adding to queue.",
                code_line=6, ops=(visit(nbr),),
            )

    yield GraphStep(
        graph=snapshot, visited=tuple(visited),
        description=f"BFS complete. All reachable nodes from {start} have been visited.",
        code_line=1,
    )
    return visited

"""
dfs.py — Depth-First Search (iterative)
========================================
Explicit stack.  A node is marked visited when it is *popped*, so the same
node may sit on the stack more than once; the stale copy is skipped when
it surfaces.  Neighbours are pushed in reverse so they are popped in
adjacency order, matching recursive DFS left-to-right visitation.
"""

from typing import Generator, List, Union, Mapping

from graph import Graph
from algorithms.step import GraphStep, visit


PSEUDOCODE: List[str] = [
    "stack ← [start]; visited ← {}",             # 0
    "while stack is not empty:",                 # 1
    "    node ← stack.pop()",                    # 2
    "    if node in visited: continue",          # 3
    "    visited.add(node)",                     # 4
    "    for neighbour in reversed(adj(node)):", # 5
    "        if neighbour not in visited:",      # 6
    "            stack.push(neighbour)",         # 7
]


def dfs(
    graph: Union[Graph, Mapping],
    start: int,
) -> Generator[GraphStep, None, List[int]]:
    g        = Graph.coerce(graph)
    snapshot = g.adjacency_snapshot()
    stack:   List[int] = [start]
    visited: List[int] = []

    yield GraphStep(
        graph=snapshot, stack=tuple(stack), current=start,
        description=f"Start DFS from node {start}.",
        code_line=0,
    )

    while stack:
        node = stack.pop()

        if node in visited:
            yield GraphStep(
                graph=snapshot, visited=tuple(visited), stack=tuple(stack), current=node,
                description=f"Node {node} was already visited, skipping.",
                code_line=3,
            )
            continue

        visited.append(node)
        yield GraphStep(
            graph=snapshot, visited=tuple(visited), stack=tuple(stack), current=node,
            description=f"Visiting node {node}.",
            code_line=4, ops=(visit(node),),
        )

        for nbr in reversed(g.neighbours(node)):
            if nbr in visited:
                continue
            stack.append(nbr)
            yield GraphStep(
                graph=snapshot, visited=tuple(visited), stack=tuple(stack), current=nbr,
                description=f"Discovered node {nbr} from node {node}, adding to stack.",
                code_line=7,
            )

    yield GraphStep(
        graph=snapshot, visited=tuple(visited),
        description=f"DFS complete. All reachable nodes from {start} have been visited.",
        code_line=1,
    )
    return visited

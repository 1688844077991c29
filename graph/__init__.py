"""
graph/
-----
Core graph data layer.  Public API:

    from graph import Graph, Node, Edge, GraphFormatError
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph, GraphFormatError

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphFormatError",
]

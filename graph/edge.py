"""
edge.py — Weighted Edge
=======================
Connects two node ids.  Only Dijkstra reads the weight; BFS / DFS walk
the adjacency lists and ignore it.
"""


class Edge:
    """
    Attributes:
        source   : Id of the tail node.
        target   : Id of the head node.
        weight   : Numeric cost (default 1).
        directed : If False the edge can be walked both ways.
    """

    __slots__ = ("source", "target", "weight", "directed")

    def __init__(self, source: int, target: int, weight: float = 1.0, directed: bool = False):
        self.source:   int   = source
        self.target:   int   = target
        self.weight:   float = weight
        self.directed: bool  = directed

    def key(self):
        """Lookup key: ordered pair if directed, unordered otherwise."""
        if self.directed:
            return (self.source, self.target)
        return frozenset((self.source, self.target))

    def to_dict(self) -> dict:
        return {
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=int(data["source"]),
            target=int(data["target"]),
            weight=data.get("weight", 1.0),
            directed=data.get("directed", False),
        )

    def __repr__(self) -> str:
        arrow = "→" if self.directed else "—"
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

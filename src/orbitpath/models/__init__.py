from .point import Point3D
from .graph import Connection, Graph, Node
from .search import PathResult, SearchState

__all__ = [
    "Point3D",
    "Connection",
    "Graph",
    "Node",
    "PathResult",
    "SearchState",
]

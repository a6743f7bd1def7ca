"""Trail graph construction, simplification and path extraction.

This subpackage builds an in-memory graph from stage polylines and stop
areas, simplifies it, and runs shortest-path searches on top of it.
"""

from .builder import GraphBuilder
from .dijkstra import ShortestPaths, shortest_distance, shortest_paths
from .extractor import PathExtractor
from .geometry import distance, nearest
from .model import Edge, Graph, Node, StopAreaRef, TrailPoint
from .simplifier import simplify

__all__ = [
    "Graph",
    "Node",
    "Edge",
    "TrailPoint",
    "StopAreaRef",
    "GraphBuilder",
    "simplify",
    "PathExtractor",
    "ShortestPaths",
    "shortest_paths",
    "shortest_distance",
    "distance",
    "nearest",
]

"""Single-source shortest paths using Dijkstra's algorithm.

The trail graph is undirected with non-negative weights, so one run
from a source yields the shortest walking distance to every reachable
node together with a predecessor map for rebuilding routes.
"""

import heapq
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .model import Graph


@dataclass
class ShortestPaths:
    """Result of a single-source search.

    Attributes:
        source: Node index the search started from
        distances: Shortest distance to every reachable node
        previous: Predecessor of each reached node on its shortest path
    """

    source: int
    distances: Dict[int, float] = field(default_factory=dict)
    previous: Dict[int, int] = field(default_factory=dict)

    def distance_to(self, target: int) -> float:
        return self.distances.get(target, float("inf"))

    def path_to(self, target: int) -> List[int]:
        """Node sequence from the source to ``target`` (inclusive).

        Returns an empty list if ``target`` was not reached.
        """
        if target not in self.distances:
            return []

        path: List[int] = []
        current = target
        while current != self.source:
            path.append(current)
            current = self.previous[current]
        path.append(self.source)

        path.reverse()
        return path


def shortest_paths(graph: Graph, source: int) -> ShortestPaths:
    """Run Dijkstra from ``source`` over the whole graph.

    Raises:
        NodeNotFoundError: If ``source`` is not in the graph.
    """
    graph.node(source)

    result = ShortestPaths(source=source)
    result.distances[source] = 0.0

    heap: List[Tuple[float, int]] = [(0.0, source)]
    visited = set()

    while heap:
        current_distance, u = heapq.heappop(heap)

        if u in visited:
            continue

        visited.add(u)

        for edge in graph.edges_of(u):
            v = edge.other(u)
            new_distance = current_distance + edge.weight
            if new_distance < result.distances.get(v, float("inf")):
                result.distances[v] = new_distance
                result.previous[v] = u
                heapq.heappush(heap, (new_distance, v))

    return result


def shortest_distance(graph: Graph, start: int, end: int) -> float:
    """Shortest distance between two nodes, ``inf`` if disconnected."""
    graph.node(end)
    return shortest_paths(graph, start).distance_to(end)

"""In-memory trail graph.

Nodes live in an arena and are addressed by integer index; edges are
stored as index pairs so that nodes never hold references to each
other. The graph is undirected and allows parallel edges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set, Union

from ..domain.errors import GraphError, NodeNotFoundError
from ..domain.models import Position


@dataclass(frozen=True, slots=True)
class TrailPoint:
    """A GPS track point on a stage.

    Attributes:
        stage: Stage label, e.g. ``"5_1"``
        along: Cumulative distance from the start of the stage
    """

    stage: str
    along: float


@dataclass(frozen=True, slots=True)
class StopAreaRef:
    """A stop area attached to the graph."""

    stop_area_id: int


NodeKind = Union[TrailPoint, StopAreaRef]


@dataclass(frozen=True, slots=True)
class Node:
    index: int
    position: Position
    kind: NodeKind

    @property
    def is_trail_point(self) -> bool:
        return isinstance(self.kind, TrailPoint)

    @property
    def is_stop_area(self) -> bool:
        return isinstance(self.kind, StopAreaRef)

    @property
    def stage(self) -> str:
        """Stage label of a trail point; empty for stop areas."""
        return self.kind.stage if isinstance(self.kind, TrailPoint) else ""


@dataclass(frozen=True, slots=True)
class Edge:
    index: int
    a: int
    b: int
    weight: float

    def other(self, node: int) -> int:
        """Return the endpoint opposite ``node``."""
        return self.b if node == self.a else self.a


@dataclass
class Graph:
    """Arena of nodes and undirected weighted edges."""

    _nodes: Dict[int, Node] = field(default_factory=dict, repr=False)
    _edges: Dict[int, Edge] = field(default_factory=dict, repr=False)
    _adjacency: Dict[int, Set[int]] = field(default_factory=dict, repr=False)
    _next_node: int = field(default=0, repr=False)
    _next_edge: int = field(default=0, repr=False)

    def _add_node(self, position: Position, kind: NodeKind) -> int:
        index = self._next_node
        self._next_node += 1
        self._nodes[index] = Node(index, (float(position[0]), float(position[1])), kind)
        self._adjacency[index] = set()
        return index

    def add_trail_point(self, position: Position, stage: str, along: float) -> int:
        return self._add_node(position, TrailPoint(stage, along))

    def add_stop_area(self, position: Position, stop_area_id: int) -> int:
        return self._add_node(position, StopAreaRef(stop_area_id))

    def add_edge(self, a: int, b: int, weight: float) -> int:
        """Connect two nodes and return the new edge index.

        Raises:
            NodeNotFoundError: If either endpoint is unknown.
            GraphError: If the weight is negative or the edge is a loop.
        """
        self.node(a)
        self.node(b)
        if a == b:
            raise GraphError(f"Refusing self-loop on node {a}")
        if weight < 0:
            raise GraphError(f"Negative edge weight {weight} between {a} and {b}")
        index = self._next_edge
        self._next_edge += 1
        self._edges[index] = Edge(index, a, b, float(weight))
        self._adjacency[a].add(index)
        self._adjacency[b].add(index)
        return index

    def remove_edge(self, index: int) -> None:
        edge = self._edges.pop(index)
        self._adjacency[edge.a].discard(index)
        self._adjacency[edge.b].discard(index)

    def remove_node(self, index: int) -> None:
        """Remove a node together with all its edges."""
        for edge_index in list(self._adjacency.get(index, ())):
            self.remove_edge(edge_index)
        self._nodes.pop(index, None)
        self._adjacency.pop(index, None)

    def node(self, index: int) -> Node:
        try:
            return self._nodes[index]
        except KeyError:
            raise NodeNotFoundError(f"No node {index} in graph", node=index)

    def __contains__(self, index: object) -> bool:
        return index in self._nodes

    def nodes(self) -> Iterator[Node]:
        """Iterate nodes in creation order."""
        return iter(list(self._nodes.values()))

    def edges(self) -> Iterator[Edge]:
        return iter(list(self._edges.values()))

    def edge(self, index: int) -> Edge:
        return self._edges[index]

    def edges_of(self, node: int) -> List[Edge]:
        self.node(node)
        return [self._edges[i] for i in sorted(self._adjacency[node])]

    def neighbors(self, node: int) -> Set[int]:
        """Distinct neighbouring node indices."""
        return {edge.other(node) for edge in self.edges_of(node)}

    def degree(self, node: int) -> int:
        """Number of edges incident to ``node``."""
        self.node(node)
        return len(self._adjacency[node])

    def trail_points(self) -> List[Node]:
        return [n for n in self._nodes.values() if n.is_trail_point]

    def stop_area_nodes(self) -> List[Node]:
        return [n for n in self._nodes.values() if n.is_stop_area]

    def remove_isolated_nodes(self) -> int:
        """Drop every node without edges; return how many were dropped."""
        isolated = [i for i, adj in self._adjacency.items() if not adj]
        for index in isolated:
            self.remove_node(index)
        return len(isolated)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

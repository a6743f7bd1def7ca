import math

import pytest

from trailhop.domain.errors import NodeNotFoundError
from trailhop.graph.dijkstra import shortest_distance, shortest_paths
from trailhop.graph.model import Graph


def _graph(n, edges):
    graph = Graph()
    nodes = [graph.add_trail_point((i, 0), "1_1", 0.0) for i in range(n)]
    for a, b, w in edges:
        graph.add_edge(nodes[a], nodes[b], w)
    return graph, nodes


def test_dijkstra_finds_direct_edge():
    graph, (a, b) = _graph(2, [(0, 1, 10.0)])

    result = shortest_paths(graph, a)

    assert result.path_to(b) == [a, b]
    assert result.distance_to(b) == 10.0


def test_dijkstra_chooses_shortest_path():
    # A can reach C directly, but A->B->C is shorter
    graph, (a, b, c) = _graph(3, [(0, 1, 3.0), (0, 2, 10.0), (1, 2, 4.0)])

    result = shortest_paths(graph, a)

    assert result.path_to(c) == [a, b, c]
    assert result.distance_to(c) == 7.0


def test_dijkstra_uses_cheapest_parallel_edge():
    graph, (a, b) = _graph(2, [(0, 1, 9.0), (0, 1, 4.0)])
    assert shortest_distance(graph, a, b) == 4.0


def test_dijkstra_no_path_returns_inf():
    graph, (a, b) = _graph(2, [])

    result = shortest_paths(graph, a)

    assert result.path_to(b) == []
    assert math.isinf(result.distance_to(b))


def test_distances_are_symmetric():
    edges = [(0, 1, 2.0), (1, 2, 5.0), (0, 3, 1.0), (3, 2, 9.0), (2, 4, 1.5)]
    graph, nodes = _graph(5, edges)

    for a in nodes:
        for b in nodes:
            assert shortest_distance(graph, a, b) == pytest.approx(
                shortest_distance(graph, b, a)
            )


def test_unknown_source_raises():
    graph, _ = _graph(1, [])
    with pytest.raises(NodeNotFoundError):
        shortest_paths(graph, 42)

import math

import pytest

from trailhop.domain.errors import GraphError, NodeNotFoundError
from trailhop.graph.geometry import distance, nearest
from trailhop.graph.model import Graph, StopAreaRef, TrailPoint


def test_distance_is_euclidean():
    assert distance((0.0, 0.0), (3.0, 4.0)) == 5.0
    assert distance((1.0, 1.0), (1.0, 1.0)) == 0.0


def test_nearest_returns_first_minimum():
    candidates = [(10.0, 0.0), (0.0, 2.0), (2.0, 0.0)]
    index, dist = nearest((0.0, 0.0), candidates)
    assert index == 1
    assert dist == pytest.approx(2.0)


def test_nearest_empty_candidates():
    assert nearest((0.0, 0.0), []) is None


def test_node_kinds_are_exclusive():
    graph = Graph()
    trail = graph.add_trail_point((0, 0), "5_1", 0.0)
    stop = graph.add_stop_area((10, 10), 42)

    assert graph.node(trail).kind == TrailPoint("5_1", 0.0)
    assert graph.node(trail).is_trail_point and not graph.node(trail).is_stop_area
    assert graph.node(stop).kind == StopAreaRef(42)
    assert graph.node(stop).stage == ""


def test_parallel_edges_are_distinct():
    graph = Graph()
    a = graph.add_trail_point((0, 0), "1_1", 0.0)
    b = graph.add_trail_point((0, 10), "1_1", 10.0)
    graph.add_edge(a, b, 10.0)
    graph.add_edge(a, b, 12.0)

    assert graph.degree(a) == 2
    assert graph.neighbors(a) == {b}
    assert graph.edge_count == 2


def test_add_edge_rejects_negative_weight_and_unknown_nodes():
    graph = Graph()
    a = graph.add_trail_point((0, 0), "1_1", 0.0)
    b = graph.add_trail_point((0, 1), "1_1", 1.0)

    with pytest.raises(GraphError):
        graph.add_edge(a, b, -1.0)
    with pytest.raises(NodeNotFoundError):
        graph.add_edge(a, 99, 1.0)


def test_remove_isolated_nodes():
    graph = Graph()
    a = graph.add_trail_point((0, 0), "1_1", 0.0)
    b = graph.add_trail_point((0, 1), "1_1", 1.0)
    lonely = graph.add_stop_area((50, 50), 7)
    graph.add_edge(a, b, 1.0)

    assert graph.remove_isolated_nodes() == 1
    assert lonely not in graph
    assert a in graph and b in graph


def test_remove_node_drops_its_edges():
    graph = Graph()
    a = graph.add_trail_point((0, 0), "1_1", 0.0)
    b = graph.add_trail_point((0, 1), "1_1", 1.0)
    graph.add_edge(a, b, 1.0)

    graph.remove_node(a)

    assert graph.edge_count == 0
    assert graph.degree(b) == 0
    assert math.isclose(graph.node(b).position[1], 1.0)

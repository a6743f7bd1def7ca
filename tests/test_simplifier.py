"""Simplification must shrink the graph without changing distances."""

import itertools

import pytest

from trailhop.config import GraphConfig
from trailhop.domain.models import StopArea
from trailhop.graph.builder import GraphBuilder
from trailhop.graph.dijkstra import shortest_paths
from trailhop.graph.model import Graph
from trailhop.graph.simplifier import simplify


def _chain(graph, stage, points):
    nodes = [graph.add_trail_point(p, stage, 0.0) for p in points]
    for a, b in zip(nodes, nodes[1:]):
        pa, pb = graph.node(a).position, graph.node(b).position
        graph.add_edge(a, b, abs(pa[1] - pb[1]) + abs(pa[0] - pb[0]))
    return nodes


def test_interior_chain_collapses_to_single_edge():
    graph = Graph()
    first, *_, last = _chain(graph, "1_1", [(0, 0), (0, 10), (0, 30), (0, 60)])

    report = simplify(graph)

    assert report.collapsed == 2
    assert report.removed_nodes == 2
    assert graph.node_count == 2
    (edge,) = list(graph.edges())
    assert {edge.a, edge.b} == {first, last}
    assert edge.weight == pytest.approx(60.0)


def test_nodes_next_to_other_stages_are_kept():
    graph = Graph()
    a = _chain(graph, "1_1", [(0, 0), (0, 10)])
    b = _chain(graph, "1_2", [(0, 20), (0, 30)])
    graph.add_edge(a[1], b[0], 10.0)

    simplify(graph)

    # a[1] and b[0] each border a different stage, so nothing collapses.
    assert graph.node_count == 4
    assert graph.edge_count == 3


def test_stop_area_attachment_blocks_collapse():
    graph = Graph()
    nodes = _chain(graph, "1_1", [(0, 0), (0, 10), (0, 20)])
    stop = graph.add_stop_area((5, 10), 1)
    graph.add_edge(stop, nodes[1], 5.0)

    report = simplify(graph)

    assert report.collapsed == 0
    assert nodes[1] in graph


def test_unlinked_stop_areas_are_pruned():
    graph = Graph()
    _chain(graph, "1_1", [(0, 0), (0, 10)])
    lonely = graph.add_stop_area((900, 900), 3)

    simplify(graph)

    assert lonely not in graph


def test_distances_between_survivors_are_preserved():
    stages = {
        "1_1": [(0, 0), (0, 400), (0, 900), (50, 1500), (0, 2100)],
        "1_2": [(100, 2100), (400, 2600), (900, 2700), (1500, 2700)],
        "2_1": [(900, 2800), (900, 3500), (950, 4200)],
    }
    stop_areas = {
        1: StopArea(1, "Start", -200, 0),
        2: StopArea(2, "Middle", 400, 2800),
        3: StopArea(3, "End", 1100, 4300),
    }
    graph, _ = GraphBuilder(GraphConfig()).build(stages, stop_areas)
    before = {n.index: shortest_paths(graph, n.index).distances for n in graph.nodes()}

    simplify(graph)

    survivors = [n.index for n in graph.nodes()]
    assert len(survivors) < len(before)
    for a, b in itertools.combinations(survivors, 2):
        after = shortest_paths(graph, a).distance_to(b)
        assert after == pytest.approx(before[a][b])


def test_closed_loop_does_not_collapse_into_nothing():
    graph = Graph()
    nodes = _chain(graph, "3_1", [(0, 0), (0, 10), (10, 10), (10, 0)])
    graph.add_edge(nodes[-1], nodes[0], 10.0)

    simplify(graph)

    assert graph.node_count >= 2
    assert graph.edge_count >= 1
